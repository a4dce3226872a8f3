"""
urlcanon.site — Site helpers over proximity-ordered host keys.

A "site" is a host in proximity order (``uk.co.bbc.news`` for
``news.bbc.co.uk``).  Public suffix knowledge comes from ``tldextract``;
the bundled suffix snapshot is used unless ``URLCANON_FETCH_SUFFIX_LIST``
allows a network refresh.
"""

import logging
from functools import lru_cache

import tldextract

from urlcanon.constants import FETCH_SUFFIX_LIST
from urlcanon.host import ILLEGAL_IPV4, IPv4Address, parse_ipv4_string
from urlcanon.url import URL

logger = logging.getLogger(__name__)

SITE_DELIMITER = "."
DEFAULT_SUB_DOMAIN = "www"


@lru_cache(maxsize=1)
def get_extractor() -> tldextract.TLDExtract:
    if FETCH_SUFFIX_LIST:
        return tldextract.TLDExtract()
    return tldextract.TLDExtract(suffix_list_urls=())


def _reverse(name: str) -> str:
    return SITE_DELIMITER.join(reversed(name.split(SITE_DELIMITER)))


def _registrable_domain(host: str) -> str:
    """``news.bbc.co.uk`` -> ``bbc.co.uk``; empty without a known public suffix."""
    ext = get_extractor()(host)
    if not ext.suffix or not ext.domain:
        return ""
    return f"{ext.domain}.{ext.suffix}"


def site_to_top_level(site: str) -> str:
    """Cut a site down to its registrable domain, still in site order.

    ``uk.co.bbc.subdomain.www`` -> ``uk.co.bbc``.  IPv4 sites and sites
    without a known public suffix come back unchanged.
    """
    if parse_ipv4_string(site) != ILLEGAL_IPV4:
        return site
    registrable = _registrable_domain(_reverse(site))
    if not registrable:
        logger.debug("No public suffix found for site %s", site)
        return site
    return _reverse(registrable)


def parent_site(site: str) -> str:
    """Drop the last label, never going above the site's top level."""
    top_level = site_to_top_level(site)
    if top_level == site:
        return site
    return site.rsplit(SITE_DELIMITER, 1)[0]


def sub_domain(url: URL) -> str:
    """The labels left of the registrable domain of ``url``'s host.

    ``news.germany.google.co.uk`` -> ``news.germany``; hosts without
    sub-domain labels give ``www``; IPv4 hosts give the dotted quad.
    """
    host_name = url.authority.host_name
    if isinstance(host_name, IPv4Address):
        return host_name.as_string()
    ext = get_extractor()(host_name.as_string())
    return ext.subdomain or DEFAULT_SUB_DOMAIN
