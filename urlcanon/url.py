"""
urlcanon.url — Parsed URL with repaired and normalized renderings.

``URL`` parses once on construction and derives every rendering on demand:

- ``repaired_url()``   scheme://authority/path?query#fragment with spaces
  encoded, session ids and tracking parameters removed.
- ``normalized_url()`` proximity-ordered host + re-encoded path + sorted
  query; no scheme, userinfo, port or fragment.  Use it as a dedup key.
- ``uri()``            the original input without its fragment.
"""

import ipaddress
import logging
import socket
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from urlcanon.authority import NO_PORT, Authority
from urlcanon.errors import MalformedUrlError, UnresolvableHostError
from urlcanon.host import build_host_name
from urlcanon.path import Path
from urlcanon.query import Query
from urlcanon.query_factory import build_query

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "#"
QUERY_SEPARATOR = "?"


def _split(url: str) -> tuple:
    """Split ``url`` and validate its port; returns ``(parts, port)``."""
    try:
        # urlsplit drops tab, CR and LF anywhere in the input, so parsed
        # components never carry those control characters
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise MalformedUrlError(f"Cannot parse URL {url!r}: {e}") from e

    if not parts.scheme:
        raise MalformedUrlError(f"URL {url!r} has no scheme")
    if not parts.hostname:
        raise MalformedUrlError(f"URL {url!r} has no host")
    return parts, (NO_PORT if port is None else port)


def _host(parts: SplitResult) -> str:
    """The host as written in the authority; IPv6 literals keep their brackets."""
    if ":" in parts.hostname:
        return f"[{parts.hostname}]"
    return parts.hostname


class URL:
    """A URL split into scheme, authority, path, query and fragment."""

    def __init__(self, url: str):
        self.given_input_url = url
        parts, port = _split(url)

        self.scheme: str = parts.scheme
        user_info = parts.netloc.rpartition("@")[0] if "@" in parts.netloc else None
        self.authority = Authority.from_user_info(build_host_name(_host(parts)), port, user_info)
        self.path = Path.from_string(parts.path)

        without_fragment = url.split(FRAGMENT_SEPARATOR, 1)[0]
        self.raw_query: Optional[str] = parts.query if QUERY_SEPARATOR in without_fragment else None
        self.query: Query = build_query(parts.query)
        self.fragment: Optional[str] = parts.fragment if FRAGMENT_SEPARATOR in url else None

        logger.debug("Parsed %s into scheme=%s authority=%s path=%s",
                     url, self.scheme, self.authority, self.path)

    @classmethod
    def from_parts(cls, parts: SplitResult) -> "URL":
        """Build from an already split URL (``urllib.parse.urlsplit`` result).

        The URL is rebuilt with ``SplitResult.geturl()``, which drops an empty
        ``?`` or ``#``: ``raw_query`` and ``fragment`` then come back ``None``.
        Pass the original string to ``URL()`` when those must survive.
        """
        return cls(parts.geturl())

    def repaired_url(self) -> str:
        fragment = "" if self.fragment is None else FRAGMENT_SEPARATOR + self.fragment
        return (
            f"{self.scheme}://{self.authority.as_string()}"
            f"{self.path.re_encoded().as_string()}"
            f"{self.query.as_string(prefix_question_mark=True)}"
            f"{fragment}"
        )

    def normalized_url(self) -> str:
        return (
            self.authority.optimized_for_proximity_order()
            + self.path.re_encoded().as_string()
            + self.query.as_string(prefix_question_mark=True, sort=True)
        )

    def url_without_fragment(self) -> str:
        return self.given_input_url.split(FRAGMENT_SEPARATOR, 1)[0]

    def uri(self) -> str:
        """The input as given, cut at the first '#' when there is a fragment."""
        if self.fragment is not None:
            return self.url_without_fragment()
        return self.given_input_url

    def resolve_ip(self) -> str:
        """Resolve the host to an IPv4 address; loopback counts as failure."""
        host = self.authority.host_name.as_string().strip("[]")
        try:
            ip = socket.gethostbyname(host)
        except (socket.gaierror, UnicodeError) as e:
            raise UnresolvableHostError(f"Cannot resolve {host}: {e}") from e
        if ipaddress.ip_address(ip).is_loopback:
            raise UnresolvableHostError(f"IP {ip} of {host} is not valid")
        return ip

    def _key(self) -> tuple:
        return (self.given_input_url, self.scheme, self.authority, self.path, self.query, self.fragment)

    def __eq__(self, other):
        if not isinstance(other, URL):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"URL({self.given_input_url!r})"

    def __str__(self):
        return self.given_input_url
