"""
urlcanon — URL canonicalization and repair for crawl deduplication.

Re-exports every public symbol so callers can use
``from urlcanon import URL`` without knowing the module layout.
"""

from urlcanon.errors import (
    UrlCanonError,
    MalformedUrlError,
    OutOfRangeError,
    UnsupportedEncodingError,
    UnresolvableHostError,
)

from urlcanon.constants import (
    RESERVED_PATH_CHARS,
    RESERVED_QUERY_CHARS,
    SESSION_KEYS,
    TRACKING_PARAM_PREFIXES,
    ESCAPED_FRAGMENT_PARAM,
    DEFAULT_ENCODING,
)

from urlcanon.percent import (
    encode,
    decode,
    encode_path_part,
    encode_query_component,
)

from urlcanon.host import (
    ILLEGAL_IPV4,
    MAX_IPV4,
    DomainName,
    IPv4Address,
    HostName,
    parse_ipv4_string,
    build_host_name,
)

from urlcanon.authority import NO_PORT, Authority

from urlcanon.path import Path

from urlcanon.query import Query, QueryKeyValuePair

from urlcanon.query_factory import (
    ParserState,
    tokenize,
    build_query,
    filter_tracking_parameters,
    is_tracking_parameter,
)

from urlcanon.url import URL

from urlcanon.escaped_fragment import (
    encode_fragment,
    encode_fragment_default,
    decode_fragment,
    is_escape_fragmentable_url,
    is_escaped_fragment_url,
    to_escaped_fragment_url,
    from_escaped_fragment_url,
)

from urlcanon.site import (
    site_to_top_level,
    parent_site,
    sub_domain,
)

from urlcanon.dedup import (
    dedup_key,
    url_hash,
    group_duplicates,
    canonicalize_frame,
    dedupe_frame,
)

from urlcanon.sitemap import (
    SITEMAP_NS,
    fetch_xml,
    is_sitemap_index,
    parse_sitemap,
    canonicalize_sitemap,
)
