"""
urlcanon.constants — Encoding tables, query filters and runtime settings.
"""

import os

# Characters that must stay percent-encoded inside a single path segment
RESERVED_PATH_CHARS = frozenset("%/?#")

# Characters that must stay percent-encoded inside a query key or value
RESERVED_QUERY_CHARS = frozenset("%&;=:?#")

# Query keys carrying a server session token, compared case-insensitively
SESSION_KEYS = frozenset({"PHPSESSID", "JSESSIONID"})

# Marker of a session token appended to a path or a query value
SESSION_SUFFIX = ";jsessionid"

# Tracking parameter prefixes, matched case-sensitively.
#   utm    Google Analytics (campaign links and __utm.gif requests)
#   WT.    WebTrends
#   OV*/YSM*  Yahoo! Search Marketing
TRACKING_PARAM_PREFIXES = (
    "utm",
    "WT.",
    "OVKEY", "YSMKEY",
    "OVRAW", "YSMRAW",
    "OVMTC", "YSMMTC",
    "OVADID", "YSMADID",
    "OVKWID", "YSMKWID",
    "OVCAMPGID", "YSMCAMPGID",
    "OVADGRPID", "YSMADGRPID",
)

QUERY_DELIMITER = "&"

ESCAPED_FRAGMENT_PARAM = "_escaped_fragment_"
ESCAPED_FRAGMENT_PREFIX = "!"

DEFAULT_ENCODING = os.environ.get("URLCANON_DEFAULT_ENCODING", "utf-8")

FETCH_SUFFIX_LIST = os.environ.get("URLCANON_FETCH_SUFFIX_LIST", "").lower() in {"1", "true", "yes"}

SITEMAP_TIMEOUT = int(os.environ.get("URLCANON_SITEMAP_TIMEOUT", "30"))

SITEMAP_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; UrlCanonBot/1.0)",
    "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
}
