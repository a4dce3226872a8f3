"""
urlcanon.errors — Exceptions raised while parsing and canonicalizing URLs.
"""


class UrlCanonError(Exception):
    """Base class for every error raised by urlcanon."""


class MalformedUrlError(UrlCanonError, ValueError):
    """The input is not accepted by the URL grammar."""


class OutOfRangeError(UrlCanonError, ValueError):
    """An IPv4 address integer outside 0 .. 2**32 - 1."""


class UnsupportedEncodingError(UrlCanonError, LookupError):
    """The requested character encoding is unknown."""


class UnresolvableHostError(UrlCanonError, OSError):
    """DNS lookup failed or resolved to a loopback address."""
