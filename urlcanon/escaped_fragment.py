"""
urlcanon.escaped_fragment — AJAX crawling: ``#!state`` <-> ``?_escaped_fragment_=state``.

Crawlers that cannot run JavaScript request ``#!`` URLs in their
escaped-fragment form.  The fragment is encoded with a narrower policy than
``urlcanon.percent``: only ``0x00-0x20``, ``#``, ``%``, ``&``, ``+`` and
``0x7F-0xFF`` are escaped (uppercase hex); everything else, including
code points above ``0xFF``, is kept as is.
"""

import codecs
import logging
import re
from urllib.parse import unquote

from urlcanon.constants import (
    DEFAULT_ENCODING,
    ESCAPED_FRAGMENT_PARAM,
    ESCAPED_FRAGMENT_PREFIX,
    QUERY_DELIMITER,
)
from urlcanon.errors import UnsupportedEncodingError
from urlcanon.url import FRAGMENT_SEPARATOR, QUERY_SEPARATOR, URL

logger = logging.getLogger(__name__)

NEEDS_ENCODING = frozenset(
    list(range(0x00, 0x21)) + [0x23, 0x25, 0x26, 0x2B] + list(range(0x7F, 0x100))
)

_ESCAPED_FRAGMENT_PARAM = re.compile(
    rf"(?P<lead>[?&]){re.escape(ESCAPED_FRAGMENT_PARAM)}=(?P<value>[^&]*)(?P<tail>&?)"
)


def _lookup(encoding: str) -> str:
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise UnsupportedEncodingError(encoding) from e


def encode_fragment(text: str, encoding: str) -> str:
    """Escape ``text`` for use as an ``_escaped_fragment_`` value."""
    codec = _lookup(encoding)
    out = []
    for char in text:
        if ord(char) in NEEDS_ENCODING:
            out.append("".join(f"%{byte:02X}" for byte in char.encode(codec, errors="replace")))
        else:
            out.append(char)
    return "".join(out)


def encode_fragment_default(text: str) -> str:
    """Legacy entry point: encode with ``DEFAULT_ENCODING``.

    Falls back to returning ``text`` unchanged when the configured default
    encoding is unknown.
    """
    try:
        return encode_fragment(text, DEFAULT_ENCODING)
    except UnsupportedEncodingError:
        logger.warning("Default encoding %s is not supported, fragment left unencoded",
                       DEFAULT_ENCODING)
        return text


def decode_fragment(text: str, encoding: str = "utf-8") -> str:
    return unquote(text, encoding=_lookup(encoding))


def is_escape_fragmentable_url(url: URL) -> bool:
    """True for ``#!`` URLs."""
    return url.fragment is not None and url.fragment.startswith(ESCAPED_FRAGMENT_PREFIX)


def is_escaped_fragment_url(url: URL) -> bool:
    """True when the query already carries ``_escaped_fragment_``, even with an empty value."""
    if url.raw_query is None:
        return False
    return _ESCAPED_FRAGMENT_PARAM.search(QUERY_SEPARATOR + url.raw_query) is not None


def to_escaped_fragment_url(url: URL, encoding: str = "utf-8") -> URL:
    """``http://h/p?a=b#!state`` -> ``http://h/p?a=b&_escaped_fragment_=state``.

    URLs without a ``#!`` fragment are returned unchanged.
    """
    if not is_escape_fragmentable_url(url):
        return url
    state = encode_fragment(url.fragment[len(ESCAPED_FRAGMENT_PREFIX):], encoding)
    base = url.url_without_fragment()
    joiner = QUERY_DELIMITER if url.raw_query is not None else QUERY_SEPARATOR
    return URL(f"{base}{joiner}{ESCAPED_FRAGMENT_PARAM}={state}")


def from_escaped_fragment_url(url: URL, encoding: str = "utf-8") -> URL:
    """Inverse of ``to_escaped_fragment_url``.

    URLs without an ``_escaped_fragment_`` parameter are returned unchanged.
    """
    if url.raw_query is None:
        return url
    base = url.url_without_fragment()
    match = _ESCAPED_FRAGMENT_PARAM.search(base, base.find(QUERY_SEPARATOR))
    if match is None:
        return url

    # keep one separator when other parameters follow, otherwise drop it
    replacement = match.group("lead") if match.group("tail") else ""
    stripped = base[:match.start()] + replacement + base[match.end():]

    state = decode_fragment(match.group("value"), encoding)
    return URL(f"{stripped}{FRAGMENT_SEPARATOR}{ESCAPED_FRAGMENT_PREFIX}{state}")
