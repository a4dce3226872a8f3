"""
urlcanon.percent — Context-sensitive percent encoding and decoding.

Encoding turns a space into ``+``, every non-ASCII code point (and DEL)
into its UTF-8 bytes as lowercase ``%xx``, and control characters plus the
caller's reserved characters into a single ``%xx``.  Decoding leaves ``+``
untouched, so ``decode(encode(s))`` maps spaces to ``+``.  URL repair and
normalization rely on that: a segment re-encodes to the same text every
time it passes through decode/encode.
"""

import re
from urllib.parse import unquote

from urlcanon.constants import RESERVED_PATH_CHARS, RESERVED_QUERY_CHARS

# A '%' that does not start a two-digit hex escape
_ISOLATED_PERCENT = re.compile(r"%(?![0-9a-fA-F]{2})")


def _escape_bytes(char: str) -> str:
    return "".join(f"%{byte:02x}" for byte in char.encode("utf-8"))


def encode(text: str, reserved_chars) -> str:
    """Percent-encode ``text``, escaping the characters in ``reserved_chars``."""
    out = []
    # str iterates by code point, astral characters are never split
    for char in text:
        code_point = ord(char)
        if char == " ":
            out.append("+")
        elif code_point >= 0x7F:
            out.append(_escape_bytes(char))
        elif code_point < 0x20 or char in reserved_chars:
            out.append(f"%{code_point:02x}")
        else:
            out.append(char)
    return "".join(out)


def encode_path_part(text: str) -> str:
    return encode(text, RESERVED_PATH_CHARS)


def encode_query_component(text: str) -> str:
    return encode(text, RESERVED_QUERY_CHARS)


def escape_isolated_percent_signs(text: str) -> str:
    """Rewrite every '%' not followed by two hex digits as '%25'."""
    return _ISOLATED_PERCENT.sub("%25", text)


def decode(text: str) -> str:
    """
    Percent-decode ``text`` as UTF-8.

    Stray ``%`` signs are escaped first so malformed input such as
    ``"a%b"`` or a trailing ``"%"`` decodes to itself.
    """
    return unquote(escape_isolated_percent_signs(text), encoding="utf-8", errors="replace")
