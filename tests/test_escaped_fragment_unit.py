"""
Unit tests — Escaped-fragment encoding and #! <-> _escaped_fragment_ conversion
(urlcanon.escaped_fragment).
"""

from unittest.mock import patch

import pytest

from urlcanon.errors import UnsupportedEncodingError
from urlcanon.escaped_fragment import (
    decode_fragment,
    encode_fragment,
    encode_fragment_default,
    from_escaped_fragment_url,
    is_escape_fragmentable_url,
    is_escaped_fragment_url,
    to_escaped_fragment_url,
)
from urlcanon.url import URL

# (#! form, _escaped_fragment_ form)
CONVERSION_CASES = [
    ("http://some-request-url/test1#!my-request",
     "http://some-request-url/test1?_escaped_fragment_=my-request"),
    ("http://some-request-url/test1?test2=test2#!my-request",
     "http://some-request-url/test1?test2=test2&_escaped_fragment_=my-request"),
    ("http://some-request-url/test1?test2=test2&test3=test3#!my-request",
     "http://some-request-url/test1?test2=test2&test3=test3&_escaped_fragment_=my-request"),
    ("http://some-request-url/test1?#!my-request&key=value",
     "http://some-request-url/test1?&_escaped_fragment_=my-request%26key=value"),
]


class TestEncodeFragment:
    """urlcanon.escaped_fragment.encode_fragment — fixed byte-range policy."""

    @pytest.mark.parametrize("text, expected", [
        ("=", "="),
        ("&", "%26"),
        (" ", "%20"),
        ("#", "%23"),
        ("%", "%25"),
        ("+", "%2B"),
        ("!", "!"),
        ("key1=value1&key2=value2", "key1=value1%26key2=value2"),
    ])
    def test_policy(self, text, expected):
        assert encode_fragment(text, "utf-8") == expected

    def test_latin1_range_uses_uppercase_utf8_bytes(self):
        assert encode_fragment("é", "utf-8") == "%C3%A9"
        assert encode_fragment("\x7f", "utf-8") == "%7F"

    def test_requested_encoding_used(self):
        assert encode_fragment("é", "latin-1") == "%E9"

    def test_above_latin1_passed_through(self):
        assert encode_fragment("日本", "utf-8") == "日本"

    def test_unknown_encoding_rejected(self):
        with pytest.raises(UnsupportedEncodingError):
            encode_fragment("a", "no-such-codec")

    def test_default_entry_point(self):
        assert encode_fragment_default("a b") == "a%20b"

    @patch("urlcanon.escaped_fragment.DEFAULT_ENCODING", "no-such-codec")
    def test_default_entry_point_falls_back(self):
        assert encode_fragment_default("a b") == "a b"

    def test_decode(self):
        assert decode_fragment("my-request%26key=value") == "my-request&key=value"
        assert decode_fragment(encode_fragment("a b&é", "utf-8")) == "a b&é"


class TestDetection:
    """is_escape_fragmentable_url / is_escaped_fragment_url."""

    def test_fragmentable(self):
        assert is_escape_fragmentable_url(URL("http://some-request-url/test1#!my-request"))
        assert not is_escape_fragmentable_url(URL("http://some-request-url/test1#someparamateer=somevalue"))
        assert not is_escape_fragmentable_url(URL("http://some-request-url/test1"))

    def test_escaped(self):
        assert is_escaped_fragment_url(URL("http://some-request-url/test1?_escaped_fragment_=my-request"))
        assert not is_escaped_fragment_url(URL("http://some-request-url/test1?someparamateer=somevalue"))

    def test_escaped_with_empty_state(self):
        assert is_escaped_fragment_url(URL("http://h/p?_escaped_fragment_="))
        assert is_escaped_fragment_url(URL("http://h/p?a=1&_escaped_fragment_="))
        assert not is_escaped_fragment_url(URL("http://h/p?x_escaped_fragment_=1"))
        assert not is_escaped_fragment_url(URL("http://h/p#?_escaped_fragment_=1"))


class TestConversion:
    """to_escaped_fragment_url / from_escaped_fragment_url."""

    @pytest.mark.parametrize("hashbang, escaped", CONVERSION_CASES)
    def test_to_escaped(self, hashbang, escaped):
        assert to_escaped_fragment_url(URL(hashbang)) == URL(escaped)

    @pytest.mark.parametrize("hashbang, escaped", CONVERSION_CASES)
    def test_from_escaped(self, hashbang, escaped):
        assert from_escaped_fragment_url(URL(escaped)) == URL(hashbang)

    def test_parameter_in_the_middle(self):
        url = URL("http://h/p?a=1&_escaped_fragment_=x&b=2")
        assert from_escaped_fragment_url(url) == URL("http://h/p?a=1&b=2#!x")

    def test_parameter_first_of_several(self):
        url = URL("http://h/p?_escaped_fragment_=x&b=2")
        assert from_escaped_fragment_url(url) == URL("http://h/p?b=2#!x")

    def test_round_trip_with_special_characters(self):
        url = URL("http://h/p?q=1#!state=a b&c")
        escaped = to_escaped_fragment_url(url)
        assert escaped.given_input_url == "http://h/p?q=1&_escaped_fragment_=state=a%20b%26c"
        assert from_escaped_fragment_url(escaped) == url

    def test_empty_state_round_trip(self):
        url = URL("http://h/p#!")
        escaped = to_escaped_fragment_url(url)
        assert escaped.given_input_url == "http://h/p?_escaped_fragment_="
        assert is_escaped_fragment_url(escaped)
        assert from_escaped_fragment_url(escaped) == url

    def test_non_matching_urls_unchanged(self):
        plain = URL("http://h/p?a=b#section")
        assert to_escaped_fragment_url(plain) is plain
        assert from_escaped_fragment_url(plain) is plain
