"""
urlcanon.query_factory — Tokenize a raw query string into a ``Query``.

Parsing runs in two stages:

1. A state machine over ``=``/``&``/text tokens builds the pair list and
   drops session parameters (``PHPSESSID``, ``JSESSIONID``) on the way.
2. A post-pass removes tracking parameters whose key starts with one of
   ``TRACKING_PARAM_PREFIXES`` (case-sensitive).
"""

import enum
import logging
import re
from typing import Iterable, Optional

from urlcanon.constants import (
    QUERY_DELIMITER,
    SESSION_KEYS,
    SESSION_SUFFIX,
    TRACKING_PARAM_PREFIXES,
)
from urlcanon.query import Query, QueryKeyValuePair

logger = logging.getLogger(__name__)

EQUALS = "="

_TOKEN_SPLIT = re.compile(r"([=&])")


class ParserState(enum.Enum):
    START = "start"
    KEY = "key"
    EQUAL = "equal"
    VALUE = "value"
    DELIMITER = "delimiter"


def tokenize(raw: str) -> list[str]:
    """Split on '=' and '&', keeping the delimiters and skipping empty tokens."""
    return [token for token in _TOKEN_SPLIT.split(raw) if token]


def _is_delimiter(token: str) -> bool:
    return token in (EQUALS, QUERY_DELIMITER)


def _is_session_key(token: str) -> bool:
    return token.upper() in SESSION_KEYS


def _strip_session_value(token: str) -> str:
    if SESSION_SUFFIX in token.lower():
        return token[:token.rfind(";")]
    return token


def step(state: ParserState, token: str, key: Optional[str], pairs: list) -> tuple:
    """Apply one token; returns the next ``(state, pending_key)``."""
    if state in (ParserState.START, ParserState.KEY):
        if _is_delimiter(token):
            return state, key
        if _is_session_key(token):
            logger.debug("Dropping session parameter %s", token)
            return ParserState.DELIMITER, None
        return ParserState.EQUAL, token

    if state is ParserState.EQUAL:
        if token == EQUALS:
            return ParserState.VALUE, key
        if token == QUERY_DELIMITER:
            pairs.append(QueryKeyValuePair(key))
            return ParserState.KEY, None
        return state, key

    if state is ParserState.VALUE:
        if token == QUERY_DELIMITER:
            pairs.append(QueryKeyValuePair(key))
            return ParserState.KEY, None
        if token == EQUALS:
            return state, key
        pairs.append(QueryKeyValuePair(key, _strip_session_value(token)))
        return ParserState.DELIMITER, None

    # DELIMITER: everything up to the next '&' is ignored
    if token == QUERY_DELIMITER:
        return ParserState.KEY, None
    return state, key


def is_tracking_parameter(key: str) -> bool:
    return key.startswith(TRACKING_PARAM_PREFIXES)


def filter_tracking_parameters(pairs: Iterable[QueryKeyValuePair]) -> list[QueryKeyValuePair]:
    kept = []
    for pair in pairs:
        if is_tracking_parameter(pair.key):
            logger.debug("Dropping tracking parameter %s", pair.key)
            continue
        kept.append(pair)
    return kept


def build_query(raw: Optional[str]) -> Query:
    """Parse a raw query string (without the leading '?') into a ``Query``.

    A key still waiting for its value when the input ends is discarded.
    """
    if not raw:
        return Query()

    pairs: list[QueryKeyValuePair] = []
    state, key = ParserState.START, None
    for token in tokenize(raw):
        state, key = step(state, token, key, pairs)

    return Query(tuple(filter_tracking_parameters(pairs)), QUERY_DELIMITER)
