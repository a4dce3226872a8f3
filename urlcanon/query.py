"""
urlcanon.query — Query strings as ordered key/value pairs.
"""

from dataclasses import dataclass
from typing import Optional

from urlcanon.constants import QUERY_DELIMITER


@dataclass(frozen=True, order=True)
class QueryKeyValuePair:
    """A query parameter.  An absent value is stored as ``""``.

    Pairs order by ``(key, value)``; that order is only used for the
    sorted form of a query.
    """

    key: str
    value: Optional[str] = ""

    def __post_init__(self):
        if self.value is None:
            object.__setattr__(self, "value", "")

    def as_string(self) -> str:
        if not self.value:
            return self.key
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class Query:
    pairs: tuple = ()
    delimiter: str = QUERY_DELIMITER

    def __post_init__(self):
        object.__setattr__(self, "pairs", tuple(self.pairs or ()))

    def __len__(self):
        return len(self.pairs)

    def as_string(self, prefix_question_mark: bool = False, sort: bool = False) -> str:
        """Serialize the pairs, optionally sorted and prefixed with '?'.

        An empty query is always ``""``, whatever the flags.
        """
        if not self.pairs:
            return ""
        pairs = sorted(self.pairs) if sort else self.pairs
        body = self.delimiter.join(pair.as_string() for pair in pairs)
        return ("?" if prefix_question_mark else "") + body

    def as_sorted_string(self) -> str:
        return self.as_string(sort=True)

    def has_key(self, key: str) -> bool:
        return any(pair.key == key for pair in self.pairs)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for pair in self.pairs:
            if pair.key == key:
                return pair.value
        return default
