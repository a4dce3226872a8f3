"""
urlcanon.path — URL path as a sequence of segments.
"""

from dataclasses import dataclass

from urlcanon import percent
from urlcanon.constants import SESSION_SUFFIX

PATH_SEPARATOR = "/"


def strip_session_id(raw: str) -> str:
    """Cut a ``;jsessionid=...`` tail at the last ';'."""
    if SESSION_SUFFIX in raw.lower():
        return raw[:raw.rfind(";")]
    return raw


def split_segments(raw: str) -> tuple:
    """Split on '/', keeping interior empty segments and dropping trailing ones."""
    segments = raw.split(PATH_SEPARATOR)
    while segments and segments[-1] == "":
        segments.pop()
    return tuple(segments)


@dataclass(frozen=True)
class Path:
    segments: tuple = ()

    @classmethod
    def from_string(cls, raw: str) -> "Path":
        return cls(split_segments(strip_session_id(raw)))

    def as_string(self) -> str:
        return PATH_SEPARATOR.join(self.segments)

    def re_encoded(self) -> "Path":
        """Decode then re-encode every segment so equivalent spellings agree.

        ``/a b``, ``/a%20b`` and ``/a+b`` all become ``/a+b``.  Work is done
        per segment, an encoded ``%2F`` never turns into a separator.
        """
        return Path(tuple(
            percent.encode_path_part(percent.decode(segment)) for segment in self.segments
        ))

    def remove_relative_path_parts(self) -> "Path":
        # TODO: collapse "." and ".." segments
        return Path(self.segments)

    def remove_default_page(self) -> "Path":
        # TODO: strip a trailing default document such as index.html
        return Path(self.segments)
