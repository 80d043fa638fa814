"""
Paths locating links relative to a traversal root.

A path is an ordered sequence of segments (map keys or list indices).
Its string form joins segments with "/"; there is no escaping, so a
segment must not itself contain "/".
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

SEPARATOR = "/"

Segment = Union[str, int]


@dataclass(frozen=True)
class Path:
    """
    Immutable path value.

    Segments are stored as strings; integer list indices keep their
    decimal form so Path.parse(str(p)) == p for every path.
    """

    segments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        normalized = tuple(str(s) for s in self.segments)
        for seg in normalized:
            if SEPARATOR in seg:
                raise ValueError(f"path segment contains separator: {seg!r}")
            if not seg:
                raise ValueError("path segment must not be empty")
        object.__setattr__(self, "segments", normalized)

    @classmethod
    def parse(cls, s: str) -> "Path":
        """
        Parse the canonical string form.

        Empty segments are dropped, so "", "/" and "a//b/" parse to
        the empty path, the empty path and ("a", "b").
        """
        return cls(tuple(seg for seg in s.split(SEPARATOR) if seg))

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"
