"""
Link and traversal record types.

TraversedLink is the atomic unit of record: one per load attempt, in
traversal order, immutable once created.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Optional

from multiformats import CID

from .path import Path


@dataclass(frozen=True, eq=False)
class Link:
    """
    Reference to a node, carrying a CID.

    Equality and hashing use the CID's binary form.
    """

    cid: CID

    def __bytes__(self) -> bytes:
        return bytes(self.cid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return bytes(self.cid) == bytes(other.cid)

    def __hash__(self) -> int:
        return hash(bytes(self.cid))

    def __str__(self) -> str:
        return str(self.cid)


@dataclass(frozen=True)
class LinkContext:
    """
    Context handed to a block loader alongside the link.

    Fields:
        link_path: Path at which the link was encountered
    """

    link_path: Path = field(default_factory=Path)


@dataclass(frozen=True)
class TraversedLink:
    """
    One recorded load attempt.

    Fields:
        link: Link that was about to be loaded
        link_path: Path at which it was encountered
        load_error: Failure description, None if the load succeeded

    An empty load_error carries no bytes on the wire, so it is stored as None.
    """

    link: Link
    link_path: Path = field(default_factory=Path)
    load_error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.load_error == "":
            object.__setattr__(self, "load_error", None)

    @property
    def failed(self) -> bool:
        return self.load_error is not None


# (link_ctx, link) -> readable block bytes; raises on failure
BlockReadOpener = Callable[[LinkContext, Link], BinaryIO]

# Persists the recorded traversal; raises if recording or storage failed
TraversalCloser = Callable[[], None]


def describe_error(err: BaseException) -> str:
    """Textual description recorded for a failed load (never empty)."""
    return str(err) or type(err).__name__
