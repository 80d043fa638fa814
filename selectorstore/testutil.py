"""
Test helpers: deterministic CIDs and in-memory block loaders.
"""

import io
from typing import BinaryIO, Dict, List, Optional

from multiformats import CID, multihash

from .core.links import Link, LinkContext

_seq = 0


def generate_cids(n: int, codec: str = "raw") -> List[CID]:
    """Produce n distinct CIDv1s, different on every call."""
    global _seq
    cids = []
    for _ in range(n):
        digest = multihash.digest(f"block-{_seq}".encode("utf-8"), "sha2-256")
        cids.append(CID("base32", 1, codec, digest))
        _seq += 1
    return cids


class BlockLoader:
    """
    Block loader backed by a dict, recording the links it was asked for.

    Links in failures raise LookupError with the given message.
    """

    def __init__(
        self,
        blocks: Optional[Dict[Link, bytes]] = None,
        failures: Optional[Dict[Link, str]] = None,
    ) -> None:
        self.blocks = blocks or {}
        self.failures = failures or {}
        self.calls: List[Link] = []

    def __call__(self, link_ctx: LinkContext, link: Link) -> BinaryIO:
        self.calls.append(link)
        if link in self.failures:
            raise LookupError(self.failures[link])
        try:
            return io.BytesIO(self.blocks[link])
        except KeyError:
            raise LookupError(f"block not found: {link}") from None
