"""
Replay of recorded traversals.

Replay yields the exact sequence of links a traversal loaded, in order,
with the failure text of every load that failed.
"""

from .iterator import LinkIterator

__all__ = [
    "LinkIterator",
]
