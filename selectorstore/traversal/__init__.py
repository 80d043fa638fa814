"""
Traversal recording.

TraversalWriter wraps a block loader, records each load attempt and
commits the record blob once the traversal finishes.
"""

from .writer import TraversalWriter

__all__ = [
    "TraversalWriter",
]
