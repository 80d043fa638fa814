"""
Selector store façade.

This module provides:
- SelectorStore: Abstract interface (new_traversal, has, get)
- SimpleSelectorStore: Implementation over any Datastore
"""

from .store import SelectorStore
from .simple_store import SimpleSelectorStore

__all__ = [
    "SelectorStore",
    "SimpleSelectorStore",
]
