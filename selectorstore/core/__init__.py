"""
Core selector store primitives.

This module provides:
- Path: Location of a link relative to the traversal root
- Link / LinkContext / TraversedLink: Traversal record types
- Canonical: Deterministic selector serialization
- Keys: Storage key derivation
"""

from .path import Path
from .links import (
    BlockReadOpener,
    Link,
    LinkContext,
    TraversalCloser,
    TraversedLink,
    describe_error,
)
from .canonical import encode_selector, normalize_selector
from .keys import KEY_VERSION, derive_key, key_material, parse_key_material
from .errors import (
    KeyDerivationError,
    NotFoundError,
    RecordDecodingError,
    RecordEncodingError,
    SelectorStoreError,
    StorageError,
)

__all__ = [
    "Path",
    "BlockReadOpener",
    "Link",
    "LinkContext",
    "TraversalCloser",
    "TraversedLink",
    "describe_error",
    "encode_selector",
    "normalize_selector",
    "KEY_VERSION",
    "derive_key",
    "key_material",
    "parse_key_material",
    "KeyDerivationError",
    "NotFoundError",
    "RecordDecodingError",
    "RecordEncodingError",
    "SelectorStoreError",
    "StorageError",
]
