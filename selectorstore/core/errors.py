"""
Exception types for the selector store.
"""


class SelectorStoreError(Exception):
    """Base class for all selector store errors."""
    pass


class KeyDerivationError(SelectorStoreError):
    """Raised when a selector cannot be canonically encoded into a storage key."""
    pass


class RecordEncodingError(SelectorStoreError):
    """Raised when a traversed link cannot be encoded into a record frame."""
    pass


class RecordDecodingError(SelectorStoreError):
    """Raised when a record frame is truncated or malformed."""
    pass


class StorageError(SelectorStoreError):
    """Raised when datastore operations fail."""
    pass


class NotFoundError(StorageError):
    """Raised when a key is not present in the datastore."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key not found: {key}")
        self.key = key
