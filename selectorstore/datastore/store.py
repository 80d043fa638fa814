"""
Datastore abstract interface.

The selector store borrows a datastore; it never owns or closes one.
"""

from abc import ABC, abstractmethod
from typing import List


class Datastore(ABC):
    """
    Abstract key-value storage interface.

    Keys are opaque strings produced by derive_key(); values are opaque
    record blobs. All implementations must guarantee:
    - put() replaces any existing value (last write wins)
    - get() of a key that was never put raises NotFoundError
    - a value is never observed half-written
    """

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """
        Store value under key.

        Raises:
            StorageError: If the write fails
        """
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """
        Fetch the value stored under key.

        Raises:
            NotFoundError: If key is absent
            StorageError: If the read fails
        """
        ...

    @abstractmethod
    def has(self, key: str) -> bool:
        """
        Report whether key is present.

        Raises:
            StorageError: If the lookup fails
        """
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        """
        Stored keys in sorted order.

        Raises:
            StorageError: If the listing fails
        """
        ...
