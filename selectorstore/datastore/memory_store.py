"""
In-memory datastore.
"""

import threading
from typing import Dict, List

from ..core.errors import NotFoundError
from .store import Datastore


class MemoryDatastore(Datastore):
    """Dict-backed datastore, safe for concurrent use."""

    def __init__(self) -> None:
        self._data: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(value)

    def get(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                raise NotFoundError(key) from None

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._data)
