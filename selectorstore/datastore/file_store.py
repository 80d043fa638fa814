"""
File-based datastore using one file per key.

Each value is written to a temporary file in the same directory, fsynced
and renamed over the final name, so readers see either the old blob or
the new one.
"""

import os
import tempfile
from typing import List

from ..core.errors import NotFoundError, StorageError
from .store import Datastore

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None

SUFFIX = ".rec"


class FileDatastore(Datastore):
    """
    Directory of record blobs.

    Storage format: {directory}/{key}.rec, raw record bytes

    Guarantees:
    - Atomic replace (tmp file + os.replace)
    - Fsync before rename unless SELSTORE_FSYNC=false
    """

    def __init__(self, directory: str) -> None:
        """
        Initialize file datastore.

        Args:
            directory: Directory holding record files (created if missing)
        """
        self.directory = directory
        self.fsync = os.getenv("SELSTORE_FSYNC", "true").lower() != "false"
        self.lock_path = os.path.join(directory, ".lock")

        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as ex:
            raise StorageError(str(ex)) from ex

    def _path_for_key(self, key: str) -> str:
        if not key or os.sep in key or "/" in key or key.startswith("."):
            raise StorageError(f"invalid key for file datastore: {key!r}")
        return os.path.join(self.directory, key + SUFFIX)

    def put(self, key: str, value: bytes) -> None:
        path = self._path_for_key(key)
        try:
            with open(self.lock_path, "a+b") as lock:
                if fcntl:
                    fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
                fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", dir=self.directory)
                try:
                    with os.fdopen(fd, "wb") as f:
                        f.write(value)
                        f.flush()
                        if self.fsync:
                            os.fsync(f.fileno())
                    os.replace(tmp_path, path)
                except BaseException:
                    if os.path.exists(tmp_path):
                        os.remove(tmp_path)
                    raise
                if fcntl:
                    fcntl.flock(lock.fileno(), fcntl.LOCK_UN)
        except OSError as ex:
            raise StorageError(str(ex)) from ex

    def get(self, key: str) -> bytes:
        path = self._path_for_key(key)
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            raise NotFoundError(key) from None
        except OSError as ex:
            raise StorageError(str(ex)) from ex

    def has(self, key: str) -> bool:
        return os.path.exists(self._path_for_key(key))

    def keys(self) -> List[str]:
        """Stored keys in sorted order."""
        try:
            names = os.listdir(self.directory)
        except OSError as ex:
            raise StorageError(str(ex)) from ex
        return sorted(
            name[: -len(SUFFIX)]
            for name in names
            if name.endswith(SUFFIX) and not name.startswith(".")
        )
