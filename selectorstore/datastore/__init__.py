"""
Record blob storage.

This module provides:
- Datastore: Abstract key-value interface borrowed by the selector store
- MemoryDatastore: In-process dict storage
- FileDatastore: One file per key, atomic replace
- S3Datastore: One object per key (requires boto3)
"""

from .store import Datastore
from .memory_store import MemoryDatastore
from .file_store import FileDatastore

# S3Datastore is optional (requires boto3)
try:
    from .s3_store import S3Datastore

    __all__ = [
        "Datastore",
        "MemoryDatastore",
        "FileDatastore",
        "S3Datastore",
    ]
except ImportError:
    __all__ = [
        "Datastore",
        "MemoryDatastore",
        "FileDatastore",
    ]
