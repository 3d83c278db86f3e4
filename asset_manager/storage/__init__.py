# asset_manager/storage/__init__.py
"""
Storage backend abstraction for uploaded images.

Image bytes live in object storage (S3), not the database.
This module provides a clean interface for list/put/get/delete operations.
"""

from asset_manager.storage.base import ObjectRecord, StorageBackend
from asset_manager.storage.exceptions import (
    ObjectNotFound,
    StorageError,
    StorageWriteError,
)
from asset_manager.storage.factory import (
    get_storage_backend,
    reset_storage_backend,
    set_storage_backend,
)
from asset_manager.storage.local_backend import LocalStorageBackend
from asset_manager.storage.null_backend import NullStorageBackend
from asset_manager.storage.s3_backend import S3StorageBackend

__all__ = [
    "StorageBackend",
    "ObjectRecord",
    "StorageError",
    "StorageWriteError",
    "ObjectNotFound",
    "LocalStorageBackend",
    "NullStorageBackend",
    "S3StorageBackend",
    "get_storage_backend",
    "set_storage_backend",
    "reset_storage_backend",
]
