"""
Application services.
"""

from asset_manager.services.factory import (
    get_storage_service,
    reset_storage_service,
    set_storage_service,
)
from asset_manager.services.storage_service import (
    StorageItem,
    StorageService,
    extract_filename,
    thumbnail_key,
)

__all__ = [
    "StorageService",
    "StorageItem",
    "extract_filename",
    "thumbnail_key",
    "get_storage_service",
    "set_storage_service",
    "reset_storage_service",
]
