"""
Pydantic schemas for API request/response validation.
"""

from asset_manager.schemas.store import (
    StorageItemResponse,
    StorageListResponse,
    UploadResponse,
)

__all__ = [
    "StorageItemResponse",
    "StorageListResponse",
    "UploadResponse",
]
