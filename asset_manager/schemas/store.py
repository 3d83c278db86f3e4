"""
Schemas for store endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StorageItemResponse(BaseModel):
    """A stored image as shown in the listing."""

    model_config = ConfigDict(from_attributes=True)

    key: str = Field(..., description="Storage key")
    filename: str = Field(..., description="Display filename derived from the key")
    size: int = Field(..., description="Object size in bytes")
    last_modified: datetime = Field(..., description="Last write time reported by the backend")
    uploaded_at: datetime = Field(..., description="Upload time from metadata, else last_modified")
    url: str = Field(..., description="View path served by this application")


class StorageListResponse(BaseModel):
    """
    Listing of all stored images.
    GET /store
    """

    backend: str = Field(..., description="Active storage backend (s3, local, mock)")
    total: int = Field(..., description="Number of items")
    items: list[StorageItemResponse] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """
    Result of a successful upload.
    POST /store/upload
    """

    key: str = Field(..., description="Generated storage key")
    filename: str = Field(..., description="Original filename")
    content_type: str = Field(..., description="Declared content type")
    size: int = Field(..., description="Size in bytes")
    url: str = Field(..., description="View path for the stored image")
