# asset_manager/storage/factory.py
"""
Factory function for creating storage backends.

The backend is chosen once per process from configuration and then
shared; request paths never branch on the provider setting.
"""

import logging
from typing import Optional

from asset_manager.config import get_settings
from asset_manager.storage.base import StorageBackend

logger = logging.getLogger(__name__)

# Global singleton instance
_storage_backend: Optional[StorageBackend] = None


def get_storage_backend(
    provider_name: Optional[str] = None,
    **kwargs,
) -> StorageBackend:
    """
    Get or create the storage backend instance.

    Args:
        provider_name: 's3', 'local' or 'mock' (default from STORAGE_PROVIDER)
        **kwargs: Additional arguments for the backend

    Returns:
        StorageBackend instance (singleton)
    """
    global _storage_backend

    if _storage_backend is not None:
        return _storage_backend

    settings = get_settings()
    name = (provider_name or settings.STORAGE_PROVIDER).lower().strip()

    if name == "s3":
        from asset_manager.storage.s3_backend import S3StorageBackend
        kwargs.setdefault("bucket", settings.S3_BUCKET)
        kwargs.setdefault("endpoint_url", settings.S3_ENDPOINT_URL)
        kwargs.setdefault("region", settings.S3_REGION)
        _storage_backend = S3StorageBackend(**kwargs)
    elif name == "local":
        from asset_manager.storage.local_backend import LocalStorageBackend
        kwargs.setdefault("base_path", settings.LOCAL_STORAGE_PATH)
        _storage_backend = LocalStorageBackend(**kwargs)
    elif name == "mock":
        from asset_manager.storage.null_backend import NullStorageBackend
        kwargs.setdefault("container", settings.MOCK_CONTAINER_NAME)
        _storage_backend = NullStorageBackend(**kwargs)
    else:
        raise ValueError(f"Unknown storage provider: {name}. Available: s3, local, mock")

    logger.info(f"Storage backend initialized: {_storage_backend.name}")
    return _storage_backend


def set_storage_backend(backend: StorageBackend) -> None:
    """
    Set a custom storage backend (useful for testing).
    """
    global _storage_backend
    _storage_backend = backend


def reset_storage_backend() -> None:
    """
    Reset the storage backend singleton (for testing).
    """
    global _storage_backend
    _storage_backend = None
