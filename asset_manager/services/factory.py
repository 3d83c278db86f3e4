# asset_manager/services/factory.py
"""
Process-wide StorageService, composed once at startup from configuration.
"""

import logging
from typing import Optional

from asset_manager.notifications.factory import get_notification_publisher
from asset_manager.repositories.metadata_repository import SqlAlchemyMetadataRepository
from asset_manager.services.storage_service import StorageService
from asset_manager.storage.factory import get_storage_backend

logger = logging.getLogger(__name__)

_storage_service: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """Get or create the shared StorageService (also a FastAPI dependency)."""
    global _storage_service

    if _storage_service is not None:
        return _storage_service

    from asset_manager.database import SessionLocal

    _storage_service = StorageService(
        backend=get_storage_backend(),
        metadata_repository=SqlAlchemyMetadataRepository(SessionLocal),
        publisher=get_notification_publisher(),
    )
    logger.info(
        f"Storage service ready: backend={_storage_service.identity()}, "
        f"notifications={'on' if _storage_service.publisher else 'off'}"
    )
    return _storage_service


def set_storage_service(service: StorageService) -> None:
    """Set a custom service (useful for testing)."""
    global _storage_service
    _storage_service = service


def reset_storage_service() -> None:
    """Reset the service singleton (for testing)."""
    global _storage_service
    _storage_service = None
