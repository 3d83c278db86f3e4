# asset_manager/repositories/metadata_repository.py
"""
Metadata repository for uploaded images.

The repository is a best-effort enrichment index next to the object
store. It has no transactional coupling to the storage backend: a save
or delete here can fail while the matching object write succeeded.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from asset_manager.models import ImageMetadata

logger = logging.getLogger(__name__)


class MetadataRepository(ABC):
    """Durable keyed store of ImageMetadata records."""

    @abstractmethod
    def save(self, record: ImageMetadata) -> ImageMetadata:
        pass

    @abstractmethod
    def find_all(self) -> List[ImageMetadata]:
        pass

    @abstractmethod
    def find_by_storage_key(self, key: str) -> Optional[ImageMetadata]:
        pass

    @abstractmethod
    def delete(self, record: ImageMetadata) -> None:
        pass


class SqlAlchemyMetadataRepository(MetadataRepository):
    """
    SQLAlchemy-backed repository.

    Opens one session per call, so a single instance can be shared by
    concurrent request threads. Concurrent writes are serialized by the
    database (last writer wins).
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def save(self, record: ImageMetadata) -> ImageMetadata:
        with self._session_factory() as db:
            try:
                db.add(record)
                db.commit()
                db.refresh(record)
            except SQLAlchemyError:
                db.rollback()
                raise
            db.expunge(record)
        return record

    def find_all(self) -> List[ImageMetadata]:
        with self._session_factory() as db:
            records = list(db.scalars(select(ImageMetadata).order_by(ImageMetadata.uploaded_at.desc())))
            db.expunge_all()
        return records

    def find_by_storage_key(self, key: str) -> Optional[ImageMetadata]:
        # Indexed lookup on storage_key rather than scanning find_all()
        with self._session_factory() as db:
            record = db.scalars(
                select(ImageMetadata).where(ImageMetadata.storage_key == key)
            ).first()
            if record is not None:
                db.expunge(record)
        return record

    def delete(self, record: ImageMetadata) -> None:
        with self._session_factory() as db:
            try:
                existing = db.get(ImageMetadata, record.id)
                if existing is None:
                    logger.debug(f"Metadata {record.id} already gone")
                    return
                db.delete(existing)
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
