# asset_manager/models.py
"""
Asset Manager Database Models

Tables:
- ImageMetadata: side-index of uploaded images, keyed by storage key

The object store is authoritative for existence. Rows here may lag,
be missing, or outlive their object; readers fall back instead of failing.
"""

from datetime import datetime, timezone
import uuid

from sqlalchemy import BigInteger, Column, DateTime, String

from asset_manager.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -----------------------------------------------------------------------------
# ImageMetadata
# -----------------------------------------------------------------------------

class ImageMetadata(Base):
    """One row per uploaded image. Created after the object write, never updated."""
    __tablename__ = "image_metadata"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    filename = Column(String(512), nullable=False)  # original client filename
    content_type = Column(String(128), nullable=True)
    size = Column(BigInteger, nullable=False)
    storage_key = Column(String(1024), unique=True, index=True, nullable=False)
    url = Column(String(1100), nullable=False)  # /store/view/{storage_key}
    uploaded_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ImageMetadata id={self.id} storage_key={self.storage_key}>"
