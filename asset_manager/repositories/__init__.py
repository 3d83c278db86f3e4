"""
Persistence adapters for the image metadata index.
"""

from asset_manager.repositories.metadata_repository import (
    MetadataRepository,
    SqlAlchemyMetadataRepository,
)

__all__ = [
    "MetadataRepository",
    "SqlAlchemyMetadataRepository",
]
