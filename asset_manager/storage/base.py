# asset_manager/storage/base.py
"""
Object store interface for uploaded assets.

Design principles:
- Flat key space inside a single container (bucket/directory/namespace)
- The object store is the source of truth for existence
- Backends stream bytes in and out; callers never see provider URLs
- Every list call re-enumerates the store (no caching across calls)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Iterator, Optional


@dataclass(frozen=True)
class ObjectRecord:
    """A stored object as reported by the backend."""
    key: str
    size: int  # bytes
    last_modified: datetime  # set by the backend on write


class StorageBackend(ABC):
    """
    Abstract interface for object storage.

    Implementations must be safe for concurrent use and must handle:
    - Overwrite on put to an existing key
    - ObjectNotFound on get/delete of a missing key
    - StorageWriteError when a put is rejected
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend type tag (e.g., 's3', 'local', 'mock')."""
        pass

    @property
    @abstractmethod
    def container(self) -> str:
        """Name of the bucket/directory this backend is bound to."""
        pass

    @abstractmethod
    def list_objects(self) -> Iterator[ObjectRecord]:
        """
        Enumerate every object currently stored.

        Returns a lazy iterator; each call starts a fresh enumeration.
        Order is not guaranteed.
        """
        pass

    @abstractmethod
    def put(self, key: str, stream: BinaryIO, content_type: str) -> None:
        """
        Write (or overwrite) an object.

        Args:
            key: Object key
            stream: Readable binary stream with the content
            content_type: MIME type, stored as object header metadata

        Raises:
            StorageWriteError: if the backend rejects the write
        """
        pass

    @abstractmethod
    def get(self, key: str) -> BinaryIO:
        """
        Open a readable stream positioned at offset 0.

        Raises:
            ObjectNotFound: if the key does not exist
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove an object.

        Raises:
            ObjectNotFound: if the key does not exist
        """
        pass

    def get_content_type(self, key: str) -> Optional[str]:
        """
        Content type recorded at put time, or None if unknown.

        Backends without header metadata keep this default.
        """
        return None
