# asset_manager/services/storage_service.py
"""
Storage service: upload, list, fetch and delete images.

Composes three collaborators:
- StorageBackend: authoritative store of image bytes
- MetadataRepository: best-effort index of upload metadata
- NotificationPublisher (optional): hand-off to thumbnail generation

Only the primary object write (upload) and the primary object delete
may fail the call. These steps are best-effort and are logged, never
raised:
- sending the processing message
- deleting the thumbnail
- saving metadata after an upload
- deleting metadata after a delete
- looking up metadata while listing
"""

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, List, Optional

from asset_manager.models import ImageMetadata
from asset_manager.notifications.base import NotificationPublisher, ProcessingMessage
from asset_manager.repositories.metadata_repository import MetadataRepository
from asset_manager.storage.base import ObjectRecord, StorageBackend
from asset_manager.storage.exceptions import ObjectNotFound

logger = logging.getLogger(__name__)

VIEW_URL_PREFIX = "/store/view/"
THUMBNAIL_SUFFIX = "_thumbnail"

# Keys generated by upload() look like "<uuid4>-<original filename>"
_GENERATED_KEY_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}-(?P<name>.+)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class StorageItem:
    """Listing entry, recomputed on every list call."""
    key: str
    filename: str
    size: int
    last_modified: datetime
    uploaded_at: datetime  # metadata timestamp, else last_modified
    url: str


def generate_key(filename: str) -> str:
    """Unique storage key: a fresh uuid4 prefix plus the original filename."""
    return f"{uuid.uuid4()}-{filename}"


def generate_url(key: str) -> str:
    """Application view path; backend-native URLs are never exposed."""
    return f"{VIEW_URL_PREFIX}{key}"


def extract_filename(key: str) -> str:
    """
    Display filename for a storage key.

    Takes the segment after the last '/', then drops a generated uuid
    prefix if present. Keys matching neither are returned unchanged.
    """
    name = key.rsplit("/", 1)[-1]
    match = _GENERATED_KEY_RE.match(name)
    if match:
        return match.group("name")
    return name


def thumbnail_key(key: str) -> str:
    """
    Key of the thumbnail the worker derives from an original.

    "a/photo.png" -> "a/photo_thumbnail.png", "photo" -> "photo_thumbnail"
    """
    slash = key.rfind("/")
    dot = key.rfind(".")
    if dot > slash + 1:
        return f"{key[:dot]}{THUMBNAIL_SUFFIX}{key[dot:]}"
    return f"{key}{THUMBNAIL_SUFFIX}"


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset of timezone-aware columns; stored values are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class StorageService:
    """
    Orchestrates the object store, metadata index and processing queue.

    Holds only references to its collaborators, so one instance can serve
    concurrent requests. There is no locking or transaction across the
    collaborators; inconsistencies are repaired by read-time fallbacks.
    """

    def __init__(
        self,
        backend: StorageBackend,
        metadata_repository: MetadataRepository,
        publisher: Optional[NotificationPublisher] = None,
    ):
        self.backend = backend
        self.metadata_repository = metadata_repository
        self.publisher = publisher

    def identity(self) -> str:
        """Backend type tag (e.g., 's3', 'local', 'mock')."""
        return self.backend.name

    # -------------------------------------------------------------------------
    # List
    # -------------------------------------------------------------------------

    def list_items(self) -> List[StorageItem]:
        """List every stored object, enriched with metadata when available."""
        return [self._to_item(record) for record in self.backend.list_objects()]

    def _to_item(self, record: ObjectRecord) -> StorageItem:
        uploaded_at = record.last_modified
        metadata = self._find_metadata(record.key)
        if metadata is not None and metadata.uploaded_at is not None:
            uploaded_at = _as_utc(metadata.uploaded_at)

        return StorageItem(
            key=record.key,
            filename=extract_filename(record.key),
            size=record.size,
            last_modified=record.last_modified,
            uploaded_at=uploaded_at,
            url=generate_url(record.key),
        )

    def _find_metadata(self, key: str) -> Optional[ImageMetadata]:
        try:
            return self.metadata_repository.find_by_storage_key(key)
        except Exception as e:
            logger.warning(
                f"Metadata lookup failed for {key}, using object timestamp: {e}",
                extra={"event": "metadata_lookup_failed", "key": key},
            )
            return None

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    def upload(
        self,
        filename: str,
        content_type: str,
        size: int,
        stream: BinaryIO,
    ) -> str:
        """
        Store an image and index it.

        Returns:
            The generated storage key

        Raises:
            StorageWriteError: if the backend write fails; nothing else runs
        """
        key = generate_key(filename)

        self.backend.put(key, stream, content_type)
        logger.info(
            f"Stored {filename} as {key}",
            extra={
                "event": "object_stored",
                "key": key,
                "size_bytes": size,
                "content_type": content_type,
                "backend": self.backend.name,
            },
        )

        if self.publisher is not None:
            self._request_processing(key, content_type, size)

        self._save_metadata(key, filename, content_type, size)
        return key

    def _request_processing(self, key: str, content_type: str, size: int) -> None:
        message = ProcessingMessage(
            storage_key=key,
            content_type=content_type,
            source_backend=self.identity(),
            size_bytes=size,
        )
        try:
            if not self.publisher.try_send(message):
                logger.warning(
                    f"Processing message for {key} was not accepted",
                    extra={"event": "processing_request_dropped", "key": key},
                )
        except Exception as e:
            logger.warning(
                f"Processing request failed for {key}: {e}",
                extra={"event": "processing_request_failed", "key": key},
            )

    def _save_metadata(self, key: str, filename: str, content_type: str, size: int) -> None:
        record = ImageMetadata(
            id=str(uuid.uuid4()),
            filename=filename,
            content_type=content_type,
            size=size,
            storage_key=key,
            url=generate_url(key),
            uploaded_at=datetime.now(timezone.utc),
        )
        try:
            self.metadata_repository.save(record)
        except Exception as e:
            # Object is stored but unindexed; listing falls back to last_modified
            logger.error(
                f"Metadata save failed for {key}: {e}",
                extra={"event": "metadata_save_failed", "key": key, "metadata_id": record.id},
                exc_info=True,
            )

    # -------------------------------------------------------------------------
    # Fetch / Delete
    # -------------------------------------------------------------------------

    def fetch(self, key: str) -> BinaryIO:
        """
        Open a stored object.

        Raises:
            ObjectNotFound: if the key does not exist
        """
        return self.backend.get(key)

    def content_type(self, key: str) -> Optional[str]:
        """Content type the backend recorded for key, if any."""
        return self.backend.get_content_type(key)

    def delete(self, key: str) -> None:
        """
        Delete an object, its thumbnail and its metadata.

        Raises:
            ObjectNotFound: if the primary object does not exist; no
                thumbnail or metadata cleanup is attempted
        """
        self.backend.delete(key)
        logger.info(
            f"Deleted {key}",
            extra={"event": "object_deleted", "key": key, "backend": self.backend.name},
        )

        self._delete_thumbnail(key)
        self._delete_metadata(key)

    def _delete_thumbnail(self, key: str) -> None:
        derived = thumbnail_key(key)
        try:
            self.backend.delete(derived)
        except ObjectNotFound:
            # Thumbnail generation is asynchronous and may never have run
            logger.debug(f"No thumbnail to delete for {key}")
        except Exception as e:
            logger.warning(
                f"Thumbnail delete failed for {derived}: {e}",
                extra={"event": "thumbnail_delete_failed", "key": derived},
            )

    def _delete_metadata(self, key: str) -> None:
        try:
            metadata = self.metadata_repository.find_by_storage_key(key)
            if metadata is not None:
                self.metadata_repository.delete(metadata)
        except Exception as e:
            logger.error(
                f"Metadata delete failed for {key}: {e}",
                extra={"event": "metadata_delete_failed", "key": key},
                exc_info=True,
            )
