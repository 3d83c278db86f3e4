# asset_manager/storage/local_backend.py
"""
Local filesystem storage backend for development and testing.

Mimics S3 behavior but stores files locally.
NOT for production use.
"""

import json
import logging
import os
import posixpath
import shutil
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Iterator

from asset_manager.storage.base import ObjectRecord, StorageBackend
from asset_manager.storage.exceptions import ObjectNotFound, StorageWriteError

logger = logging.getLogger(__name__)

# Reserved top-level directory for content-type sidecars; never a valid key prefix
METADATA_DIR = ".meta"


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage backend.

    Stores each object as a file under the base directory. Its content
    type lives in a JSON sidecar at ``.meta/<key>.json``, outside the
    key space.

    Keys map to paths one-to-one: a key that is not already a normalized
    relative path (``..``, ``.``, empty or repeated segments, a leading
    ``/``) or that starts with ``.meta/`` is rejected.

    Configuration:
    - LOCAL_STORAGE_PATH: Base directory (default: ./storage)
    """

    def __init__(self, base_path: str | None = None):
        """
        Initialize local storage.

        Args:
            base_path: Base directory for storage (or LOCAL_STORAGE_PATH env)
        """
        self._base_path = Path(base_path or os.getenv("LOCAL_STORAGE_PATH", "./storage")).resolve()
        self._base_path.mkdir(parents=True, exist_ok=True)
        self._metadata_path = self._base_path / METADATA_DIR
        self._write_lock = threading.Lock()

        logger.info(f"Local storage initialized: {self._base_path}")

    @property
    def name(self) -> str:
        return "local"

    @property
    def container(self) -> str:
        return str(self._base_path)

    @staticmethod
    def _check_key(key: str) -> None:
        if (
            not key
            or "\x00" in key
            or "\\" in key
            or posixpath.normpath(key) != key
            or posixpath.isabs(key)
            or key in (".", "..")
            or key.startswith("../")
            or key.split("/", 1)[0] == METADATA_DIR
        ):
            raise ValueError(f"Invalid storage key: {key!r}")

    def _get_path(self, key: str) -> Path:
        """Get filesystem path for key. Raises ValueError for invalid keys."""
        self._check_key(key)
        return self._base_path / key

    def _get_metadata_path(self, key: str) -> Path:
        """Get sidecar path for key. Raises ValueError for invalid keys."""
        self._check_key(key)
        return self._metadata_path / f"{key}.json"

    def list_objects(self) -> Iterator[ObjectRecord]:
        """Walk the base directory, skipping the sidecar tree."""
        for path in self._base_path.rglob("*"):
            relative = path.relative_to(self._base_path)
            if relative.parts[0] == METADATA_DIR or path.is_symlink():
                continue
            try:
                if not path.is_file():
                    continue
                stat = path.stat()
            except FileNotFoundError:
                # Deleted while listing
                continue
            yield ObjectRecord(
                key=relative.as_posix(),
                size=stat.st_size,
                last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )

    def put(self, key: str, stream: BinaryIO, content_type: str) -> None:
        """Copy the stream to disk and record its content type."""
        try:
            file_path = self._get_path(key)
            meta_path = self._get_metadata_path(key)
        except ValueError as e:
            raise StorageWriteError(key, str(e)) from e

        try:
            with self._write_lock:
                file_path.parent.mkdir(parents=True, exist_ok=True)
                with open(file_path, "wb") as out:
                    shutil.copyfileobj(stream, out)
                meta_path.parent.mkdir(parents=True, exist_ok=True)
                meta_path.write_text(json.dumps({"content_type": content_type}, indent=2))
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e

        logger.debug(f"Stored locally: {key}")

    def get(self, key: str) -> BinaryIO:
        """Open the stored file for reading."""
        try:
            file_path = self._get_path(key)
        except ValueError as e:
            raise ObjectNotFound(key) from e
        if not file_path.is_file():
            raise ObjectNotFound(key)
        return open(file_path, "rb")

    def get_content_type(self, key: str) -> str | None:
        """Read the content type recorded at put time."""
        try:
            meta_path = self._get_metadata_path(key)
        except ValueError:
            return None
        if not meta_path.is_file():
            return None

        try:
            return json.loads(meta_path.read_text()).get("content_type")
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to load metadata for {key}: {e}")
            return None

    def delete(self, key: str) -> None:
        """Delete object and its metadata sidecar."""
        try:
            file_path = self._get_path(key)
            meta_path = self._get_metadata_path(key)
        except ValueError as e:
            raise ObjectNotFound(key) from e

        with self._write_lock:
            if not file_path.is_file():
                raise ObjectNotFound(key)
            file_path.unlink()
            if meta_path.exists():
                meta_path.unlink()

        logger.debug(f"Deleted locally: {key}")
