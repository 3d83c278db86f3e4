# asset_manager/storage/null_backend.py
"""
Null storage backend for environments without object storage.

Keeps the rest of the system exercisable without live infrastructure:
nothing is stored, every write succeeds, every read is empty.
"""

import io
import logging
import threading
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List

from asset_manager.storage.base import ObjectRecord, StorageBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedCall:
    """A call made against the null backend."""
    operation: str
    key: str
    content_type: str | None = None


class NullStorageBackend(StorageBackend):
    """No-op backend that records calls for test assertions."""

    def __init__(self, container: str = "mock"):
        self._container = container
        self._calls: List[RecordedCall] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "mock"

    @property
    def container(self) -> str:
        return self._container

    @property
    def calls(self) -> List[RecordedCall]:
        """Snapshot of recorded calls, oldest first."""
        with self._lock:
            return list(self._calls)

    def _record(self, call: RecordedCall) -> None:
        with self._lock:
            self._calls.append(call)

    def list_objects(self) -> Iterator[ObjectRecord]:
        return iter(())

    def put(self, key: str, stream: BinaryIO, content_type: str) -> None:
        logger.info(f"Mock upload: {key}")
        self._record(RecordedCall("put", key, content_type))

    def get(self, key: str) -> BinaryIO:
        self._record(RecordedCall("get", key))
        return io.BytesIO(b"")

    def delete(self, key: str) -> None:
        logger.info(f"Mock delete: {key}")
        self._record(RecordedCall("delete", key))

    def reset(self) -> None:
        """Forget recorded calls."""
        with self._lock:
            self._calls.clear()
