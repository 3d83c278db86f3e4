# asset_manager/notifications/base.py
"""
Hand-off of uploaded images to the asynchronous thumbnail pipeline.

Delivery is fire-and-forget: the sender never waits for, or verifies,
consumption. The consumer side owns retries.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ProcessingMessage:
    """Request to generate derived artifacts for one stored object."""
    storage_key: str
    content_type: str
    source_backend: str
    size_bytes: int

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation consumed by the thumbnail worker."""
        return {
            "storageKey": self.storage_key,
            "contentType": self.content_type,
            "sourceBackend": self.source_backend,
            "sizeBytes": self.size_bytes,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload())


class NotificationPublisher(ABC):
    """Best-effort sender of processing messages."""

    @property
    @abstractmethod
    def queue_name(self) -> str:
        pass

    @abstractmethod
    def try_send(self, message: ProcessingMessage) -> bool:
        """
        Send a message without propagating delivery failures.

        Returns:
            True if the queue accepted the message, False otherwise
        """
        pass
