# asset_manager/notifications/sqs_publisher.py
"""
SQS notification publisher using boto3.

Supports:
- AWS SQS
- SQS-compatible services (ElasticMQ, LocalStack)
"""

import logging
import threading
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from asset_manager.notifications.base import NotificationPublisher, ProcessingMessage

logger = logging.getLogger(__name__)


class SqsNotificationPublisher(NotificationPublisher):
    """Sends processing messages to a single well-known SQS queue."""

    def __init__(
        self,
        queue_name: str = "image-processing",
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        client=None,
    ):
        """
        Args:
            queue_name: Queue consumed by the thumbnail worker
            endpoint_url: Custom endpoint for SQS-compatible services
            region: AWS region
            client: Pre-built boto3 SQS client (tests)
        """
        self._queue_name = queue_name
        self._queue_url: Optional[str] = None
        self._lock = threading.Lock()

        if client is None:
            config = Config(
                retries={"max_attempts": 3, "mode": "standard"},
                connect_timeout=5,
                read_timeout=10,
            )
            client = boto3.client(
                "sqs",
                endpoint_url=endpoint_url,
                region_name=region,
                config=config,
            )
        self._client = client

        logger.info(f"SQS publisher initialized: queue={self._queue_name}")

    @property
    def queue_name(self) -> str:
        return self._queue_name

    def _get_queue_url(self) -> str:
        """Resolve the queue URL once and reuse it."""
        with self._lock:
            if self._queue_url is None:
                response = self._client.get_queue_url(QueueName=self._queue_name)
                self._queue_url = response["QueueUrl"]
            return self._queue_url

    def try_send(self, message: ProcessingMessage) -> bool:
        try:
            response = self._client.send_message(
                QueueUrl=self._get_queue_url(),
                MessageBody=message.to_json(),
                MessageAttributes={
                    "sourceBackend": {
                        "DataType": "String",
                        "StringValue": message.source_backend,
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning(
                f"Failed to queue processing message for {message.storage_key}: {e}",
                extra={
                    "event": "processing_message_failed",
                    "key": message.storage_key,
                    "queue": self._queue_name,
                },
            )
            return False

        logger.debug(
            f"Queued processing message for {message.storage_key}: {response.get('MessageId')}",
            extra={
                "event": "processing_message_sent",
                "key": message.storage_key,
                "queue": self._queue_name,
            },
        )
        return True
