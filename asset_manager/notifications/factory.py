# asset_manager/notifications/factory.py
"""
Factory function for the optional notification publisher.
"""

import logging
from typing import Optional

from asset_manager.config import get_settings
from asset_manager.notifications.base import NotificationPublisher

logger = logging.getLogger(__name__)

_publisher: Optional[NotificationPublisher] = None
_resolved = False


def get_notification_publisher() -> Optional[NotificationPublisher]:
    """
    Get or create the notification publisher.

    Returns:
        The configured publisher, or None when the processing queue is
        disabled (uploads then skip the notification step).
    """
    global _publisher, _resolved

    if _resolved:
        return _publisher

    settings = get_settings()
    if settings.PROCESSING_QUEUE_ENABLED:
        from asset_manager.notifications.sqs_publisher import SqsNotificationPublisher
        _publisher = SqsNotificationPublisher(
            queue_name=settings.PROCESSING_QUEUE_NAME,
            endpoint_url=settings.SQS_ENDPOINT_URL,
            region=settings.S3_REGION,
        )
    else:
        logger.info("Processing queue disabled; thumbnails will not be requested")
        _publisher = None

    _resolved = True
    return _publisher


def set_notification_publisher(publisher: Optional[NotificationPublisher]) -> None:
    """
    Set a custom publisher, or None to disable (useful for testing).
    """
    global _publisher, _resolved
    _publisher = publisher
    _resolved = True


def reset_notification_publisher() -> None:
    """
    Reset the publisher singleton (for testing).
    """
    global _publisher, _resolved
    _publisher = None
    _resolved = False
