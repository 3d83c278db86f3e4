"""
Processing-request notifications for the thumbnail pipeline.
"""

from asset_manager.notifications.base import NotificationPublisher, ProcessingMessage
from asset_manager.notifications.factory import (
    get_notification_publisher,
    reset_notification_publisher,
    set_notification_publisher,
)

__all__ = [
    "NotificationPublisher",
    "ProcessingMessage",
    "get_notification_publisher",
    "set_notification_publisher",
    "reset_notification_publisher",
]
