"""
Notification Service Factory

Returns the SMS notification service. Real SMS delivery is not part of
this service, so every mode gets the mock provider.

Version: 1.0.0
"""

import logging
from functools import lru_cache

from tiffin.core.config import get_settings
from tiffin.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)
from tiffin.services.notifications.inbox import NotificationInbox
from tiffin.services.notifications.mock import MockNotificationService

logger = logging.getLogger(__name__)


@lru_cache()
def get_notification_service() -> BaseNotificationService:
    """Get the configured notification service."""
    settings = get_settings()

    if settings.use_real_services:
        logger.warning(
            f"Notification Service: no real SMS provider available "
            f"({settings.env_mode.value} mode), using MockNotificationService"
        )
    else:
        logger.info("Notification Service: Using MockNotificationService (development mode)")
    return MockNotificationService()


def reset_notification_service() -> None:
    """Clear the cached service instance."""
    get_notification_service.cache_clear()


__all__ = [
    "get_notification_service",
    "reset_notification_service",
    "BaseNotificationService",
    "MockNotificationService",
    "NotificationInbox",
    "NotificationResult",
]
