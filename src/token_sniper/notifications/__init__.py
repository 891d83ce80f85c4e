"""Notification subsystem."""

from token_sniper.notifications.notification_manager import NotificationService
from token_sniper.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from token_sniper.notifications.stylers import EventNotificationStyler
from token_sniper.notifications.types import NotificationMessage, NotificationStyler

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
    "TelegramNotifier",
]
