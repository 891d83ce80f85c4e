"""Notification stylers."""

from token_sniper.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]
