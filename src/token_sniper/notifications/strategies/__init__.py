"""Notification strategies."""

from token_sniper.notifications.strategies.base import BaseNotificationStrategy
from token_sniper.notifications.strategies.console import ConsoleNotifier
from token_sniper.notifications.strategies.telegram import TelegramNotifier

__all__ = ["BaseNotificationStrategy", "ConsoleNotifier", "TelegramNotifier"]
