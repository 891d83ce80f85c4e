"""Notification-related services."""

from token_sniper.services.notifications.buy_result_notifier import BuyResultNotifier

__all__ = ["BuyResultNotifier"]
