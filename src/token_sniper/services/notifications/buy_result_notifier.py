# -*- coding: utf-8 -*-
"""BuyResultNotifier: listens to BuyAttemptedEvent and sends notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from token_sniper.events.buy_events import BuyAttemptedEvent
from token_sniper.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from token_sniper.notifications.notification_manager import NotificationService


_ERROR_LABELS = {
    "no_quote": "No price quote available",
    "no_buy_function": "No purchase entry point accepted the call",
    "tx_reverted": "Transaction reverted",
    "no_receipt": "Transaction not confirmed",
    "unsupported_funding": "Insufficient primary funds (secondary asset not convertible)",
    "unexpected": "Unexpected error",
}


def build_buy_payload(event: BuyAttemptedEvent) -> dict[str, Any]:
    """Payload consumed by EventNotificationStyler._render_buy."""
    payload: dict[str, Any] = {
        "contract_address": event.contract_address,
        "source": event.source,
        "origin": event.origin,
        "token": {"name": event.token_name, "symbol": event.token_symbol},
    }
    optional = {
        "transaction_hash": event.transaction_hash,
        "token_amount_received": event.token_amount_received,
        "asset_spent_wei": event.asset_spent_wei,
        "tax_percent": event.tax_percent,
        "error_kind": event.error_kind,
        "error_message": event.error_message,
    }
    payload.update({k: v for k, v in optional.items() if v is not None})
    return payload


class BuyResultNotifier:
    """Subscribes to BuyAttemptedEvent and forwards it to NotificationService."""

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to BuyAttemptedEvent."""
        self._event_bus.on(BuyAttemptedEvent, self._on_buy_attempted)
        self._logger.debug("buy_result_notifier_started")

    def stop(self) -> None:
        """Unsubscribe from BuyAttemptedEvent."""
        key = BuyAttemptedEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_buy_attempted]
        self._logger.debug("buy_result_notifier_stopped")

    def _on_buy_attempted(self, event: BuyAttemptedEvent) -> None:
        label = event.token_symbol or event.contract_address
        if event.success:
            event_type = "buy_succeeded"
            message = f"Bought {label}"
        else:
            event_type = "buy_failed"
            reason = _ERROR_LABELS.get(event.error_kind or "", event.error_kind or "unknown")
            message = f"Buy of {label} failed: {reason}"

        self._notification_service.notify(
            NotificationMessage(event_type=event_type, message=message, payload=build_buy_payload(event))
        )
        self._logger.debug(
            "buy_result_notified",
            notification_event_type=event_type,
            candidate_address=event.contract_address,
        )
