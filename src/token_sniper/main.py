# -*- coding: utf-8 -*-
"""
Entry point for the token sniper.

Orchestrates: logging, settings, container, notifications, auto-monitored
identities, the feed scheduler and the contract monitor, shutdown (SIGINT or
CancelledError).

Run with: python -m token_sniper.main
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from token_sniper.DI import Container
from token_sniper.config import get_settings
from token_sniper.exceptions import MissingRequiredConfigError
from token_sniper.logging.config import configure_logging
from token_sniper.notifications.types import NotificationMessage
from token_sniper.utils import mask_address


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGINT, shutdown_event.set)
        loop.add_signal_handler(signal.SIGTERM, shutdown_event.set)
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def _log_wallet_balances(container: Container, logger: Any) -> None:
    chain_client = container.chain_client()
    wallet = chain_client.wallet_address
    if wallet is None:
        return
    try:
        balances = await container.buy_execution_service().get_wallet_balances(wallet)
    except Exception as e:
        logger.warning("main_wallet_balance_unavailable", error_type=type(e).__name__, error_message=str(e))
        return
    logger.info(
        "main_wallet_balances",
        wallet_masked=mask_address(wallet),
        primary_balance_wei=balances.primary,
        secondary_balance=balances.secondary,
    )


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    missing = settings.missing_required()
    if missing:
        logger.error("main_missing_required_config", missing=missing)
        raise MissingRequiredConfigError(*missing)

    container = Container()
    notification_service = container.notification_service()
    buy_result_notifier = container.buy_result_notifier()
    scheduler = container.monitoring_scheduler()
    await notification_service.initialize()
    buy_result_notifier.start()

    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    try:
        await _log_wallet_balances(container, logger)
        watched = await scheduler.auto_monitor()
        scheduler.start(settings.sniper.check_interval_seconds)
        status = await scheduler.status()
        logger.info("main_monitoring_started", **status.to_dict())
        notification_service.notify(
            NotificationMessage(
                event_type="system_started",
                message="Token sniper started",
                payload={
                    "identities": [f"{i.display_name} ({i.fid})" for i in watched],
                    "wallets": [mask_address(w) for w in status.contract_monitor_wallets],
                },
            )
        )
        await shutdown_event.wait()
    finally:
        scheduler.stop()
        await scheduler.wait_idle()
        buy_result_notifier.stop()
        notification_service.notify(
            NotificationMessage(event_type="system_stopped", message="Token sniper stopped", payload={})
        )
        await notification_service.shutdown()
        await container.http_client().aclose()
        await container.chain_client().aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
