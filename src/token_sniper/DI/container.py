# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from token_sniper.clients.chain_client import ChainClient
from token_sniper.clients.feed_api import FeedApiClient
from token_sniper.clients.http import AsyncHttpClient
from token_sniper.config import Settings, get_settings
from token_sniper.events.bus import get_event_bus
from token_sniper.notifications.notification_manager import NotificationService
from token_sniper.notifications.strategies.base import BaseNotificationStrategy
from token_sniper.notifications.strategies.console import ConsoleNotifier
from token_sniper.notifications.strategies.telegram import TelegramNotifier
from token_sniper.notifications.stylers.notification_styler import EventNotificationStyler
from token_sniper.persistence.repositories.in_memory import (
    InMemoryProcessedCandidateRepository,
    InMemoryWatchlistRepository,
    InMemoryWatermarkRepository,
)
from token_sniper.services.buy_execution import BuyExecutionService
from token_sniper.services.contract_monitor import ContractCreationDetector
from token_sniper.services.feed_detection import FeedChangeDetector
from token_sniper.services.notifications import BuyResultNotifier
from token_sniper.services.pipeline import CandidatePipeline
from token_sniper.services.scheduler import MonitoringScheduler
from token_sniper.services.token_validation import TokenValidator


def _feed_api_headers(settings: Settings) -> dict[str, str]:
    headers = {"accept": "application/json"}
    if settings.api.feed_api_key:
        headers["x-api-key"] = settings.api.feed_api_key
    return headers


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, clients, repositories, pipeline and timers."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
        default_headers=providers.Callable(_feed_api_headers, config),
    )

    feed_api_client = providers.Singleton(
        FeedApiClient,
        http_client=http_client,
        settings=config,
    )

    chain_client = providers.Singleton(
        ChainClient,
        settings=config,
    )

    event_bus = providers.Callable(get_event_bus)

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    buy_result_notifier = providers.Singleton(
        BuyResultNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )

    watchlist_repository = providers.Singleton(InMemoryWatchlistRepository)

    processed_candidate_repository = providers.Singleton(InMemoryProcessedCandidateRepository)

    watermark_repository = providers.Singleton(InMemoryWatermarkRepository)

    token_validator = providers.Singleton(
        TokenValidator,
        chain_client=chain_client,
        settings=config,
    )

    buy_execution_service = providers.Singleton(
        BuyExecutionService,
        chain_client=chain_client,
        settings=config,
    )

    candidate_pipeline = providers.Singleton(
        CandidatePipeline,
        processed_repository=processed_candidate_repository,
        token_validator=token_validator,
        buy_execution=buy_execution_service,
        event_bus=event_bus,
    )

    feed_change_detector = providers.Singleton(
        FeedChangeDetector,
        feed_client=feed_api_client,
        watermark_repository=watermark_repository,
        settings=config,
    )

    contract_creation_detector = providers.Singleton(
        ContractCreationDetector,
        chain_client=chain_client,
        pipeline=candidate_pipeline,
        settings=config,
    )

    monitoring_scheduler = providers.Singleton(
        MonitoringScheduler,
        feed_client=feed_api_client,
        watchlist_repository=watchlist_repository,
        processed_repository=processed_candidate_repository,
        feed_detector=feed_change_detector,
        pipeline=candidate_pipeline,
        settings=config,
        contract_detector=contract_creation_detector,
    )
