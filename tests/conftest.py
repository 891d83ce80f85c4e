# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest

from tests.fakes import DEPLOYER_WALLET, USDC, FakeChain, FakeEventBus
from token_sniper.config.config import (
    ApiSettings,
    ChainSettings,
    ContractMonitorSettings,
    SniperSettings,
    WatchedWalletConfig,
)
from token_sniper.persistence.repositories.in_memory import (
    InMemoryProcessedCandidateRepository,
    InMemoryWatchlistRepository,
    InMemoryWatermarkRepository,
)


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings_factory() -> Callable[..., Any]:
    """Build a minimal settings object with the sections the services read."""

    def _build(**sniper_overrides: Any) -> Any:
        sniper = {"submission_delay_seconds": 0.0, "auto_monitor": [], **sniper_overrides}
        return SimpleNamespace(
            sniper=SniperSettings(**sniper),
            contract_monitor=ContractMonitorSettings(
                wallets=[
                    WatchedWalletConfig(
                        address=DEPLOYER_WALLET.upper().replace("0X", "0x"),
                        buy_amount=Decimal("0.035"),
                        slippage_percent=15.0,
                        description="deployer",
                    )
                ],
            ),
            chain=ChainSettings(secondary_asset_address=USDC, private_key=None, wallet_address=None),
            api=ApiSettings(feed_api_key="test-key"),
        )

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Any]) -> Any:
    return settings_factory()


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def watchlist_repo() -> InMemoryWatchlistRepository:
    """Fresh in-memory watchlist per test."""
    return InMemoryWatchlistRepository()


@pytest.fixture
def processed_repo() -> InMemoryProcessedCandidateRepository:
    """Fresh in-memory dedup ledger per test."""
    return InMemoryProcessedCandidateRepository()


@pytest.fixture
def watermark_repo() -> InMemoryWatermarkRepository:
    """Fresh in-memory watermark store per test."""
    return InMemoryWatermarkRepository()
