# -*- coding: utf-8 -*-
"""Unit tests for Settings."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from token_sniper.config.config import (
    ContractMonitorSettings,
    Settings,
    SniperSettings,
    WatchedWalletConfig,
)


def _settings(**overrides: object) -> Settings:
    return Settings.from_env(_env_file=None, **overrides)


def test_missing_required_lists_unset_values(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API__FEED_API_KEY", "CHAIN__PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = _settings(api={"feed_api_key": "  "}, chain={"private_key": None})

    assert settings.missing_required() == ["API__FEED_API_KEY", "CHAIN__PRIVATE_KEY"]


def test_missing_required_empty_when_configured() -> None:
    settings = _settings(api={"feed_api_key": "key"}, chain={"private_key": "0x" + "01" * 32})

    assert settings.missing_required() == []


def test_contract_monitor_wallets_are_lowercased() -> None:
    monitor = ContractMonitorSettings(
        wallets=[WatchedWalletConfig(address=" 0xD211B9417F28D128435CD8D022AEAEBBC8A28F17 ", buy_amount=Decimal("1"))]
    )

    assert monitor.wallets[0].address == "0xd211b9417f28d128435cd8d022aeaebbc8a28f17"


def test_sniper_defaults() -> None:
    sniper = SniperSettings()

    assert sniper.default_buy_amount == Decimal("0.01")
    assert sniper.submission_delay_seconds == 2.0
    assert sniper.auto_monitor[0].identifier == "jessepollak"


def test_sniper_rejects_non_positive_buy_amount() -> None:
    with pytest.raises(ValidationError):
        SniperSettings(default_buy_amount=Decimal("0"))


def test_settings_are_frozen() -> None:
    settings = _settings()
    with pytest.raises(ValidationError):
        settings.app = settings.app  # type: ignore[misc]
