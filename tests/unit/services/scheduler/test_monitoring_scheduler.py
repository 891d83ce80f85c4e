# -*- coding: utf-8 -*-
"""Unit tests for MonitoringScheduler."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from token_sniper.clients.feed_api import FeedIdentity
from token_sniper.config.config import AutoMonitorIdentity
from token_sniper.exceptions import FeedApiError, IdentityNotFoundError
from token_sniper.models.candidate import Candidate
from token_sniper.models.watched_identity import WatchedIdentity
from token_sniper.persistence.repositories.in_memory import (
    InMemoryProcessedCandidateRepository,
    InMemoryWatchlistRepository,
)
from token_sniper.services.scheduler import MonitoringScheduler

ADDR_A = "0x" + "a1" * 20
ADDR_B = "0x" + "b2" * 20


def _pipeline(processed: frozenset[str] = frozenset()) -> AsyncMock:
    pipeline = AsyncMock()
    pipeline.is_processed = AsyncMock(side_effect=lambda c: c.contract_address in processed)
    return pipeline


def _build(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    *,
    feed: Any = None,
    detector: Any = None,
    pipeline: Any = None,
    contract_detector: Any = None,
    sleep: Any = None,
) -> MonitoringScheduler:
    return MonitoringScheduler(
        feed or AsyncMock(),
        watchlist_repo,
        processed_repo,
        detector or AsyncMock(),
        pipeline or _pipeline(),
        settings,
        contract_detector,
        sleep=sleep or AsyncMock(),
    )


def _candidate(address: str, fid: int, now_utc: datetime) -> Candidate:
    return Candidate.from_post(address, post_hash=f"0x{fid}", fid=fid, posted_at=now_utc)


async def test_add_identity_resolves_and_applies_default_amount(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    feed = AsyncMock()
    feed.resolve_identity = AsyncMock(return_value=FeedIdentity(fid=99, username="alice"))
    scheduler = _build(settings, watchlist_repo, processed_repo, feed=feed)

    entry = await scheduler.add_identity("alice")

    assert entry.fid == 99
    assert entry.buy_amount == settings.sniper.default_buy_amount
    assert await watchlist_repo.get(99) == entry


async def test_add_identity_unknown_raises_not_found(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    feed = AsyncMock()
    feed.resolve_identity = AsyncMock(return_value=None)
    scheduler = _build(settings, watchlist_repo, processed_repo, feed=feed)

    with pytest.raises(IdentityNotFoundError):
        await scheduler.add_identity("ghost")
    assert await watchlist_repo.list_all() == []


async def test_add_identity_twice_overwrites_entry(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    feed = AsyncMock()
    feed.resolve_identity = AsyncMock(return_value=FeedIdentity(fid=99, username="alice"))
    scheduler = _build(settings, watchlist_repo, processed_repo, feed=feed)

    await scheduler.add_identity("alice", Decimal("0.01"))
    await scheduler.add_identity("99", Decimal("0.5"), slippage_percent=20)

    entries = await scheduler.list_watched()
    assert len(entries) == 1
    assert entries[0].buy_amount == Decimal("0.5")
    assert entries[0].slippage_percent == 20.0


async def test_add_identity_rejects_invalid_amount(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    feed = AsyncMock()
    feed.resolve_identity = AsyncMock(return_value=FeedIdentity(fid=99, username="alice"))
    scheduler = _build(settings, watchlist_repo, processed_repo, feed=feed)

    with pytest.raises(ValueError):
        await scheduler.add_identity("alice", Decimal("0"))


async def test_update_and_toggle_unknown_identity_return_false(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    scheduler = _build(settings, watchlist_repo, processed_repo)

    assert await scheduler.update_buy_amount(404, Decimal("1")) is False
    assert await scheduler.set_enabled(404, False) is False
    assert await scheduler.remove_identity(404) is False


async def test_update_buy_amount_changes_entry(
    settings: Any, watchlist_repo: InMemoryWatchlistRepository, processed_repo: InMemoryProcessedCandidateRepository
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("1")))
    scheduler = _build(settings, watchlist_repo, processed_repo)

    assert await scheduler.update_buy_amount(1, Decimal("2")) is True
    entry = await watchlist_repo.get(1)
    assert entry is not None and entry.buy_amount == Decimal("2")


async def test_auto_monitor_skips_unresolvable_identities(
    settings_factory: Callable[..., Any],
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
) -> None:
    settings = settings_factory(
        auto_monitor=[
            AutoMonitorIdentity(identifier="ghost", buy_amount=Decimal("0.01")),
            AutoMonitorIdentity(identifier="flaky", buy_amount=Decimal("0.01")),
            AutoMonitorIdentity(identifier="alice", buy_amount=Decimal("0.02"), slippage_percent=15),
        ]
    )
    feed = AsyncMock()
    feed.resolve_identity = AsyncMock(
        side_effect=[None, FeedApiError("down", status_code=503), FeedIdentity(fid=99, username="alice")]
    )
    scheduler = _build(settings, watchlist_repo, processed_repo, feed=feed)

    added = await scheduler.auto_monitor()

    assert [i.fid for i in added] == [99]
    assert added[0].slippage_percent == 15.0


async def test_run_cycle_submits_candidates_with_delay_between(
    settings_factory: Callable[..., Any],
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    now_utc: datetime,
) -> None:
    settings = settings_factory(submission_delay_seconds=2.0, default_slippage_percent=5.0)
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    await watchlist_repo.save(WatchedIdentity.create(2, "bob", Decimal("0.02"), slippage_percent=12))
    detector = AsyncMock()
    detector.scan = AsyncMock(
        side_effect=lambda identity: [_candidate(ADDR_A if identity.fid == 1 else ADDR_B, identity.fid, now_utc)]
    )
    pipeline = _pipeline()
    sleep = AsyncMock()
    scheduler = _build(
        settings, watchlist_repo, processed_repo, detector=detector, pipeline=pipeline, sleep=sleep
    )

    await scheduler.run_cycle()

    calls = pipeline.process.await_args_list
    assert [c.args[0].contract_address for c in calls] == [ADDR_A, ADDR_B]
    assert calls[0].kwargs["slippage_percent"] == 5.0
    assert calls[0].kwargs["origin_label"] == "alice"
    assert calls[1].kwargs["buy_amount"] == Decimal("0.02")
    assert calls[1].kwargs["slippage_percent"] == 12.0
    sleep.assert_awaited_once_with(2.0)


async def test_run_cycle_skips_processed_candidates_without_delay(
    settings_factory: Callable[..., Any],
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    now_utc: datetime,
) -> None:
    settings = settings_factory(submission_delay_seconds=2.0)
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    await watchlist_repo.save(WatchedIdentity.create(2, "bob", Decimal("0.01")))
    detector = AsyncMock()
    detector.scan = AsyncMock(
        side_effect=lambda identity: [_candidate(ADDR_A if identity.fid == 1 else ADDR_B, identity.fid, now_utc)]
    )
    pipeline = _pipeline(frozenset({ADDR_A}))
    sleep = AsyncMock()
    scheduler = _build(
        settings, watchlist_repo, processed_repo, detector=detector, pipeline=pipeline, sleep=sleep
    )

    await scheduler.run_cycle()

    assert [c.args[0].contract_address for c in pipeline.process.await_args_list] == [ADDR_B]
    sleep.assert_not_awaited()


async def test_stop_lets_in_flight_cycle_complete(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    now_utc: datetime,
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    entered = asyncio.Event()
    gate = asyncio.Event()

    async def _scan(identity: WatchedIdentity) -> list[Candidate]:
        entered.set()
        await gate.wait()
        return [_candidate(ADDR_A, identity.fid, now_utc)]

    detector = AsyncMock()
    detector.scan = AsyncMock(side_effect=_scan)
    pipeline = _pipeline()
    scheduler = _build(settings, watchlist_repo, processed_repo, detector=detector, pipeline=pipeline)

    scheduler.start(interval_seconds=60)
    await asyncio.wait_for(entered.wait(), timeout=1)
    scheduler.stop()
    assert scheduler.running is False

    gate.set()
    await scheduler.wait_idle()

    assert [c.args[0].contract_address for c in pipeline.process.await_args_list] == [ADDR_A]


async def test_run_cycle_skips_candidates_of_identity_disabled_mid_cycle(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    now_utc: datetime,
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    await watchlist_repo.save(WatchedIdentity.create(2, "bob", Decimal("0.01")))

    async def _scan(identity: WatchedIdentity) -> list[Candidate]:
        if identity.fid == 2:
            await watchlist_repo.save(identity.with_enabled(False))
        return [_candidate(ADDR_A if identity.fid == 1 else ADDR_B, identity.fid, now_utc)]

    detector = AsyncMock()
    detector.scan = AsyncMock(side_effect=_scan)
    pipeline = _pipeline()
    scheduler = _build(settings, watchlist_repo, processed_repo, detector=detector, pipeline=pipeline)

    await scheduler.run_cycle()

    assert [c.args[0].contract_address for c in pipeline.process.await_args_list] == [ADDR_A]


async def test_run_cycle_continues_after_scan_and_pipeline_errors(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
    now_utc: datetime,
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    await watchlist_repo.save(WatchedIdentity.create(2, "bob", Decimal("0.01")))
    await watchlist_repo.save(WatchedIdentity.create(3, "carol", Decimal("0.01")))

    async def _scan(identity: WatchedIdentity) -> list[Candidate]:
        if identity.fid == 1:
            raise RuntimeError("scan exploded")
        return [_candidate(ADDR_A if identity.fid == 2 else ADDR_B, identity.fid, now_utc)]

    detector = AsyncMock()
    detector.scan = AsyncMock(side_effect=_scan)
    pipeline = _pipeline()
    pipeline.process = AsyncMock(side_effect=[RuntimeError("pipeline exploded"), None])
    scheduler = _build(settings, watchlist_repo, processed_repo, detector=detector, pipeline=pipeline)

    await scheduler.run_cycle()

    assert pipeline.process.await_count == 2


async def test_run_cycle_does_nothing_when_sniper_disabled(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    detector = AsyncMock()
    scheduler = _build(settings, watchlist_repo, processed_repo, detector=detector)
    scheduler.set_sniper_enabled(False)

    await scheduler.run_cycle()

    detector.scan.assert_not_awaited()


async def test_start_twice_is_noop_and_stop_stops_contract_monitor(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
) -> None:
    contract_detector = Mock()
    contract_detector.wait_idle = AsyncMock()
    scheduler = _build(settings, watchlist_repo, processed_repo, contract_detector=contract_detector)

    handle = scheduler.start(interval_seconds=60)
    scheduler.start(interval_seconds=60)

    assert handle is scheduler
    assert scheduler.running is True
    contract_detector.start.assert_called_once_with()

    handle.stop()
    await scheduler.wait_idle()

    assert scheduler.running is False
    contract_detector.stop.assert_called_once_with()


async def test_status_reports_counts(
    settings: Any,
    watchlist_repo: InMemoryWatchlistRepository,
    processed_repo: InMemoryProcessedCandidateRepository,
) -> None:
    await watchlist_repo.save(WatchedIdentity.create(1, "alice", Decimal("0.01")))
    scheduler = _build(settings, watchlist_repo, processed_repo)

    status = (await scheduler.status()).to_dict()

    assert status["watchlist_size"] == 1
    assert status["processed_count"] == 0
    assert status["running"] is False
    assert status["contract_monitor_wallets"] == []
