# -*- coding: utf-8 -*-
"""Unit tests for PeriodicTask."""

from __future__ import annotations

import asyncio

import pytest

from token_sniper.services.scheduler import PeriodicTask


async def test_tick_is_skipped_while_previous_run_in_progress() -> None:
    gate = asyncio.Event()
    calls = 0

    async def _slow() -> None:
        nonlocal calls
        calls += 1
        await gate.wait()

    task = PeriodicTask("slow", _slow, 0.01)
    assert task.start() is True
    await asyncio.sleep(0.08)

    assert calls == 1
    assert task.busy is True

    task.stop()
    gate.set()
    await task.wait_idle()
    assert task.busy is False


async def test_stop_lets_in_flight_run_finish() -> None:
    entered = asyncio.Event()
    gate = asyncio.Event()
    finished: list[bool] = []

    async def _blocked() -> None:
        entered.set()
        await gate.wait()
        finished.append(True)

    task = PeriodicTask("blocked", _blocked, 60)
    task.start()
    await asyncio.wait_for(entered.wait(), timeout=1)

    task.stop()
    assert task.running is False
    assert finished == []

    gate.set()
    await task.wait_idle()
    assert finished == [True]


async def test_start_twice_returns_false() -> None:
    async def _noop() -> None:
        return None

    task = PeriodicTask("noop", _noop, 60)
    assert task.start() is True
    assert task.start() is False
    task.stop()
    task.stop()
    assert task.running is False


async def test_start_rejects_non_positive_interval() -> None:
    async def _noop() -> None:
        return None

    task = PeriodicTask("noop", _noop, 60)
    with pytest.raises(ValueError):
        task.start(0)
    assert task.running is False


async def test_failed_run_does_not_stop_the_timer() -> None:
    calls = 0

    async def _fail() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("boom")

    task = PeriodicTask("fail", _fail, 0.01)
    task.start()
    await asyncio.sleep(0.05)
    task.stop()
    await task.wait_idle()

    assert calls >= 2


async def test_run_now_propagates_errors() -> None:
    async def _fail() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await PeriodicTask("fail", _fail, 60).run_now()
