# -*- coding: utf-8 -*-
"""PeriodicTask: runs an async callback now and then every interval, one run at a time."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import structlog


class PeriodicTask:
    """Fire-and-forget interval timer with an overlap guard.

    A timer tick that fires while the previous run is still in progress is
    skipped. run_now() waits for the in-flight run instead. stop() only cancels
    future ticks; an in-flight run completes (see wait_idle()).
    """

    def __init__(
        self,
        name: str,
        callback: Callable[[], Awaitable[None]],
        interval_seconds: float,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self.name = name
        self._callback = callback
        self._interval = interval_seconds
        self._lock = asyncio.Lock()
        self._loop_task: asyncio.Task[None] | None = None
        self._runs: set[asyncio.Task[None]] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def start(self, interval_seconds: float | None = None) -> bool:
        """Start ticking (first tick immediately). Returns False if already running."""
        if self.running:
            self._logger.warning("periodic_task_already_running", periodic_task=self.name)
            return False
        if interval_seconds is not None:
            self._interval = interval_seconds
        if self._interval <= 0:
            raise ValueError(f"interval_seconds must be > 0, got {self._interval!r}")
        self._loop_task = asyncio.create_task(self._loop(), name=f"{self.name}-timer")
        self._logger.info(
            "periodic_task_started",
            periodic_task=self.name,
            interval_seconds=self._interval,
        )
        return True

    def stop(self) -> None:
        """Cancel future ticks. Idempotent."""
        if self._loop_task is None:
            return
        self._loop_task.cancel()
        self._loop_task = None
        self._logger.info("periodic_task_stopped", periodic_task=self.name)

    async def run_now(self) -> None:
        """Run the callback, waiting for any in-flight run first. Errors propagate."""
        async with self._lock:
            await self._callback()

    async def wait_idle(self) -> None:
        """Wait until runs started by the timer have finished."""
        if self._runs:
            await asyncio.gather(*self._runs, return_exceptions=True)

    async def _loop(self) -> None:
        while True:
            run = asyncio.create_task(self._tick(), name=f"{self.name}-run")
            self._runs.add(run)
            run.add_done_callback(self._runs.discard)
            await asyncio.sleep(self._interval)

    async def _tick(self) -> None:
        if self._lock.locked():
            self._logger.warning("periodic_task_tick_skipped_busy", periodic_task=self.name)
            return
        async with self._lock:
            try:
                await self._callback()
            except Exception as e:
                self._logger.exception(
                    "periodic_task_run_failed",
                    periodic_task=self.name,
                    error_type=type(e).__name__,
                )
