"""NotificationService: fan-out of notification messages to every channel."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from token_sniper.notifications.strategies import BaseNotificationStrategy
from token_sniper.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Queue messages and deliver them to all configured channels from one worker."""

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 500
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker_task: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    async def initialize(self) -> None:
        """Initialize the channels and start the delivery worker."""
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        self._queue = asyncio.Queue[NotificationMessage](maxsize=self.queue_size)
        self._worker_task = asyncio.create_task(self._worker_loop())
        self._logger.debug(
            "notification_init_complete",
            notification_notifiers_count=len(self.notifiers),
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        """Drain pending messages, stop the worker and close the channels."""
        if self._queue is not None:
            self._queue.shutdown()
            await self._queue.join()
        if self._worker_task is not None:
            await self._worker_task
            self._worker_task = None
        self._queue = None
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete")

    def notify(self, message: NotificationMessage) -> None:
        """Enqueue a message without blocking the caller.

        Raises:
            RuntimeError: Channels are configured but initialize() was not awaited.
        """
        if self._queue is None:
            if not self.notifiers:
                return
            raise RuntimeError("NotificationService not initialized")
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )

    async def _worker_loop(self) -> None:
        queue = self._queue
        if queue is None:
            return
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                break
            try:
                for notifier in self.notifiers:
                    await notifier.send_notification(message)
            finally:
                queue.task_done()
