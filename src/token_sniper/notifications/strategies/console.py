# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from token_sniper.notifications.strategies.base import BaseNotificationStrategy
from token_sniper.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from token_sniper.config import Settings
    from token_sniper.notifications.types import NotificationStyler

_HTML_TAG = re.compile(r"</?[a-z]+>")


class ConsoleNotifier(BaseNotificationStrategy):
    """Print notifications to stdout with the styler's HTML tags stripped."""

    def __init__(self, settings: "Settings", styler: "NotificationStyler") -> None:
        super().__init__(settings)
        self._running = False
        self._styler = styler

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self.is_running or not self.settings.console.enabled:
            return
        print(_HTML_TAG.sub("", self._styler.render(message)))
