"""Abstract interface for per-identity feed watermarks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class IWatermarkRepository(ABC):
    """Last observed post timestamp per feed identity."""

    @abstractmethod
    async def get(self, fid: int) -> datetime | None:
        """Return the watermark, or None if the identity has never been scanned."""
        ...

    @abstractmethod
    async def advance(self, fid: int, observed_at: datetime) -> datetime:
        """Move the watermark forward to observed_at; never backwards.

        Returns the watermark after the update.
        """
        ...
