# -*- coding: utf-8 -*-
"""In-memory feed watermarks (keyed by fid)."""

from __future__ import annotations

from datetime import datetime

from token_sniper.persistence.repositories.interfaces.watermark_repository import (
    IWatermarkRepository,
)


class InMemoryWatermarkRepository(IWatermarkRepository):
    """In-memory implementation of IWatermarkRepository."""

    def __init__(self) -> None:
        self._store: dict[int, datetime] = {}

    async def get(self, fid: int) -> datetime | None:
        return self._store.get(int(fid))

    async def advance(self, fid: int, observed_at: datetime) -> datetime:
        current = self._store.get(int(fid))
        if current is None or observed_at > current:
            self._store[int(fid)] = observed_at
            return observed_at
        return current
