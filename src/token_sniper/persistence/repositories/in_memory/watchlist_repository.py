# -*- coding: utf-8 -*-
"""In-memory watchlist repository (keyed by fid)."""

from __future__ import annotations

from token_sniper.models.watched_identity import WatchedIdentity
from token_sniper.persistence.repositories.interfaces.watchlist_repository import (
    IWatchlistRepository,
)


class InMemoryWatchlistRepository(IWatchlistRepository):
    """In-memory implementation of IWatchlistRepository.

    Methods never await, so each call is atomic on the event loop shared by
    the scheduler, the contract monitor and the HTTP layer.
    """

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[int, WatchedIdentity] = {}

    async def get(self, fid: int) -> WatchedIdentity | None:
        return self._store.get(int(fid))

    async def save(self, identity: WatchedIdentity) -> None:
        self._store[identity.fid] = identity

    async def remove(self, fid: int) -> bool:
        return self._store.pop(int(fid), None) is not None

    async def list_all(self) -> list[WatchedIdentity]:
        return list(self._store.values())
