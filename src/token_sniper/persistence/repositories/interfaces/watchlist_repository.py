"""Abstract interface for the watched-identity store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from token_sniper.models.watched_identity import WatchedIdentity


class IWatchlistRepository(ABC):
    """Watchlist keyed by numeric feed id."""

    @abstractmethod
    async def get(self, fid: int) -> WatchedIdentity | None:
        """Return the entry for fid, or None."""
        ...

    @abstractmethod
    async def save(self, identity: WatchedIdentity) -> None:
        """Insert or overwrite the entry keyed by identity.fid."""
        ...

    @abstractmethod
    async def remove(self, fid: int) -> bool:
        """Remove the entry; return whether it existed. Idempotent."""
        ...

    @abstractmethod
    async def list_all(self) -> list[WatchedIdentity]:
        """Return all entries in insertion order."""
        ...

    async def list_enabled(self) -> list[WatchedIdentity]:
        """Return enabled entries. Default impl filters list_all()."""
        return [i for i in await self.list_all() if i.enabled]
