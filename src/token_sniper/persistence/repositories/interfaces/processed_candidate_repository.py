"""Abstract interface for the dedup ledger (processed candidates)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from token_sniper.models.processed_candidate import ProcessedCandidate


class IProcessedCandidateRepository(ABC):
    """Append-only set of dedup keys. No eviction."""

    @abstractmethod
    async def contains(self, key: str) -> bool:
        """Return True if key has been recorded as processed."""
        ...

    @abstractmethod
    async def try_claim(self, key: str) -> bool:
        """Atomically mark key as in flight.

        Returns False if the key is already processed or claimed by another
        caller; the caller must then drop the candidate.
        """
        ...

    @abstractmethod
    async def add(self, record: ProcessedCandidate) -> None:
        """Record the key as processed and release any claim. Idempotent."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of processed keys."""
        ...
