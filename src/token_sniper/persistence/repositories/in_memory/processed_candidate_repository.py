# -*- coding: utf-8 -*-
"""In-memory dedup ledger (keyed by dedup key)."""

from __future__ import annotations

from token_sniper.models.processed_candidate import ProcessedCandidate
from token_sniper.persistence.repositories.interfaces.processed_candidate_repository import (
    IProcessedCandidateRepository,
)


class InMemoryProcessedCandidateRepository(IProcessedCandidateRepository):
    """In-memory implementation of IProcessedCandidateRepository.

    try_claim() checks and inserts without awaiting, so two timers cannot both
    claim the same key.
    """

    def __init__(self) -> None:
        """Initialize an empty ledger."""
        self._store: dict[str, ProcessedCandidate] = {}
        self._in_flight: set[str] = set()

    async def contains(self, key: str) -> bool:
        return key in self._store

    async def try_claim(self, key: str) -> bool:
        if key in self._store or key in self._in_flight:
            return False
        self._in_flight.add(key)
        return True

    async def add(self, record: ProcessedCandidate) -> None:
        self._in_flight.discard(record.dedup_key)
        if record.dedup_key not in self._store:
            self._store[record.dedup_key] = record

    async def count(self) -> int:
        return len(self._store)

    async def get(self, key: str) -> ProcessedCandidate | None:
        """Return the ledger entry for key (for status/inspection)."""
        return self._store.get(key)
