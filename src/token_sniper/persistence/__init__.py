"""Persistence layer (in-process repositories; nothing survives a restart)."""

from token_sniper.persistence.repositories import (
    IProcessedCandidateRepository,
    IWatchlistRepository,
    IWatermarkRepository,
    InMemoryProcessedCandidateRepository,
    InMemoryWatchlistRepository,
    InMemoryWatermarkRepository,
)

__all__ = [
    "IProcessedCandidateRepository",
    "IWatchlistRepository",
    "IWatermarkRepository",
    "InMemoryProcessedCandidateRepository",
    "InMemoryWatchlistRepository",
    "InMemoryWatermarkRepository",
]
