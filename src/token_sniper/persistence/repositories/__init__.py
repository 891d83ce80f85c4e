# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory)."""

from token_sniper.persistence.repositories.interfaces import (
    IProcessedCandidateRepository,
    IWatchlistRepository,
    IWatermarkRepository,
)
from token_sniper.persistence.repositories.in_memory import (
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
