"""In-memory repository implementations."""

from token_sniper.persistence.repositories.in_memory.processed_candidate_repository import (
    InMemoryProcessedCandidateRepository,
)
from token_sniper.persistence.repositories.in_memory.watchlist_repository import (
    InMemoryWatchlistRepository,
)
from token_sniper.persistence.repositories.in_memory.watermark_repository import (
    InMemoryWatermarkRepository,
)

__all__ = [
    "InMemoryProcessedCandidateRepository",
    "InMemoryWatchlistRepository",
    "InMemoryWatermarkRepository",
]
