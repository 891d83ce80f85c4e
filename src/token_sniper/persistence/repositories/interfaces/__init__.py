"""Repository interfaces."""

from token_sniper.persistence.repositories.interfaces.processed_candidate_repository import (
    IProcessedCandidateRepository,
)
from token_sniper.persistence.repositories.interfaces.watchlist_repository import (
    IWatchlistRepository,
)
from token_sniper.persistence.repositories.interfaces.watermark_repository import (
    IWatermarkRepository,
)

__all__ = [
    "IProcessedCandidateRepository",
    "IWatchlistRepository",
    "IWatermarkRepository",
]
