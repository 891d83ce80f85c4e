"""ProcessedCandidate: dedup ledger entry.

Identity is dedup_key (see utils.dedupe.dedup_key). Entries are permanent for
the process lifetime; contract addresses are not reused.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from token_sniper.models.candidate import Candidate
from token_sniper.utils.dedupe import dedup_key


@dataclass(frozen=True, slots=True)
class ProcessedCandidate:
    """Record that a candidate went through the pipeline."""

    dedup_key: str
    contract_address: str
    outcome: str
    """Short outcome tag, e.g. bought, buy_failed:no_quote, invalid_token, skipped_funds."""
    processed_at: datetime

    @classmethod
    def create(
        cls,
        candidate: Candidate,
        outcome: str,
        *,
        processed_at: datetime | None = None,
    ) -> ProcessedCandidate:
        return cls(
            dedup_key=dedup_key(candidate),
            contract_address=candidate.contract_address,
            outcome=outcome,
            processed_at=processed_at or datetime.now(UTC),
        )
