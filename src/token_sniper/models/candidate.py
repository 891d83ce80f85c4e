"""Candidate: a contract address produced by a detector, consumed once by the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum


class CandidateSource(StrEnum):
    """Which detector produced the candidate."""

    FEED = "feed"
    WALLET = "wallet"


@dataclass(frozen=True, slots=True)
class Candidate:
    """Ephemeral detection record; never persisted."""

    contract_address: str
    """Lowercase 0x address found by the detector."""
    origin_hash: str
    """Post hash (feed) or watched wallet address (wallet)."""
    origin_identity: int | str
    """Numeric feed id (feed) or watched wallet address (wallet)."""
    discovered_at: datetime
    source: CandidateSource
    transaction_hash: str | None = None
    """Deployment/activation tx for wallet candidates (informational)."""

    @classmethod
    def from_post(
        cls,
        contract_address: str,
        *,
        post_hash: str,
        fid: int,
        posted_at: datetime,
    ) -> Candidate:
        return cls(
            contract_address=contract_address.strip().lower(),
            origin_hash=post_hash,
            origin_identity=fid,
            discovered_at=posted_at,
            source=CandidateSource.FEED,
        )

    @classmethod
    def from_wallet(
        cls,
        contract_address: str,
        *,
        wallet: str,
        transaction_hash: str | None = None,
        discovered_at: datetime | None = None,
    ) -> Candidate:
        wallet = wallet.strip().lower()
        return cls(
            contract_address=contract_address.strip().lower(),
            origin_hash=wallet,
            origin_identity=wallet,
            discovered_at=discovered_at or datetime.now(UTC),
            source=CandidateSource.WALLET,
            transaction_hash=transaction_hash,
        )
