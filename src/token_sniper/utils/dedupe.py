"""Deduplication key for candidates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from token_sniper.models.candidate import Candidate


def dedup_key(candidate: Candidate) -> str:
    """Return the stable ledger key for a candidate.

    Feed candidates are keyed by (address, post hash), so the same address in a
    later post is a new candidate. Wallet candidates are keyed by address alone:
    the origin (the watched wallet) does not distinguish repeats.
    """
    address = candidate.contract_address.strip().lower()
    if candidate.source == "wallet":
        return f"ca:{address}"
    return f"post:{address}|{candidate.origin_hash.strip()}"
