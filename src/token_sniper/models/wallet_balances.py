"""Buyer wallet balances used by the funding check."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WalletBalances:
    primary: int
    """Native asset balance (wei)."""
    secondary: int
    """Secondary asset balance (raw token units)."""
