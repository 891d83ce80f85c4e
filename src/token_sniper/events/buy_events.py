# -*- coding: utf-8 -*-
"""Purchase events (bubus BaseEvent)."""

from __future__ import annotations

from typing import Literal, Optional

from bubus import BaseEvent  # type: ignore[import-untyped]


class BuyAttemptedEvent(BaseEvent[None]):
    """Emitted after a candidate completes the buy step (success or failure)."""

    contract_address: str
    source: Literal["feed", "wallet"]
    origin: str
    """Feed display name / fid, or watched wallet address."""
    success: bool
    token_name: Optional[str] = None
    token_symbol: Optional[str] = None
    transaction_hash: Optional[str] = None
    token_amount_received: Optional[str] = None
    asset_spent_wei: Optional[str] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    tax_percent: Optional[float] = None
