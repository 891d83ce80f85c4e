"""WatchedIdentity: a feed account whose posts are scanned for contract addresses.

Identity is the numeric feed id (fid). Owned by the watchlist repository.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from decimal import Decimal
from typing import Any


def _check_buy_amount(amount: Decimal) -> Decimal:
    value = Decimal(str(amount))
    if not value.is_finite() or value <= 0:
        raise ValueError(f"buy_amount must be > 0, got {amount!r}")
    return value


def _check_slippage(slippage: float | None) -> float | None:
    if slippage is None:
        return None
    value = float(slippage)
    if not 0 <= value < 100:
        raise ValueError(f"slippage_percent must be in [0, 100), got {slippage!r}")
    return value


@dataclass(frozen=True, slots=True)
class WatchedIdentity:
    """Watchlist entry for one feed identity."""

    fid: int
    """Numeric feed identity (unique watchlist key)."""
    display_name: str
    buy_amount: Decimal
    """Primary-asset amount to spend per detected candidate (whole units, e.g. ETH)."""
    slippage_percent: float | None = None
    """Per-identity slippage override; None means use the configured default."""
    enabled: bool = True

    @classmethod
    def create(
        cls,
        fid: int,
        display_name: str,
        buy_amount: Decimal,
        *,
        slippage_percent: float | None = None,
        enabled: bool = True,
    ) -> WatchedIdentity:
        """Create a validated entry (buy_amount > 0, slippage in [0, 100))."""
        return cls(
            fid=int(fid),
            display_name=(display_name or "").strip() or str(fid),
            buy_amount=_check_buy_amount(buy_amount),
            slippage_percent=_check_slippage(slippage_percent),
            enabled=enabled,
        )

    def with_buy_amount(self, amount: Decimal) -> WatchedIdentity:
        return replace(self, buy_amount=_check_buy_amount(amount))

    def with_enabled(self, enabled: bool) -> WatchedIdentity:
        return replace(self, enabled=enabled)

    def effective_slippage(self, default: float) -> float:
        """Return the override if set, otherwise the given default."""
        return self.slippage_percent if self.slippage_percent is not None else default

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["buy_amount"] = str(self.buy_amount)
        return data
