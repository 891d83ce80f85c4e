"""BuyResult: terminal record of one purchase attempt (never retried)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class BuyErrorKind(StrEnum):
    """Why a purchase attempt did not succeed."""

    NO_QUOTE = "no_quote"
    NO_BUY_FUNCTION = "no_buy_function"
    TX_REVERTED = "tx_reverted"
    NO_RECEIPT = "no_receipt"
    UNSUPPORTED_FUNDING = "unsupported_funding"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class BuyResult:
    """Outcome of BuyExecutionService.buy()."""

    success: bool = False
    transaction_hash: str | None = None
    token_amount_received: int | None = None
    """Post-purchase token balance of the buyer (raw units)."""
    asset_spent: int | None = None
    """Primary asset attached as value (wei)."""
    error_kind: BuyErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def succeeded(
        cls,
        transaction_hash: str,
        *,
        token_amount_received: int | None,
        asset_spent: int,
    ) -> BuyResult:
        return cls(
            success=True,
            transaction_hash=transaction_hash,
            token_amount_received=token_amount_received,
            asset_spent=asset_spent,
        )

    @classmethod
    def failed(
        cls,
        error_kind: BuyErrorKind,
        error_message: str | None = None,
        *,
        transaction_hash: str | None = None,
    ) -> BuyResult:
        return cls(
            success=False,
            transaction_hash=transaction_hash,
            error_kind=error_kind,
            error_message=error_message,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["error_kind"] = str(self.error_kind) if self.error_kind else None
        return data
