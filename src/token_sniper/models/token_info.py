"""TokenInfo: metadata read from a candidate contract during one processing pass."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_NAME = "Unknown"
DEFAULT_SYMBOL = "UNKNOWN"
DEFAULT_DECIMALS = 18
DEFAULT_TOTAL_SUPPLY = 0


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """Result of the token validation probe."""

    address: str
    name: str = DEFAULT_NAME
    symbol: str = DEFAULT_SYMBOL
    decimals: int = DEFAULT_DECIMALS
    total_supply: int = DEFAULT_TOTAL_SUPPLY
    is_valid: bool = False

    @classmethod
    def invalid(cls, address: str) -> TokenInfo:
        return cls(address=address, name="", symbol="", is_valid=False)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["total_supply"] = str(self.total_supply)
        return data
