"""WatchedWallet: a deployer address monitored for contract creations and activations."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from token_sniper.exceptions import InvalidAddressError
from token_sniper.utils.validation import is_hex_address, normalize_address

if TYPE_CHECKING:
    from token_sniper.config import WatchedWalletConfig


@dataclass(frozen=True, slots=True)
class WatchedWallet:
    """Static monitoring target; immutable after load."""

    address: str
    """Lowercase 0x address."""
    buy_amount: Decimal
    slippage_percent: float
    description: str = ""

    @classmethod
    def from_config(cls, config: WatchedWalletConfig) -> WatchedWallet:
        """Build from settings; raises InvalidAddressError for malformed addresses."""
        if not is_hex_address(config.address):
            raise InvalidAddressError(config.address)
        return cls(
            address=normalize_address(config.address),
            buy_amount=Decimal(str(config.buy_amount)),
            slippage_percent=float(config.slippage_percent),
            description=config.description,
        )
