"""Known read-only pricing and payable purchase entry points of bonding-curve tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable

from token_sniper.clients.chain_client.function_specs import ContractFunctionSpec


class QuoteKind(StrEnum):
    DIRECT = "direct"
    """Function takes the asset amount and returns tokens out."""
    SPOT_PRICE = "spot_price"
    """Function returns the price of one token (1e18 scale); tokens out = amount * 1e18 / price."""


@dataclass(frozen=True, slots=True)
class QuoteEntryPoint:
    spec: ContractFunctionSpec
    kind: QuoteKind

    def args(self, amount_wei: int) -> tuple[Any, ...]:
        return (amount_wei,) if self.kind is QuoteKind.DIRECT else ()

    def tokens_out(self, raw: int, amount_wei: int) -> int:
        if self.kind is QuoteKind.DIRECT:
            return raw
        if raw <= 0:
            return 0
        return amount_wei * 10**18 // raw


@dataclass(frozen=True, slots=True)
class BuyEntryPoint:
    spec: ContractFunctionSpec
    build_args: Callable[[int, str], tuple[Any, ...]]
    """(min_out, recipient) -> call arguments."""


GET_BUY_QUOTE = ContractFunctionSpec("getBuyQuote", ("uint256",), ("uint256",))
PRICE = ContractFunctionSpec("price", (), ("uint256",))
GET_PRICE = ContractFunctionSpec("getPrice", (), ("uint256",))
GET_BUY_PRICE = ContractFunctionSpec("getBuyPrice", ("uint256",), ("uint256",))

BUY_MIN_OUT = ContractFunctionSpec("buy", ("uint256",), ("uint256",))
BUY_MIN_OUT_RECIPIENT = ContractFunctionSpec("buy", ("uint256", "address"), ("uint256",))
BUY_NO_ARGS = ContractFunctionSpec("buy", (), ("uint256",))
BUY_MIN_OUT_RECIPIENT_DATA = ContractFunctionSpec("buy", ("uint256", "address", "bytes"), ("uint256",))

# Priority order matters: first nonzero quote wins.
QUOTE_ENTRY_POINTS: tuple[QuoteEntryPoint, ...] = (
    QuoteEntryPoint(GET_BUY_QUOTE, QuoteKind.DIRECT),
    QuoteEntryPoint(PRICE, QuoteKind.SPOT_PRICE),
    QuoteEntryPoint(GET_PRICE, QuoteKind.SPOT_PRICE),
    QuoteEntryPoint(GET_BUY_PRICE, QuoteKind.DIRECT),
)

# Priority order matters: first signature that submits wins.
BUY_ENTRY_POINTS: tuple[BuyEntryPoint, ...] = (
    BuyEntryPoint(BUY_MIN_OUT, lambda min_out, recipient: (min_out,)),
    BuyEntryPoint(BUY_MIN_OUT_RECIPIENT, lambda min_out, recipient: (min_out, recipient)),
    BuyEntryPoint(BUY_NO_ARGS, lambda min_out, recipient: ()),
    BuyEntryPoint(BUY_MIN_OUT_RECIPIENT_DATA, lambda min_out, recipient: (min_out, recipient, b"")),
)

# Simulations used for tax detection (min_out = 0).
TAX_SIMULATION_ENTRY_POINTS: tuple[BuyEntryPoint, ...] = BUY_ENTRY_POINTS[:2]
