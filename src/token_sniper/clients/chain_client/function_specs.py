"""Contract function specs: signature, selector and ABI encoding for eth_call / transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from web3 import Web3


@dataclass(frozen=True, slots=True)
class ContractFunctionSpec:
    """A contract function known by signature only (no full ABI needed)."""

    name: str
    input_types: tuple[str, ...] = ()
    output_types: tuple[str, ...] = ()
    selector: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        digest = Web3.keccak(text=self.signature)
        object.__setattr__(self, "selector", bytes(digest[:4]))

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. buy(uint256,address)."""
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector_hex(self) -> str:
        return "0x" + self.selector.hex()

    def encode(self, args: Sequence[Any] = ()) -> bytes:
        """Return calldata: selector followed by ABI-encoded args."""
        if len(args) != len(self.input_types):
            raise ValueError(
                f"{self.signature} expects {len(self.input_types)} args, got {len(args)}"
            )
        if not self.input_types:
            return self.selector
        return self.selector + abi_encode(list(self.input_types), list(args))

    def decode(self, data: bytes) -> tuple[Any, ...]:
        """Decode return data; empty data for a function with outputs is an error."""
        if not self.output_types:
            return ()
        if not data:
            raise ValueError(f"{self.signature} returned no data")
        return tuple(abi_decode(list(self.output_types), bytes(data)))


# ERC-20 read surface
ERC20_NAME = ContractFunctionSpec("name", (), ("string",))
ERC20_SYMBOL = ContractFunctionSpec("symbol", (), ("string",))
ERC20_DECIMALS = ContractFunctionSpec("decimals", (), ("uint8",))
ERC20_TOTAL_SUPPLY = ContractFunctionSpec("totalSupply", (), ("uint256",))
ERC20_BALANCE_OF = ContractFunctionSpec("balanceOf", ("address",), ("uint256",))
