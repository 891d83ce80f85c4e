# -*- coding: utf-8 -*-
"""Fakes for the chain capability and the event bus shared by unit tests."""

from __future__ import annotations

from typing import Any

from token_sniper.clients.chain_client.function_specs import ContractFunctionSpec
from token_sniper.clients.chain_client.schema import BlockDTO, ReceiptDTO
from token_sniper.exceptions import ChainCallError

BUYER_WALLET = "0x1111111111111111111111111111111111111111"
DEPLOYER_WALLET = "0xd211b9417f28d128435cd8d022aeaebbc8a28f17"
TOKEN = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa1"
USDC = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"


class FakeChain:
    """In-memory chain capability keyed by function signature.

    reads / simulations map a signature to a value (or an exception instance
    to raise). Missing signatures raise ChainCallError like a revert would.
    """

    def __init__(self) -> None:
        self.wallet_address: str | None = BUYER_WALLET
        self.reads: dict[str, Any] = {}
        self.simulations: dict[str, Any] = {}
        self.rejected_submissions: set[str] = set()
        self.submit_attempts: list[str] = []
        self.submitted: list[dict[str, Any]] = []
        self.receipt: ReceiptDTO | Exception | None = ReceiptDTO(transaction_hash="0xtx1", status=1)
        self.code: bytes = b"\x60\x80\x60\x40"
        self.native_balance = 10**18
        self.token_balances: dict[str, int] = {}
        self.token_balance_errors: set[str] = set()
        self.block_number = 0
        self.blocks: dict[int, BlockDTO] = {}
        self.receipts: dict[str, ReceiptDTO] = {}
        self.read_calls: list[str] = []
        self.code_reads = 0

    @staticmethod
    def _answer(table: dict[str, Any], address: str, spec: ContractFunctionSpec) -> tuple[Any, ...]:
        value = table.get(spec.signature)
        if value is None:
            raise ChainCallError("execution reverted", address=address, function=spec.signature)
        if isinstance(value, Exception):
            raise value
        return value if isinstance(value, tuple) else (value,)

    async def read_call(self, address: str, spec: ContractFunctionSpec, args: Any = ()) -> tuple[Any, ...]:
        self.read_calls.append(spec.signature)
        return self._answer(self.reads, address, spec)

    async def simulate_call(
        self, address: str, spec: ContractFunctionSpec, args: Any = (), *, value: int = 0
    ) -> tuple[Any, ...]:
        return self._answer(self.simulations, address, spec)

    async def submit_call(
        self,
        address: str,
        spec: ContractFunctionSpec,
        args: Any = (),
        *,
        value: int = 0,
        gas_limit: int | None = None,
    ) -> str:
        self.submit_attempts.append(spec.signature)
        if spec.signature in self.rejected_submissions:
            raise ChainCallError("execution reverted", address=address, function=spec.signature)
        self.submitted.append(
            {"address": address, "signature": spec.signature, "args": tuple(args), "value": value, "gas": gas_limit}
        )
        return f"0xtx{len(self.submitted)}"

    async def wait_for_receipt(self, tx_hash: str, *, timeout: float | None = None) -> ReceiptDTO | None:
        if isinstance(self.receipt, Exception):
            raise self.receipt
        return self.receipt

    async def erc20_balance_of(self, token_address: str, owner_address: str) -> int:
        token = token_address.lower()
        if token in self.token_balance_errors:
            raise ChainCallError("balanceOf failed", address=token, function="balanceOf(address)")
        return self.token_balances.get(token, 0)

    async def get_balance(self, address: str) -> int:
        return self.native_balance

    async def get_code(self, address: str) -> bytes:
        self.code_reads += 1
        return self.code

    async def get_block_number(self) -> int:
        return self.block_number

    async def get_block(self, number: int) -> BlockDTO:
        if number not in self.blocks:
            raise ChainCallError(f"block {number} unavailable")
        return self.blocks[number]

    async def get_transaction_receipt(self, tx_hash: str) -> ReceiptDTO | None:
        return self.receipts.get(tx_hash)


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []
        self.handlers: dict[str, list[Any]] = {}

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def on(self, event_cls: type, handler: Any) -> None:
        self.handlers.setdefault(event_cls.__name__, []).append(handler)
