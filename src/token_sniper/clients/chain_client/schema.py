"""Chain boundary types decoded from web3 responses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Mapping


def to_hex(value: Any) -> str:
    """Return a 0x-prefixed hex string for bytes/HexBytes/str values."""
    if value is None:
        return "0x"
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    s = str(value)
    return s if s.startswith("0x") else "0x" + s


def _lower_or_none(value: Any) -> str | None:
    if not value:
        return None
    return str(value).lower()


@dataclass(frozen=True, slots=True)
class TransactionDTO:
    """A transaction as seen in a block (sender, recipient and call data)."""

    hash: str
    sender: str
    to: str | None
    """None for contract creation."""
    input: str
    """0x-prefixed call data."""
    value: int = 0

    @property
    def selector(self) -> str:
        """First four bytes of call data as 0x hex (lowercase), or '' if shorter."""
        data = self.input.lower()
        return data[:10] if len(data) >= 10 else ""

    @classmethod
    def from_web3(cls, tx: Mapping[str, Any]) -> TransactionDTO:
        return cls(
            hash=to_hex(tx.get("hash")),
            sender=str(tx.get("from") or "").lower(),
            to=_lower_or_none(tx.get("to")),
            input=to_hex(tx.get("input") or tx.get("data") or b""),
            value=int(tx.get("value") or 0),
        )


@dataclass(frozen=True, slots=True)
class BlockDTO:
    number: int
    timestamp: datetime
    transactions: tuple[TransactionDTO, ...] = ()

    @classmethod
    def from_web3(cls, block: Mapping[str, Any]) -> BlockDTO:
        txs = tuple(
            TransactionDTO.from_web3(tx)
            for tx in block.get("transactions") or ()
            if isinstance(tx, Mapping)
        )
        return cls(
            number=int(block["number"]),
            timestamp=datetime.fromtimestamp(int(block.get("timestamp") or 0), tz=UTC),
            transactions=txs,
        )


@dataclass(frozen=True, slots=True)
class ReceiptDTO:
    transaction_hash: str
    status: int
    """1 success, 0 reverted."""
    block_number: int | None = None
    contract_address: str | None = None
    """Set when the transaction created a contract."""

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_web3(cls, receipt: Mapping[str, Any]) -> ReceiptDTO:
        block_number = receipt.get("blockNumber")
        return cls(
            transaction_hash=to_hex(receipt.get("transactionHash")),
            status=int(receipt.get("status") or 0),
            block_number=int(block_number) if block_number is not None else None,
            contract_address=_lower_or_none(receipt.get("contractAddress")),
        )
