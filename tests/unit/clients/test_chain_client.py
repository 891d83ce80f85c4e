# -*- coding: utf-8 -*-
"""Unit tests for ChainClient, function specs and chain DTOs."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from eth_abi import encode as abi_encode
from web3.exceptions import TransactionNotFound

from token_sniper.clients.chain_client import ChainClient
from token_sniper.clients.chain_client.function_specs import (
    ERC20_BALANCE_OF,
    ERC20_DECIMALS,
    ERC20_NAME,
    ERC20_SYMBOL,
    ERC20_TOTAL_SUPPLY,
    ContractFunctionSpec,
)
from token_sniper.clients.chain_client.schema import BlockDTO, ReceiptDTO, TransactionDTO
from token_sniper.config.config import ApiSettings, ChainSettings
from token_sniper.exceptions import ChainCallError

TOKEN = "0x" + "ab" * 20
TEST_KEY = "0x" + "01" * 32


def _settings(**chain: Any) -> Any:
    return SimpleNamespace(chain=ChainSettings(**chain), api=ApiSettings())


def _fake_web3(**eth: Any) -> Any:
    return SimpleNamespace(eth=SimpleNamespace(**eth), provider=SimpleNamespace(disconnect=AsyncMock()))


@pytest.mark.parametrize(
    ("spec", "selector"),
    [
        (ERC20_NAME, "0x06fdde03"),
        (ERC20_SYMBOL, "0x95d89b41"),
        (ERC20_DECIMALS, "0x313ce567"),
        (ERC20_TOTAL_SUPPLY, "0x18160ddd"),
        (ERC20_BALANCE_OF, "0x70a08231"),
    ],
)
def test_erc20_specs_have_standard_selectors(spec: ContractFunctionSpec, selector: str) -> None:
    assert spec.selector_hex == selector


def test_encode_rejects_wrong_arity() -> None:
    with pytest.raises(ValueError):
        ERC20_BALANCE_OF.encode(())


def test_encode_without_inputs_is_selector_only() -> None:
    assert ERC20_NAME.encode() == ERC20_NAME.selector


def test_decode_empty_data_is_error_when_outputs_expected() -> None:
    with pytest.raises(ValueError):
        ERC20_TOTAL_SUPPLY.decode(b"")


def test_transaction_dto_from_web3_handles_creation() -> None:
    tx = TransactionDTO.from_web3(
        {"hash": b"\x01\x02", "from": "0xABC", "to": None, "input": "0x3593564cdeadbeef", "value": 5}
    )
    assert tx.hash == "0x0102"
    assert tx.sender == "0xabc"
    assert tx.to is None
    assert tx.selector == "0x3593564c"
    assert tx.value == 5


def test_block_and_receipt_dtos_from_web3() -> None:
    block = BlockDTO.from_web3(
        {"number": 10, "timestamp": 60, "transactions": [{"hash": "0x1", "from": "0xa", "to": "0xB"}, "0xhashonly"]}
    )
    receipt = ReceiptDTO.from_web3(
        {"transactionHash": "0x1", "status": 1, "blockNumber": 10, "contractAddress": "0xDEF"}
    )

    assert block.number == 10
    assert block.timestamp.timestamp() == 60
    assert [t.to for t in block.transactions] == ["0xb"]
    assert receipt.succeeded is True
    assert receipt.contract_address == "0xdef"


def test_wallet_address_prefers_configured_address() -> None:
    client = ChainClient(_settings(wallet_address="0x" + "AA" * 20), web3=_fake_web3())
    assert client.wallet_address == "0x" + "aa" * 20


def test_wallet_address_is_none_without_key_or_address() -> None:
    client = ChainClient(_settings(private_key=None, wallet_address=None), web3=_fake_web3())
    assert client.wallet_address is None


async def test_read_call_decodes_outputs() -> None:
    call = AsyncMock(return_value=abi_encode(["uint256"], [1234]))
    client = ChainClient(_settings(), web3=_fake_web3(call=call))

    assert await client.read_call(TOKEN, ERC20_TOTAL_SUPPLY) == (1234,)
    sent = call.await_args.args[0]
    assert sent["data"] == ERC20_TOTAL_SUPPLY.selector_hex
    assert "from" not in sent


async def test_read_call_wraps_reverts_in_chain_call_error() -> None:
    call = AsyncMock(side_effect=RuntimeError("execution reverted"))
    client = ChainClient(_settings(), web3=_fake_web3(call=call))

    with pytest.raises(ChainCallError) as exc_info:
        await client.read_call(TOKEN, ERC20_SYMBOL)
    assert exc_info.value.function == "symbol()"


async def test_erc20_balance_of_returns_int() -> None:
    call = AsyncMock(return_value=abi_encode(["uint256"], [77]))
    client = ChainClient(_settings(), web3=_fake_web3(call=call))

    assert await client.erc20_balance_of(TOKEN, "0x" + "11" * 20) == 77


async def test_submit_call_without_key_raises_before_rpc() -> None:
    call = AsyncMock()
    client = ChainClient(_settings(private_key=None), web3=_fake_web3(call=call))

    with pytest.raises(ChainCallError):
        await client.submit_call(TOKEN, ContractFunctionSpec("buy"), value=1)
    call.assert_not_awaited()


async def test_submit_call_preflight_revert_skips_broadcast() -> None:
    send = AsyncMock()
    web3 = _fake_web3(call=AsyncMock(side_effect=RuntimeError("reverted")), send_raw_transaction=send)
    client = ChainClient(_settings(private_key=TEST_KEY), web3=web3)

    with pytest.raises(ChainCallError):
        await client.submit_call(TOKEN, ContractFunctionSpec("buy"), value=1)
    send.assert_not_awaited()


class _SubmittingEth:
    """AsyncEth stand-in; gas_price is an awaitable property like the real one."""

    def __init__(self) -> None:
        self.call = AsyncMock(return_value=b"")
        self.get_transaction_count = AsyncMock(return_value=7)
        self.send_raw_transaction = AsyncMock(return_value=b"\xaa" * 32)

    @property
    def gas_price(self) -> Any:
        async def _price() -> int:
            return 1_000_000_000

        return _price()


async def test_submit_call_signs_and_broadcasts_with_pending_nonce() -> None:
    eth = _SubmittingEth()
    send = eth.send_raw_transaction
    get_count = eth.get_transaction_count
    web3 = SimpleNamespace(eth=eth, provider=SimpleNamespace(disconnect=AsyncMock()))
    client = ChainClient(_settings(private_key=TEST_KEY), web3=web3)

    tx_hash = await client.submit_call(TOKEN, ContractFunctionSpec("buy"), value=5, gas_limit=300_000)

    assert tx_hash == "0x" + "aa" * 32
    assert get_count.await_args.args[1] == "pending"
    send.assert_awaited_once()


async def test_get_transaction_receipt_returns_none_when_missing() -> None:
    web3 = _fake_web3(get_transaction_receipt=AsyncMock(side_effect=TransactionNotFound("missing")))
    client = ChainClient(_settings(), web3=web3)

    assert await client.get_transaction_receipt("0xabc") is None
