"""Base chain client (web3 AsyncWeb3) for reads, simulations and signed submissions."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, Optional

import structlog
from eth_account import Account
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, TransactionNotFound

from token_sniper.clients.chain_client.function_specs import ERC20_BALANCE_OF, ContractFunctionSpec
from token_sniper.clients.chain_client.schema import BlockDTO, ReceiptDTO, TransactionDTO, to_hex
from token_sniper.config import Settings
from token_sniper.exceptions import ChainCallError
from token_sniper.utils.validation import mask_address


class ChainClient:
    """Chain capability: balances, blocks, read calls and signed submissions.

    Nonce assignment and broadcast are serialized by a single asyncio lock, so
    the feed scheduler and the contract monitor never reuse a nonce.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        web3: Optional[AsyncWeb3] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the chain client.

        Args:
            settings: Configuration (uses settings.chain).
            web3: Optional AsyncWeb3 instance; built from chain.rpc_url when None.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._w3 = web3 or AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                settings.chain.rpc_url,
                request_kwargs={"timeout": settings.api.timeout_seconds},
            )
        )
        private_key = (settings.chain.private_key or "").strip()
        self._account = Account.from_key(private_key) if private_key else None
        configured = (settings.chain.wallet_address or "").strip()
        if configured:
            self._wallet_address: str | None = configured.lower()
        elif self._account is not None:
            self._wallet_address = self._account.address.lower()
        else:
            self._wallet_address = None
        self._nonce_lock = asyncio.Lock()

    @property
    def wallet_address(self) -> str | None:
        """Lowercase buyer address, or None if no wallet is configured."""
        return self._wallet_address

    @staticmethod
    def _checksum(address: str) -> Any:
        return AsyncWeb3.to_checksum_address(address.strip())

    async def aclose(self) -> None:
        """Close the underlying provider session."""
        await self._w3.provider.disconnect()

    async def get_balance(self, address: str) -> int:
        """Native balance in wei."""
        return int(await self._w3.eth.get_balance(self._checksum(address)))

    async def get_code(self, address: str) -> bytes:
        """Deployed bytecode (empty for EOAs and unknown addresses)."""
        return bytes(await self._w3.eth.get_code(self._checksum(address)))

    async def get_block_number(self) -> int:
        return int(await self._w3.eth.block_number)

    async def get_block(self, number: int) -> BlockDTO:
        """Block with full transaction objects."""
        block = await self._w3.eth.get_block(number, full_transactions=True)
        return BlockDTO.from_web3(block)

    async def get_transaction(self, tx_hash: str) -> TransactionDTO | None:
        try:
            tx = await self._w3.eth.get_transaction(tx_hash)
        except TransactionNotFound:
            return None
        return TransactionDTO.from_web3(tx)

    async def get_transaction_receipt(self, tx_hash: str) -> ReceiptDTO | None:
        try:
            receipt = await self._w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        return ReceiptDTO.from_web3(receipt)

    async def erc20_balance_of(self, token_address: str, owner_address: str) -> int:
        """Raw (unscaled) ERC-20 balance of owner."""
        (balance,) = await self.read_call(
            token_address, ERC20_BALANCE_OF, (self._checksum(owner_address),)
        )
        return int(balance)

    async def read_call(
        self,
        address: str,
        spec: ContractFunctionSpec,
        args: Sequence[Any] = (),
    ) -> tuple[Any, ...]:
        """eth_call a view function and return its decoded outputs.

        Raises:
            ChainCallError: Revert, transport failure or undecodable output.
        """
        return await self._call(address, spec, args, tx_from=None, value=0)

    async def simulate_call(
        self,
        address: str,
        spec: ContractFunctionSpec,
        args: Sequence[Any] = (),
        *,
        value: int = 0,
    ) -> tuple[Any, ...]:
        """Execute a state-changing function via eth_call from the buyer wallet.

        Nothing is broadcast. Raises ChainCallError if the call reverts.
        """
        return await self._call(address, spec, args, tx_from=self._wallet_address, value=value)

    async def _call(
        self,
        address: str,
        spec: ContractFunctionSpec,
        args: Sequence[Any],
        *,
        tx_from: str | None,
        value: int,
    ) -> tuple[Any, ...]:
        tx: dict[str, Any] = {"to": self._checksum(address), "data": to_hex(spec.encode(args))}
        if tx_from:
            tx["from"] = self._checksum(tx_from)
        if value:
            tx["value"] = int(value)
        try:
            raw = await self._w3.eth.call(tx)  # type: ignore[arg-type]
            return spec.decode(bytes(raw))
        except Exception as e:
            raise ChainCallError(
                f"{spec.signature} failed on {address}: {e}",
                address=address,
                function=spec.signature,
                cause=e,
            ) from e

    async def submit_call(
        self,
        address: str,
        spec: ContractFunctionSpec,
        args: Sequence[Any] = (),
        *,
        value: int = 0,
        gas_limit: int | None = None,
    ) -> str:
        """Preflight, sign and broadcast a transaction; return its hash.

        A preflight revert raises ChainCallError before anything is signed.

        Raises:
            ChainCallError: No wallet configured, preflight revert or broadcast failure.
        """
        if self._account is None or self._wallet_address is None:
            raise ChainCallError("no signing wallet configured", address=address, function=spec.signature)

        await self.simulate_call(address, spec, args, value=value)

        data = to_hex(spec.encode(args))
        gas = int(gas_limit or self._settings.chain.gas_limit)
        async with self._nonce_lock:
            try:
                sender = self._checksum(self._wallet_address)
                nonce = await self._w3.eth.get_transaction_count(sender, "pending")
                gas_price = await self._w3.eth.gas_price
                tx = {
                    "to": self._checksum(address),
                    "from": sender,
                    "data": data,
                    "value": int(value),
                    "gas": gas,
                    "gasPrice": int(gas_price),
                    "nonce": int(nonce),
                    "chainId": self._settings.chain.chain_id,
                }
                signed = self._account.sign_transaction(tx)
                tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
            except Exception as e:
                raise ChainCallError(
                    f"{spec.signature} submission failed on {address}: {e}",
                    address=address,
                    function=spec.signature,
                    cause=e,
                ) from e

        tx_hash_hex = to_hex(tx_hash)
        self._logger.info(
            "chain_tx_submitted",
            chain_tx_hash=tx_hash_hex,
            chain_to=address,
            chain_function=spec.signature,
            chain_value_wei=int(value),
            chain_nonce=int(nonce),
            wallet_masked=mask_address(self._wallet_address),
        )
        return tx_hash_hex

    async def wait_for_receipt(self, tx_hash: str, *, timeout: float | None = None) -> ReceiptDTO | None:
        """Wait until the transaction is mined. Returns None on timeout."""
        timeout_s = timeout if timeout is not None else self._settings.chain.receipt_timeout_seconds
        try:
            receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout_s)  # type: ignore[arg-type]
        except TimeExhausted:
            self._logger.warning("chain_receipt_timeout", chain_tx_hash=tx_hash, timeout_seconds=timeout_s)
            return None
        return ReceiptDTO.from_web3(receipt)
