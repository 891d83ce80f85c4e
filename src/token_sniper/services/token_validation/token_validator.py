# -*- coding: utf-8 -*-
"""Token validator: introspect a candidate address as an ERC-20 token."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from web3 import Web3

from token_sniper.clients.chain_client.function_specs import (
    ERC20_DECIMALS,
    ERC20_NAME,
    ERC20_SYMBOL,
    ERC20_TOTAL_SUPPLY,
    ContractFunctionSpec,
)
from token_sniper.exceptions import ChainCallError
from token_sniper.models.token_info import (
    DEFAULT_DECIMALS,
    DEFAULT_NAME,
    DEFAULT_SYMBOL,
    DEFAULT_TOTAL_SUPPLY,
    TokenInfo,
)
from token_sniper.services.buy_execution.entry_points import GET_BUY_QUOTE
from token_sniper.utils.validation import is_hex_address, normalize_address

if TYPE_CHECKING:
    from token_sniper.clients.chain_client import ChainClient
    from token_sniper.config import Settings


class TokenValidator:
    """Fail-closed token introspection plus an advisory buy-capability probe."""

    def __init__(
        self,
        chain_client: "ChainClient",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._chain = chain_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def validate(self, address: str) -> TokenInfo:
        """Return TokenInfo for address.

        Malformed addresses are invalid without any network call. An address with
        no deployed code (or whose code cannot be read) is invalid. Otherwise each
        metadata field is read independently and falls back to its default.
        """
        if not is_hex_address(address):
            self._logger.debug("token_validation_malformed_address", candidate_address=address)
            return TokenInfo.invalid(address)

        address = normalize_address(address)
        try:
            code = await self._chain.get_code(address)
        except Exception as e:
            self._logger.warning(
                "token_validation_code_read_failed",
                candidate_address=address,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return TokenInfo.invalid(address)
        if not code:
            self._logger.info("token_validation_no_contract_code", candidate_address=address)
            return TokenInfo.invalid(address)

        name = await self._read_or_default(address, ERC20_NAME, DEFAULT_NAME)
        symbol = await self._read_or_default(address, ERC20_SYMBOL, DEFAULT_SYMBOL)
        decimals = await self._read_or_default(address, ERC20_DECIMALS, DEFAULT_DECIMALS)
        total_supply = await self._read_or_default(address, ERC20_TOTAL_SUPPLY, DEFAULT_TOTAL_SUPPLY)

        info = TokenInfo(
            address=address,
            name=str(name) or DEFAULT_NAME,
            symbol=str(symbol) or DEFAULT_SYMBOL,
            decimals=int(decimals),
            total_supply=int(total_supply),
            is_valid=True,
        )
        self._logger.info(
            "token_validated",
            candidate_address=address,
            token_name=info.name,
            token_symbol=info.symbol,
            token_decimals=info.decimals,
        )
        return info

    async def _read_or_default(self, address: str, spec: ContractFunctionSpec, default: Any) -> Any:
        try:
            (value,) = await self._chain.read_call(address, spec)
        except ChainCallError:
            return default
        return value

    async def has_buy_capability(self, address: str) -> bool:
        """Advisory: True if a quote call answers, else whether the address has bytecode."""
        probe_wei = Web3.to_wei(Decimal(self._settings.sniper.capability_probe_amount), "ether")
        try:
            await self._chain.read_call(address, GET_BUY_QUOTE, (probe_wei,))
            return True
        except ChainCallError:
            pass
        try:
            return len(await self._chain.get_code(address)) > 0
        except Exception as e:
            self._logger.debug(
                "token_capability_code_read_failed",
                candidate_address=address,
                error_type=type(e).__name__,
            )
            return False
