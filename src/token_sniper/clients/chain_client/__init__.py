"""Chain capability client."""

from token_sniper.clients.chain_client.chain_client import ChainClient
from token_sniper.clients.chain_client.function_specs import (
    ERC20_BALANCE_OF,
    ERC20_DECIMALS,
    ERC20_NAME,
    ERC20_SYMBOL,
    ERC20_TOTAL_SUPPLY,
    ContractFunctionSpec,
)
from token_sniper.clients.chain_client.schema import BlockDTO, ReceiptDTO, TransactionDTO

__all__ = [
    "BlockDTO",
    "ChainClient",
    "ContractFunctionSpec",
    "ERC20_BALANCE_OF",
    "ERC20_DECIMALS",
    "ERC20_NAME",
    "ERC20_SYMBOL",
    "ERC20_TOTAL_SUPPLY",
    "ReceiptDTO",
    "TransactionDTO",
]
