# -*- coding: utf-8 -*-
"""Buy execution: quote, slippage bound, purchase cascade, confirmation and funding fallback."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars
from web3 import Web3

from token_sniper.exceptions import ChainCallError
from token_sniper.models.buy_result import BuyErrorKind, BuyResult
from token_sniper.models.wallet_balances import WalletBalances
from token_sniper.services.buy_execution.entry_points import (
    BUY_ENTRY_POINTS,
    QUOTE_ENTRY_POINTS,
    TAX_SIMULATION_ENTRY_POINTS,
)
from token_sniper.utils.validation import mask_address

if TYPE_CHECKING:
    from token_sniper.clients.chain_client import ChainClient
    from token_sniper.config import Settings

BPS_DENOMINATOR = 10_000
# Shortfalls at or below this percentage are rounding, not tax.
TAX_REPORT_THRESHOLD_PERCENT = 0.1


def compute_min_out(quote_out: int, slippage_percent: float | Decimal) -> int:
    """quote_out * (10000 - slippage_bps) // 10000, in integer arithmetic."""
    slippage_bps = int(Decimal(str(slippage_percent)) * 100)
    return quote_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def to_wei(amount: Decimal | float | int) -> int:
    """Whole primary-asset units (e.g. 0.01 ETH) to wei."""
    return int(Web3.to_wei(Decimal(str(amount)), "ether"))


@dataclass(frozen=True, slots=True)
class TaxReport:
    """Advisory result of the pre-purchase simulation."""

    has_tax: bool
    tax_percent: float | None = None


@dataclass(frozen=True, slots=True)
class FundingPlan:
    """Amount of primary asset a funded purchase will spend."""

    wallet_address: str | None
    amount_wei: int
    uses_fallback: bool = False


class BuyExecutionService:
    """Executes slippage-protected purchases through the chain capability.

    Purchase failures are returned as BuyResult values, never raised, and a
    failed cascade is not retried within the same call.
    """

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

    async def quote(self, address: str, amount_wei: int) -> int:
        """Return expected tokens out for amount_wei, or 0 if no pricing entry point answers."""
        for entry in QUOTE_ENTRY_POINTS:
            try:
                (raw,) = await self._chain.read_call(address, entry.spec, entry.args(amount_wei))
            except ChainCallError:
                continue
            tokens_out = entry.tokens_out(int(raw), amount_wei)
            if tokens_out > 0:
                self._logger.debug(
                    "buy_quote_resolved",
                    quote_function=entry.spec.signature,
                    quote_tokens_out=tokens_out,
                )
                return tokens_out
        return 0

    async def buy(
        self,
        address: str,
        amount_wei: int,
        slippage_percent: float,
        *,
        wallet_address: str | None = None,
    ) -> BuyResult:
        """Quote, bound, submit the first accepted buy signature and wait for the receipt."""
        recipient = wallet_address or self._chain.wallet_address
        with bound_contextvars(candidate_address=address, buy_amount_wei=amount_wei):
            try:
                return await self._buy(address, amount_wei, slippage_percent, recipient)
            except Exception as e:
                self._logger.exception("buy_unexpected_error", error_type=type(e).__name__)
                return BuyResult.failed(BuyErrorKind.UNEXPECTED, str(e))

    async def _buy(
        self,
        address: str,
        amount_wei: int,
        slippage_percent: float,
        recipient: str | None,
    ) -> BuyResult:
        quote_out = await self.quote(address, amount_wei)
        if quote_out <= 0:
            self._logger.warning("buy_no_quote")
            return BuyResult.failed(BuyErrorKind.NO_QUOTE, "could not get buy quote")

        min_out = compute_min_out(quote_out, slippage_percent)
        self._logger.info(
            "buy_slippage_bound",
            quote_tokens_out=quote_out,
            min_tokens_out=min_out,
            slippage_percent=slippage_percent,
        )

        tx_hash: str | None = None
        last_error: ChainCallError | None = None
        for entry in BUY_ENTRY_POINTS:
            try:
                tx_hash = await self._chain.submit_call(
                    address,
                    entry.spec,
                    entry.build_args(min_out, recipient),
                    value=amount_wei,
                    gas_limit=self._settings.chain.gas_limit,
                )
            except ChainCallError as e:
                last_error = e
                self._logger.debug("buy_signature_rejected", buy_function=entry.spec.signature)
                continue
            self._logger.info("buy_submitted", buy_function=entry.spec.signature, chain_tx_hash=tx_hash)
            break

        if tx_hash is None:
            self._logger.warning("buy_no_buy_function")
            return BuyResult.failed(
                BuyErrorKind.NO_BUY_FUNCTION,
                f"no buy signature accepted: {last_error}" if last_error else "no buy signature accepted",
            )

        try:
            receipt = await self._chain.wait_for_receipt(tx_hash)
        except Exception as e:
            self._logger.warning(
                "buy_receipt_unavailable",
                chain_tx_hash=tx_hash,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return BuyResult.failed(BuyErrorKind.NO_RECEIPT, str(e), transaction_hash=tx_hash)
        if receipt is None:
            return BuyResult.failed(BuyErrorKind.NO_RECEIPT, "receipt not received", transaction_hash=tx_hash)
        if not receipt.succeeded:
            self._logger.warning("buy_tx_reverted", chain_tx_hash=tx_hash)
            return BuyResult.failed(BuyErrorKind.TX_REVERTED, "transaction reverted", transaction_hash=tx_hash)

        token_balance: int | None = None
        if recipient:
            try:
                token_balance = await self._chain.erc20_balance_of(address, recipient)
            except ChainCallError as e:
                self._logger.warning("buy_post_balance_unavailable", error_message=str(e))
        self._logger.info("buy_confirmed", chain_tx_hash=tx_hash, token_balance=token_balance)
        return BuyResult.succeeded(tx_hash, token_amount_received=token_balance, asset_spent=amount_wei)

    async def detect_tax(self, address: str, *, probe_wei: int | None = None) -> TaxReport:
        """Compare a quote with a simulated buy of the same probe amount (advisory only)."""
        probe = probe_wei if probe_wei is not None else to_wei(self._settings.sniper.tax_probe_amount)
        quoted = await self.quote(address, probe)
        if quoted <= 0:
            return TaxReport(has_tax=False)

        recipient = self._chain.wallet_address
        simulated: int | None = None
        for entry in TAX_SIMULATION_ENTRY_POINTS:
            try:
                (out,) = await self._chain.simulate_call(
                    address, entry.spec, entry.build_args(0, recipient), value=probe
                )
            except ChainCallError:
                continue
            simulated = int(out)
            break
        if simulated is None:
            return TaxReport(has_tax=False)

        difference = max(quoted - simulated, 0)
        tax_percent = (difference * BPS_DENOMINATOR // quoted) / 100
        if tax_percent > TAX_REPORT_THRESHOLD_PERCENT:
            self._logger.warning("buy_tax_detected", candidate_address=address, tax_percent=tax_percent)
            return TaxReport(has_tax=True, tax_percent=tax_percent)
        return TaxReport(has_tax=False)

    async def get_wallet_balances(self, wallet_address: str) -> WalletBalances:
        """Primary (native) and secondary asset balances; a failed secondary read yields 0."""
        primary = await self._chain.get_balance(wallet_address)
        try:
            secondary = await self._chain.erc20_balance_of(
                self._settings.chain.secondary_asset_address, wallet_address
            )
        except ChainCallError as e:
            self._logger.warning(
                "wallet_secondary_balance_unavailable",
                wallet_masked=mask_address(wallet_address),
                error_message=str(e),
            )
            secondary = 0
        return WalletBalances(primary=primary, secondary=secondary)

    def secondary_target_units(self) -> int:
        decimals = self._settings.chain.secondary_asset_decimals
        return int(Decimal(self._settings.contract_monitor.secondary_target_amount) * (10**decimals))

    async def plan_funding(
        self,
        address: str,
        amount_wei: int,
        *,
        wallet_address: str | None = None,
    ) -> FundingPlan | None:
        """Decide how much primary asset to spend; None when neither asset meets its target."""
        wallet = wallet_address or self._chain.wallet_address
        if wallet is None:
            return FundingPlan(wallet_address=None, amount_wei=amount_wei)

        balances = await self.get_wallet_balances(wallet)
        if balances.primary >= amount_wei:
            return FundingPlan(wallet_address=wallet, amount_wei=amount_wei)

        secondary_target = self.secondary_target_units()
        if balances.secondary >= secondary_target:
            self._logger.warning(
                "buy_funding_fallback_remaining_primary",
                candidate_address=address,
                wallet_masked=mask_address(wallet),
                primary_balance_wei=balances.primary,
                target_wei=amount_wei,
                secondary_balance=balances.secondary,
            )
            return FundingPlan(wallet_address=wallet, amount_wei=balances.primary, uses_fallback=True)

        self._logger.warning(
            "buy_skipped_insufficient_funds",
            candidate_address=address,
            wallet_masked=mask_address(wallet),
            primary_balance_wei=balances.primary,
            target_wei=amount_wei,
            secondary_balance=balances.secondary,
            secondary_target=secondary_target,
        )
        return None

    async def buy_with_plan(self, address: str, plan: FundingPlan, slippage_percent: float) -> BuyResult:
        """Buy with an amount chosen by plan_funding.

        The secondary asset is never swapped, so a failed fallback purchase is
        reported as UNSUPPORTED_FUNDING.
        """
        if plan.wallet_address is None:
            return BuyResult.failed(BuyErrorKind.UNEXPECTED, "no buyer wallet configured")
        result = await self.buy(address, plan.amount_wei, slippage_percent, wallet_address=plan.wallet_address)
        if result.success or not plan.uses_fallback:
            return result
        return BuyResult.failed(
            BuyErrorKind.UNSUPPORTED_FUNDING,
            f"primary purchase failed ({result.error_kind}); secondary asset swap unsupported",
            transaction_hash=result.transaction_hash,
        )
