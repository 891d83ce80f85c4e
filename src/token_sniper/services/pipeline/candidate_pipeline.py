# -*- coding: utf-8 -*-
"""CandidatePipeline: dedup -> validate -> advisory probes -> buy -> record.

Shared by the feed scheduler and the contract-creation detector, so a
candidate claimed by one is never validated concurrently by the other.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from token_sniper.events.buy_events import BuyAttemptedEvent
from token_sniper.models.buy_result import BuyResult
from token_sniper.models.candidate import Candidate, CandidateSource
from token_sniper.models.processed_candidate import ProcessedCandidate
from token_sniper.services.buy_execution import to_wei
from token_sniper.utils.dedupe import dedup_key
from token_sniper.utils.validation import is_hex_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from token_sniper.models.token_info import TokenInfo
    from token_sniper.persistence.repositories.interfaces import IProcessedCandidateRepository
    from token_sniper.services.buy_execution import BuyExecutionService, TaxReport
    from token_sniper.services.token_validation import TokenValidator

OUTCOME_BOUGHT = "bought"
OUTCOME_INVALID_TOKEN = "invalid_token"
OUTCOME_SKIPPED_FUNDS = "skipped_insufficient_funds"
OUTCOME_ERROR = "error"


class CandidatePipeline:
    """Runs one candidate through the acquisition steps and records it in the ledger."""

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        processed_repository: "IProcessedCandidateRepository",
        token_validator: "TokenValidator",
        buy_execution: "BuyExecutionService",
        event_bus: Optional[Any] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            processed_repository: Dedup ledger.
            token_validator: Token introspection and buy-capability probe.
            buy_execution: Purchase engine.
            event_bus: Optional; if set, emits BuyAttemptedEvent after each buy.
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._ledger = processed_repository
        self._validator = token_validator
        self._buy = buy_execution
        self._event_bus = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def is_processed(self, candidate: Candidate) -> bool:
        """True if the candidate's dedup key is already in the ledger."""
        return await self._ledger.contains(dedup_key(candidate))

    async def process(
        self,
        candidate: Candidate,
        *,
        buy_amount: Decimal,
        slippage_percent: float,
        origin_label: str | None = None,
    ) -> BuyResult | None:
        """Process one candidate at most once.

        Returns the BuyResult, or None when the candidate was dropped (malformed,
        duplicate, invalid token or insufficient funds). Every claimed candidate
        is recorded as processed whatever the outcome, including exceptions,
        which propagate to the caller.
        """
        address = candidate.contract_address
        if not is_hex_address(address):
            self._logger.debug("candidate_malformed_address_dropped", candidate_address=address)
            return None

        key = dedup_key(candidate)
        if not await self._ledger.try_claim(key):
            self._logger.info("candidate_already_processed", candidate_address=address, dedup_key=key)
            return None

        outcome = OUTCOME_ERROR
        with bound_contextvars(
            candidate_address=address,
            candidate_source=str(candidate.source),
            candidate_origin=str(candidate.origin_identity),
        ):
            try:
                info = await self._validator.validate(address)
                if not info.is_valid:
                    outcome = OUTCOME_INVALID_TOKEN
                    self._logger.info("candidate_invalid_token")
                    return None

                if not await self._validator.has_buy_capability(address):
                    self._logger.warning("candidate_buy_capability_unknown_attempting_anyway")

                amount_wei = to_wei(buy_amount)
                if candidate.source is CandidateSource.WALLET:
                    plan = await self._buy.plan_funding(address, amount_wei)
                    if plan is None:
                        outcome = OUTCOME_SKIPPED_FUNDS
                        return None
                    tax = await self._buy.detect_tax(address)
                    result = await self._buy.buy_with_plan(address, plan, slippage_percent)
                else:
                    tax = await self._buy.detect_tax(address)
                    result = await self._buy.buy(address, amount_wei, slippage_percent)

                outcome = OUTCOME_BOUGHT if result.success else f"buy_failed:{result.error_kind}"
                self._log_result(info, result)
                self._emit_buy_attempted(candidate, info, result, tax, origin_label)
                return result
            finally:
                await self._ledger.add(ProcessedCandidate.create(candidate, outcome))

    def _log_result(self, info: "TokenInfo", result: BuyResult) -> None:
        if result.success:
            self._logger.info(
                "candidate_bought",
                token_symbol=info.symbol,
                chain_tx_hash=result.transaction_hash,
                token_amount_received=result.token_amount_received,
            )
        else:
            self._logger.warning(
                "candidate_buy_failed",
                token_symbol=info.symbol,
                buy_error_kind=str(result.error_kind),
                error_message=result.error_message,
            )

    def _emit_buy_attempted(
        self,
        candidate: Candidate,
        info: "TokenInfo",
        result: BuyResult,
        tax: "TaxReport",
        origin_label: str | None,
    ) -> None:
        """Emit BuyAttemptedEvent for BuyResultNotifier."""
        if self._event_bus is None:
            return
        event = BuyAttemptedEvent(
            contract_address=candidate.contract_address,
            source=str(candidate.source),
            origin=origin_label or str(candidate.origin_identity),
            success=result.success,
            token_name=info.name,
            token_symbol=info.symbol,
            transaction_hash=result.transaction_hash,
            token_amount_received=(
                str(result.token_amount_received) if result.token_amount_received is not None else None
            ),
            asset_spent_wei=str(result.asset_spent) if result.asset_spent is not None else None,
            error_kind=str(result.error_kind) if result.error_kind else None,
            error_message=result.error_message,
            tax_percent=tax.tax_percent if tax.has_tax else None,
        )
        self._event_bus.dispatch(event)
