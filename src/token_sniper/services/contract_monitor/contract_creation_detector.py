# -*- coding: utf-8 -*-
"""Contract-creation detector: deployments and purchase-call activations by watched wallets."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from token_sniper.exceptions import InvalidAddressError
from token_sniper.models.candidate import Candidate
from token_sniper.models.watched_wallet import WatchedWallet
from token_sniper.services.scheduler.periodic_task import PeriodicTask
from token_sniper.utils.validation import mask_address

if TYPE_CHECKING:
    from token_sniper.clients.chain_client import ChainClient, TransactionDTO
    from token_sniper.config import Settings
    from token_sniper.services.pipeline import CandidatePipeline

# Selectors of known purchase calls; a watched wallet calling one activates the recipient.
ACTIVATION_SELECTORS: frozenset[str] = frozenset({"0x3593564c", "0x6945b123", "0x02751cec"})


class ContractCreationDetector:
    """Scans a recent block window per watched wallet and feeds finds into the pipeline.

    Runs on its own timer, independent of the feed scheduler.
    """

    def __init__(
        self,
        chain_client: "ChainClient",
        pipeline: "CandidatePipeline",
        settings: "Settings",
        wallets: Optional[list[WatchedWallet]] = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            chain_client: Block, transaction and receipt reads.
            pipeline: Shared dedup/validate/buy pipeline.
            settings: Uses settings.contract_monitor and settings.sniper.submission_delay_seconds.
            wallets: Watched wallets; defaults to settings.contract_monitor.wallets.
            sleep: Awaitable sleep used between submissions (injected for tests).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._chain = chain_client
        self._pipeline = pipeline
        self._settings = settings
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._wallets = wallets if wallets is not None else self._wallets_from_settings()
        self._timer = PeriodicTask(
            "contract_monitor",
            self.scan,
            settings.contract_monitor.check_interval_seconds,
            get_logger=get_logger,
        )

    def _wallets_from_settings(self) -> list[WatchedWallet]:
        wallets: list[WatchedWallet] = []
        for config in self._settings.contract_monitor.wallets:
            try:
                wallets.append(WatchedWallet.from_config(config))
            except InvalidAddressError as e:
                self._logger.error("contract_monitor_invalid_wallet_config", error_message=str(e))
        return wallets

    @property
    def wallets(self) -> list[WatchedWallet]:
        return list(self._wallets)

    @property
    def running(self) -> bool:
        return self._timer.running

    def start(self, interval_seconds: float | None = None) -> bool:
        """Start the independent timer (scan runs immediately). False if already running."""
        if not self._wallets:
            self._logger.info("contract_monitor_no_wallets")
            return False
        return self._timer.start(interval_seconds)

    def stop(self) -> None:
        self._timer.stop()

    async def wait_idle(self) -> None:
        await self._timer.wait_idle()

    async def discover(self, wallet: WatchedWallet) -> list[Candidate]:
        """Return candidates from the last block_window blocks for one wallet.

        A block or transaction that cannot be fetched is skipped; the scan goes on.
        """
        latest = await self._chain.get_block_number()
        from_block = max(latest - self._settings.contract_monitor.block_window, 0)
        self._logger.debug("contract_monitor_scan_window", from_block=from_block, to_block=latest)

        candidates: list[Candidate] = []
        for number in range(from_block, latest + 1):
            try:
                block = await self._chain.get_block(number)
            except Exception as e:
                self._logger.debug(
                    "contract_monitor_block_skipped",
                    block_number=number,
                    error_type=type(e).__name__,
                )
                continue
            for tx in block.transactions:
                if tx.sender != wallet.address:
                    continue
                try:
                    address = await self._address_from_tx(tx)
                except Exception as e:
                    self._logger.debug(
                        "contract_monitor_tx_skipped",
                        chain_tx_hash=tx.hash,
                        error_type=type(e).__name__,
                    )
                    continue
                if address is not None:
                    candidate = Candidate.from_wallet(
                        address,
                        wallet=wallet.address,
                        transaction_hash=tx.hash,
                        discovered_at=block.timestamp,
                    )
                    candidates.append(candidate)
        return candidates

    async def _address_from_tx(self, tx: "TransactionDTO") -> str | None:
        """Created contract (no recipient) or activated recipient (known purchase selector)."""
        if tx.to is None:
            receipt = await self._chain.get_transaction_receipt(tx.hash)
            if receipt is None or not receipt.contract_address:
                return None
            self._logger.info(
                "contract_monitor_creation_found",
                candidate_address=receipt.contract_address,
                chain_tx_hash=tx.hash,
            )
            return receipt.contract_address
        if tx.selector in ACTIVATION_SELECTORS:
            self._logger.info(
                "contract_monitor_activation_found",
                candidate_address=tx.to,
                chain_tx_hash=tx.hash,
                activation_selector=tx.selector,
            )
            return tx.to
        return None

    async def scan(self) -> None:
        """Discover and process candidates for every watched wallet, sequentially."""
        if not self._settings.contract_monitor.enabled:
            self._logger.debug("contract_monitor_disabled")
            return
        delay = self._settings.sniper.submission_delay_seconds
        for wallet in self._wallets:
            with bound_contextvars(watched_wallet_masked=mask_address(wallet.address)):
                try:
                    candidates = await self.discover(wallet)
                except Exception as e:
                    self._logger.warning(
                        "contract_monitor_scan_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    continue

                submitted = 0
                for candidate in candidates:
                    if await self._pipeline.is_processed(candidate):
                        continue
                    if submitted:
                        await self._sleep(delay)
                    submitted += 1
                    try:
                        await self._pipeline.process(
                            candidate,
                            buy_amount=wallet.buy_amount,
                            slippage_percent=wallet.slippage_percent,
                            origin_label=wallet.description or wallet.address,
                        )
                    except Exception as e:
                        self._logger.exception(
                            "contract_monitor_candidate_failed",
                            candidate_address=candidate.contract_address,
                            error_type=type(e).__name__,
                        )
