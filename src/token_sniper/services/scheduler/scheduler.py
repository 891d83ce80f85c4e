# -*- coding: utf-8 -*-
"""MonitoringScheduler: watchlist operations and the periodic feed check cycle."""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

import structlog

from token_sniper.exceptions import FetchFailureError, IdentityNotFoundError
from token_sniper.models.watched_identity import WatchedIdentity
from token_sniper.services.scheduler.periodic_task import PeriodicTask

if TYPE_CHECKING:
    from token_sniper.clients.feed_api import FeedApiClient
    from token_sniper.config import Settings
    from token_sniper.models.candidate import Candidate
    from token_sniper.persistence.repositories.interfaces import (
        IProcessedCandidateRepository,
        IWatchlistRepository,
    )
    from token_sniper.services.contract_monitor import ContractCreationDetector
    from token_sniper.services.feed_detection import FeedChangeDetector
    from token_sniper.services.pipeline import CandidatePipeline


@dataclass(frozen=True)
class SchedulerStatus:
    """Snapshot for the control surface."""

    enabled: bool
    running: bool
    watchlist_size: int
    processed_count: int
    contract_monitor_running: bool
    contract_monitor_wallets: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class MonitoringScheduler:
    """Owns the watchlist and drives the feed check cycle (Stopped <-> Running).

    The contract-creation detector runs on its own timer and is started and
    stopped alongside this scheduler.
    """

    def __init__(
        self,
        feed_client: "FeedApiClient",
        watchlist_repository: "IWatchlistRepository",
        processed_repository: "IProcessedCandidateRepository",
        feed_detector: "FeedChangeDetector",
        pipeline: "CandidatePipeline",
        settings: "Settings",
        contract_detector: Optional["ContractCreationDetector"] = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            feed_client: Resolves identifiers when adding identities.
            watchlist_repository: Watched identities keyed by fid.
            processed_repository: Dedup ledger (status only).
            feed_detector: Per-identity post scanner.
            pipeline: Shared dedup/validate/buy pipeline.
            settings: Uses settings.sniper.
            contract_detector: Optional; started and stopped with the scheduler.
            sleep: Awaitable sleep used between submissions (injected for tests).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._feed = feed_client
        self._watchlist = watchlist_repository
        self._processed = processed_repository
        self._detector = feed_detector
        self._pipeline = pipeline
        self._settings = settings
        self._contract_detector = contract_detector
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._enabled = settings.sniper.enabled
        self._timer = PeriodicTask(
            "feed_cycle",
            self._cycle,
            settings.sniper.check_interval_seconds,
            get_logger=get_logger,
        )

    @property
    def running(self) -> bool:
        return self._timer.running

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_sniper_enabled(self, enabled: bool) -> None:
        """Enable or disable buying; a disabled scheduler skips its cycles."""
        self._enabled = enabled
        self._logger.info("scheduler_enabled_changed", sniper_enabled=enabled)

    # Watchlist operations

    async def add_identity(
        self,
        identifier: str | int,
        buy_amount: Decimal | None = None,
        slippage_percent: float | None = None,
    ) -> WatchedIdentity:
        """Resolve identifier and insert (or overwrite) its watchlist entry.

        Raises:
            IdentityNotFoundError: The feed has no such identity.
            ValueError: buy_amount <= 0 or slippage outside [0, 100).
        """
        resolved = await self._feed.resolve_identity(identifier)
        if resolved is None:
            self._logger.warning("scheduler_identity_not_found", identity_identifier=str(identifier))
            raise IdentityNotFoundError(identifier)

        entry = WatchedIdentity.create(
            resolved.fid,
            resolved.username,
            buy_amount if buy_amount is not None else self._settings.sniper.default_buy_amount,
            slippage_percent=slippage_percent,
        )
        await self._watchlist.save(entry)
        self._logger.info(
            "scheduler_identity_added",
            identity_fid=entry.fid,
            identity_name=entry.display_name,
            buy_amount=str(entry.buy_amount),
            slippage_percent=entry.slippage_percent,
        )
        return entry

    async def remove_identity(self, fid: int) -> bool:
        removed = await self._watchlist.remove(fid)
        if removed:
            self._logger.info("scheduler_identity_removed", identity_fid=fid)
        return removed

    async def update_buy_amount(self, fid: int, amount: Decimal) -> bool:
        """Return False if fid is not watched. Raises ValueError for amount <= 0."""
        current = await self._watchlist.get(fid)
        if current is None:
            return False
        await self._watchlist.save(current.with_buy_amount(amount))
        self._logger.info("scheduler_buy_amount_updated", identity_fid=fid, buy_amount=str(amount))
        return True

    async def set_enabled(self, fid: int, enabled: bool) -> bool:
        """Return False if fid is not watched."""
        current = await self._watchlist.get(fid)
        if current is None:
            return False
        await self._watchlist.save(current.with_enabled(enabled))
        self._logger.info("scheduler_identity_enabled_changed", identity_fid=fid, identity_enabled=enabled)
        return True

    async def list_watched(self) -> list[WatchedIdentity]:
        return await self._watchlist.list_all()

    async def auto_monitor(self) -> list[WatchedIdentity]:
        """Add the configured startup identities; unresolvable ones are logged and skipped."""
        added: list[WatchedIdentity] = []
        for config in self._settings.sniper.auto_monitor:
            try:
                added.append(
                    await self.add_identity(
                        config.identifier,
                        buy_amount=config.buy_amount,
                        slippage_percent=config.slippage_percent,
                    )
                )
            except (IdentityNotFoundError, FetchFailureError) as e:
                self._logger.warning(
                    "scheduler_auto_monitor_failed",
                    identity_identifier=config.identifier,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        return added

    # Lifecycle

    def start(self, interval_seconds: float | None = None) -> MonitoringScheduler:
        """Start periodic cycles (first one immediately) and the contract monitor.

        Returns self as the handle; handle.stop() cancels future cycles of both
        timers. Calling start while running logs a warning and does nothing else.
        """
        if self._timer.start(interval_seconds) and self._contract_detector is not None:
            if self._settings.contract_monitor.enabled:
                self._contract_detector.start()
        return self

    def stop(self) -> None:
        """Cancel future cycles of both timers; in-flight cycles run to completion."""
        self._timer.stop()
        if self._contract_detector is not None:
            self._contract_detector.stop()

    async def wait_idle(self) -> None:
        await self._timer.wait_idle()
        if self._contract_detector is not None:
            await self._contract_detector.wait_idle()

    async def run_cycle(self) -> None:
        """Run one check cycle now, after any cycle already in flight."""
        await self._timer.run_now()

    async def status(self) -> SchedulerStatus:
        detector = self._contract_detector
        return SchedulerStatus(
            enabled=self._enabled,
            running=self.running,
            watchlist_size=len(await self._watchlist.list_all()),
            processed_count=await self._processed.count(),
            contract_monitor_running=detector.running if detector is not None else False,
            contract_monitor_wallets=[w.address for w in detector.wallets] if detector is not None else [],
        )

    async def _cycle(self) -> None:
        if not self._enabled:
            self._logger.info("scheduler_cycle_skipped_disabled")
            return
        identities = await self._watchlist.list_enabled()
        if not identities:
            self._logger.info("scheduler_cycle_skipped_empty_watchlist")
            return

        self._logger.debug("scheduler_cycle_started", identities_count=len(identities))
        found: list[tuple[int, "Candidate"]] = []
        for identity in identities:
            try:
                candidates = await self._detector.scan(identity)
            except Exception as e:
                self._logger.exception(
                    "scheduler_identity_scan_failed",
                    identity_fid=identity.fid,
                    error_type=type(e).__name__,
                )
                continue
            found.extend((identity.fid, c) for c in candidates)

        if not found:
            self._logger.debug("scheduler_cycle_no_candidates")
            return
        self._logger.info("scheduler_cycle_candidates_found", candidates_count=len(found))

        delay = self._settings.sniper.submission_delay_seconds
        submitted = 0
        for fid, candidate in found:
            if await self._pipeline.is_processed(candidate):
                self._logger.debug(
                    "scheduler_candidate_already_processed",
                    identity_fid=fid,
                    candidate_address=candidate.contract_address,
                )
                continue
            if submitted:
                await self._sleep(delay)
            submitted += 1
            await self._submit(fid, candidate)

    async def _submit(self, fid: int, candidate: "Candidate") -> None:
        identity = await self._watchlist.get(fid)
        if identity is None or not identity.enabled:
            self._logger.info(
                "scheduler_candidate_skipped_identity_inactive",
                identity_fid=fid,
                candidate_address=candidate.contract_address,
            )
            return
        try:
            await self._pipeline.process(
                candidate,
                buy_amount=identity.buy_amount,
                slippage_percent=identity.effective_slippage(self._settings.sniper.default_slippage_percent),
                origin_label=identity.display_name,
            )
        except Exception as e:
            self._logger.exception(
                "scheduler_candidate_failed",
                identity_fid=fid,
                candidate_address=candidate.contract_address,
                error_type=type(e).__name__,
            )
