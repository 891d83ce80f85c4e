# -*- coding: utf-8 -*-
"""Application services."""

from token_sniper.services.buy_execution import BuyExecutionService, TaxReport
from token_sniper.services.contract_monitor import ContractCreationDetector
from token_sniper.services.feed_detection import FeedChangeDetector
from token_sniper.services.notifications import BuyResultNotifier
from token_sniper.services.pipeline import CandidatePipeline
from token_sniper.services.scheduler import MonitoringScheduler, PeriodicTask, SchedulerStatus
from token_sniper.services.token_validation import TokenValidator

__all__ = [
    "BuyExecutionService",
    "BuyResultNotifier",
    "CandidatePipeline",
    "ContractCreationDetector",
    "FeedChangeDetector",
    "MonitoringScheduler",
    "PeriodicTask",
    "SchedulerStatus",
    "TaxReport",
    "TokenValidator",
]
