"""Buy execution engine."""

from token_sniper.services.buy_execution.buy_execution_service import (
    BuyExecutionService,
    FundingPlan,
    TaxReport,
    compute_min_out,
    to_wei,
)

__all__ = ["BuyExecutionService", "FundingPlan", "TaxReport", "compute_min_out", "to_wei"]
