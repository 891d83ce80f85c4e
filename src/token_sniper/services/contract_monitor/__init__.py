"""Contract-creation monitoring."""

from token_sniper.services.contract_monitor.contract_creation_detector import (
    ACTIVATION_SELECTORS,
    ContractCreationDetector,
)

__all__ = ["ACTIVATION_SELECTORS", "ContractCreationDetector"]
