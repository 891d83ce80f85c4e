"""Token validation service."""

from token_sniper.services.token_validation.token_validator import TokenValidator

__all__ = ["TokenValidator"]
