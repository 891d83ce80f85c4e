"""Exceptions subpackage."""

from token_sniper.exceptions.exceptions import (
    ChainCallError,
    FeedApiError,
    FeedDecodeError,
    FetchFailureError,
    IdentityNotFoundError,
    InvalidAddressError,
    MissingRequiredConfigError,
    RateLimitError,
    SniperError,
)

__all__ = [
    "ChainCallError",
    "FeedApiError",
    "FeedDecodeError",
    "FetchFailureError",
    "IdentityNotFoundError",
    "InvalidAddressError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "SniperError",
]
