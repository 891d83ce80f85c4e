"""Exceptions raised by the sniper core and its capability clients."""

from __future__ import annotations


class SniperError(Exception):
    """Base exception for token sniper errors."""

    pass


class MissingRequiredConfigError(SniperError):
    """Raised at startup when a required configuration value is missing."""

    def __init__(self, *names: str) -> None:
        super().__init__(f"Missing required configuration: {', '.join(names)}")
        self.names = list(names)


class IdentityNotFoundError(SniperError):
    """Raised when a feed identifier does not resolve to a numeric identity."""

    def __init__(self, identifier: str | int) -> None:
        super().__init__(f"Feed identity not found: {identifier!r}")
        self.identifier = identifier


class InvalidAddressError(SniperError):
    """Raised when a value is not a well-formed 20-byte hex address."""

    def __init__(self, address: object) -> None:
        super().__init__(f"Invalid address: {address!r}")
        self.address = address


class FetchFailureError(SniperError):
    """Transient failure while scanning an upstream source (feed or chain)."""

    pass


class FeedApiError(FetchFailureError):
    """Raised when a feed API request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(FeedApiError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class FeedDecodeError(FetchFailureError):
    """Raised when a feed payload cannot be decoded into boundary types."""

    pass


class ChainCallError(SniperError):
    """Raised when an RPC read, simulation or submission fails."""

    def __init__(
        self,
        message: str,
        *,
        address: str | None = None,
        function: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.address = address
        self.function = function
        self.cause = cause
