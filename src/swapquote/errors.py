"""Exception types surfaced by the quote pipeline and HTTP layer.

Every error carries the HTTP status it maps to and renders its own JSON
body; the API registers one handler for the whole hierarchy.
"""

from typing import Optional


class SwapQuoteError(RuntimeError):
    """Base class for errors that abort a request."""

    status_code = 500
    error = "Internal error"

    def to_payload(self) -> dict:
        payload = {"error": self.error}
        message = str(self)
        if message and message != self.error:
            payload["message"] = message
        return payload


class RequestValidationError(SwapQuoteError):
    """Raised when a swap request is missing fields or carries bad values."""

    status_code = 400

    def __init__(self, message: str):
        self.error = message
        super().__init__(message)


class ConfigurationError(SwapQuoteError):
    """Raised when required process configuration is absent."""

    error = "Service misconfigured"


class UpstreamError(SwapQuoteError):
    """Raised when the aggregator is unreachable or returned nothing usable."""

    error = "Failed to get swap details"

    def __init__(self, message: str, status: Optional[int] = None, error: Optional[str] = None):
        self.status = status
        if error:
            self.error = error
        super().__init__(message)


class AllProvidersFailedError(UpstreamError):
    """Raised when every provider in a fan-out call failed."""

    error = "All providers failed"

    def __init__(self, provider_stats: dict, provider_errors: dict):
        self.provider_stats = provider_stats
        self.provider_errors = provider_errors
        super().__init__("Check API key and provider endpoints")

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["providerStats"] = self.provider_stats
        payload["providerErrors"] = self.provider_errors
        return payload
