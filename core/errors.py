"""Failures raised by the prediction request client."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when the prediction endpoint is not configured."""


class PredictionRequestError(Exception):
    """Base class for a prediction request that produced no report."""

    kind = "request_failed"

    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(message)
        self.symbol = symbol


class NetworkFailure(PredictionRequestError):
    """Transport-level failure: DNS, refused connection, timeout."""

    kind = "network_failure"


class NonSuccessStatus(PredictionRequestError):
    """The endpoint answered with a status other than 200."""

    kind = "non_success_status"

    def __init__(self, symbol: str, status: int, message: str | None = None) -> None:
        super().__init__(symbol, message or f"Prediction API returned HTTP {status}")
        self.status = status


class MalformedResponse(PredictionRequestError):
    """A 200 response whose body is not a JSON object."""

    kind = "malformed_response"
