"""HTTP client for the external stock prediction API."""

from __future__ import annotations

import http.client
import json
import logging
import socket
import urllib.error
import urllib.request

from config import settings
from core.errors import ConfigurationError, MalformedResponse, NetworkFailure, NonSuccessStatus
from core.report import StockReport

LOGGER = logging.getLogger("stockview.client")


class PredictionClient:
    """Submit one ticker per call to the configured prediction endpoint.

    No retry, caching or de-duplication: every ``submit`` is exactly one POST.
    """

    def __init__(self, endpoint: str | None = None, timeout: float | None = None) -> None:
        self.endpoint = endpoint if endpoint is not None else settings.PREDICTION_API_URL
        self.timeout = timeout if timeout is not None else settings.PREDICTION_API_TIMEOUT

    def _build_request(self, symbol: str) -> urllib.request.Request:
        body = json.dumps({"stock": symbol}).encode("utf-8")
        return urllib.request.Request(
            self.endpoint,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def _open(self, request: urllib.request.Request):
        if self.timeout is None:
            return urllib.request.urlopen(request)
        return urllib.request.urlopen(request, timeout=self.timeout)

    def submit(self, symbol: str) -> StockReport:
        """POST ``{"stock": symbol}`` and return the parsed report on HTTP 200.

        The symbol is sent verbatim, empty string included.
        """
        if not self.endpoint:
            raise ConfigurationError("PREDICTION_API_URL is not configured.")

        try:
            request = self._build_request(symbol)
        except ValueError as error:
            raise ConfigurationError(f"PREDICTION_API_URL is not a usable URL: {error}") from error

        try:
            with self._open(request) as response:
                status = response.status
                payload = response.read()
        except urllib.error.HTTPError as error:
            raise NonSuccessStatus(symbol, error.code) from error
        except (urllib.error.URLError, http.client.HTTPException, socket.timeout, OSError) as error:
            reason = getattr(error, "reason", error)
            raise NetworkFailure(symbol, f"Prediction API unreachable: {reason}") from error

        if status != 200:
            raise NonSuccessStatus(symbol, status)

        try:
            decoded = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise MalformedResponse(symbol, f"Prediction API returned invalid JSON: {error}") from error
        if not isinstance(decoded, dict):
            raise MalformedResponse(symbol, "Prediction API returned a non-object JSON body.")

        LOGGER.debug("Received report for %r (%d bytes)", symbol, len(payload))
        return StockReport.from_payload(decoded)
