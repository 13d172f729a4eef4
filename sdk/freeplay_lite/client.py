"""Synchronous HTTP transport for the Freeplay API."""

import json
import logging
from typing import Any, Optional

import httpx

from .types import HTTPResult

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Sends authenticated JSON requests and folds every outcome into an HTTPResult.

    Each call opens its own connection and closes it afterwards; nothing is
    pooled or shared between calls. Errors never escape: a request that
    cannot complete comes back as ``HTTPResult(status_code=0, ...)``.
    """

    timeout = 30.0

    def __init__(
        self,
        api_key: str,
        verbose: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.verbose = verbose
        self._transport = transport  # Tests swap in httpx.MockTransport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def get(self, url: str) -> HTTPResult:
        """Issue a GET request."""
        return self._request("GET", url)

    def post(self, url: str, payload: Any) -> HTTPResult:
        """Issue a POST request with ``payload`` serialized as JSON."""
        return self._request("POST", url, payload)

    def _request(self, method: str, url: str, payload: Any = None) -> HTTPResult:
        if self.verbose:
            self._log_request(method, url, payload)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                if payload is None:
                    response = client.request(method, url, headers=self.headers)
                else:
                    response = client.request(method, url, headers=self.headers, json=payload)

                if self.verbose:
                    self._log_response(response)

                body = response.json() if response.content else {}
                if body is None:
                    body = {}
        except Exception as e:
            # Log but don't raise - callers check status_code instead
            message = str(e) or type(e).__name__
            logger.warning("%s %s failed: %s", method, url, message)
            return HTTPResult.failure(message)

        return HTTPResult(status_code=response.status_code, body=body)

    def _log_request(self, method: str, url: str, payload: Any) -> None:
        logger.info("%s %s", method, url)
        if payload is None:
            return
        try:
            rendered = json.dumps(payload, indent=2, default=str)
        except (TypeError, ValueError):
            rendered = repr(payload)
        logger.info("Payload: %s", rendered)

    def _log_response(self, response: httpx.Response) -> None:
        logger.info("Response status: %s", response.status_code)
        logger.info("Response body: %s", response.text)
