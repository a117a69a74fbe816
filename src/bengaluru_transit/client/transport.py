"""
HTTP transport: JSON POST requests with a fixed-attempt retry policy.

Every operation is ``POST <base_url>/<endpoint>`` with a JSON body. Statuses
in the retry allow-list are retried up to ``RetryConfig.limit`` extra times
with linear backoff. Any other failure surfaces as ``TransportError``.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from bengaluru_transit.config.config_manager import ClientConfig
from bengaluru_transit.errors import ResponseValidationError, TransportError, ValidationIssue
from bengaluru_transit.normalize.categories import LANGUAGES

logger = logging.getLogger(__name__)


class Transport:
    """
    Thin wrapper around a ``requests.Session``.

    Args:
        config: Client configuration (base URL, headers, timeout, retry).
        session: Session to use. A new one is created when omitted.
        sleep: Function used for backoff delays.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.headers = self.default_headers()
        self._sleep = sleep

    def default_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "deviceType": self.config.device_type,
            "authToken": self.config.auth_token,
            "lan": LANGUAGES.to_upstream(self.config.language),
        }
        if self.config.device_id:
            headers["deviceId"] = self.config.device_id
        headers.update(self.config.headers)
        return headers

    def url_for(self, endpoint: str) -> str:
        return f"{self.config.base_url}/{endpoint.lstrip('/')}"

    def post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """
        POST ``payload`` as JSON and return the decoded body.

        Raises:
            TransportError: Network failure or an error status (after retries).
            ResponseValidationError: The body is not valid JSON.
        """
        url = self.url_for(endpoint)
        retry = self.config.retry
        attempts = retry.limit + 1

        for attempt in range(1, attempts + 1):
            try:
                response = self.session.post(
                    url,
                    json=payload,
                    headers=self.headers,
                    timeout=self.config.timeout_seconds,
                )
            except requests.RequestException as e:
                raise TransportError(f"Request to {endpoint} failed: {e}", cause=e) from e

            if response.status_code in retry.status_codes and attempt < attempts:
                delay = attempt * retry.backoff_seconds
                logger.warning(
                    f"⚠️ {endpoint} returned {response.status_code}, "
                    f"retrying in {delay:.1f}s (attempt {attempt + 1}/{attempts})"
                )
                self._sleep(delay)
                continue

            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise TransportError(
                    self._error_message(response, endpoint),
                    status_code=response.status_code,
                    cause=e,
                ) from e

            return self._decode(response, endpoint)

    @staticmethod
    def _error_message(response: requests.Response, endpoint: str) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return f"{endpoint} failed with HTTP {response.status_code}"

    @staticmethod
    def _decode(response: requests.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseValidationError(
                f"Invalid {endpoint} response",
                details=[ValidationIssue("(root)", "Response body is not valid JSON")],
                cause=e,
            ) from e

    def close(self):
        self.session.close()
