"""
HTTP transport for distance matrix calls.

Performs a GET on a fully formed URL and decodes the JSON body. Everything
above this layer works with URLs and dictionaries only.
"""

from typing import Any, Dict

import requests

from ..config.logger_module import log_error
from .matrix_errors import TransportError


class RequestsTransport:
    """Fetches JSON payloads over a shared requests session."""

    USER_AGENT = "DistanceMatrixClient/1.0"

    def __init__(self, session: requests.Session = None):
        self._session = session or requests.Session()
        self._session.headers.update({
            'User-Agent': self.USER_AGENT
        })

    def fetch(self, url: str, timeout: float) -> Dict[str, Any]:
        """
        GET ``url`` and return the decoded JSON object.

        Args:
            url: Complete, authenticated request URL
            timeout: Seconds to wait for the server

        Returns:
            Decoded JSON payload

        Raises:
            TransportError: On network failure, HTTP error or invalid JSON
        """
        try:
            response = self._session.get(url, timeout=timeout)
        except requests.exceptions.Timeout:
            log_error(f"Timeout after {timeout:.2f}s calling distance matrix service")
            raise TransportError("Request timeout")
        except requests.exceptions.RequestException as e:
            log_error(f"Request error calling distance matrix service: {e}")
            raise TransportError(f"Request failed: {str(e)}")

        if response.status_code != 200:
            log_error(
                f"HTTP {response.status_code} from distance matrix service: "
                f"{response.text[:200]}"
            )
            raise TransportError(f"HTTP {response.status_code} from distance matrix service")

        try:
            payload = response.json()
        except ValueError as e:
            log_error(f"Invalid JSON from distance matrix service: {e}")
            raise TransportError(f"Invalid JSON payload: {str(e)}")

        if not isinstance(payload, dict):
            raise TransportError(
                f"Unexpected payload type {type(payload).__name__}, expected a JSON object"
            )

        return payload
