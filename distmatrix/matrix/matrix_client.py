"""
Distance Matrix API client.

Builds and authenticates the request URL for one call group, sends it through
the transport and checks that the response is complete before handing it on.
"""

from typing import Dict, Optional, Sequence
from urllib.parse import urlencode

import googlemaps
from pydantic import ValidationError

from ..config.logger_module import log_debug, log_info, log_warning, log_error
from .matrix_config import MatrixSettings
from .matrix_errors import (
    ElementCountMismatchError,
    ElementStatusError,
    InvalidRequestError,
    MaxElementsExceededError,
    OverQueryLimitError,
    RequestDeniedError,
    RowCountMismatchError,
    TransportError,
    UnknownServiceError,
)
from .matrix_transport import RequestsTransport
from .matrix_types import (
    CallGroup,
    Coordinate,
    DistanceMatrixResponse,
    TravelMode,
    join_coordinates,
)


STATUS_OK = "OK"

# Top-level status codes other than OK and the error raised for each.
# Anything not listed maps to UnknownServiceError.
STATUS_ERRORS = {
    "INVALID_REQUEST": (InvalidRequestError, "Provided request invalid"),
    "MAX_ELEMENTS_EXCEEDED": (
        MaxElementsExceededError,
        "Product of origins and destinations exceeds the per-query limit",
    ),
    "OVER_QUERY_LIMIT": (
        OverQueryLimitError,
        "Too many requests from this application within the allowed time period",
    ),
    "REQUEST_DENIED": (
        RequestDeniedError,
        "Service denied use of the distance matrix service",
    ),
}


def validate_response(group: CallGroup,
                      response: DistanceMatrixResponse,
                      strict_elements: bool = False) -> None:
    """
    Check a single call's response against the group that produced it.

    Args:
        group: Origins and destinations that were requested
        response: Decoded response for that request
        strict_elements: Raise on non-OK elements instead of logging them

    Raises:
        ServiceStatusError: Subclass matching a non-OK top-level status
        RowCountMismatchError: Rows differ from origins requested
        ElementCountMismatchError: A row's elements differ from destinations requested
        ElementStatusError: Non-OK elements while strict_elements is set
    """
    if response.status != STATUS_OK:
        error_cls, message = STATUS_ERRORS.get(
            response.status,
            (UnknownServiceError, "Request could not be processed due to a server error"),
        )
        raise error_cls(
            f"{message} (status {response.status or 'missing'})",
            status=response.status,
            error_message=response.error_message,
        )

    if len(response.rows) != len(group.origins):
        raise RowCountMismatchError(
            f"Invalid response: {len(response.rows)} rows for "
            f"{len(group.origins)} origins requested"
        )

    for index, row in enumerate(response.rows):
        if len(row.elements) != len(group.destinations):
            raise ElementCountMismatchError(
                f"Invalid response: row {index} has {len(row.elements)} elements for "
                f"{len(group.destinations)} destinations requested"
            )

    failures = list(response.element_failures())
    if failures:
        if strict_elements:
            raise ElementStatusError(failures)
        log_warning(
            f"{len(failures)} of {group.element_count} elements returned a non-OK status"
        )


class DistanceMatrixClient:
    """
    Sends single distance matrix calls.

    Responsible for one physical request at a time: splitting, pacing and
    merging live in DistanceMatrixOrchestrator.
    """

    BASE_HOST = "https://maps.googleapis.com"
    BASE_PATH = "/maps/api/distancematrix/json"

    def __init__(self,
                 settings: MatrixSettings = None,
                 transport: RequestsTransport = None):
        """
        Initialize the client.

        Args:
            settings: Static configuration (loaded from the environment if not provided)
            transport: Object with fetch(url, timeout) (a RequestsTransport if not provided)
        """
        self.settings = settings or MatrixSettings.from_env()
        self._transport = transport or RequestsTransport()

        log_info(
            f"DistanceMatrixClient initialized (tier={self.settings.account_tier}, "
            f"element_cap={self.settings.element_cap}, "
            f"auth={'signature' if self.settings.uses_signature else 'key'})"
        )

    def build_params(self,
                     origins: Sequence[Coordinate],
                     destinations: Sequence[Coordinate],
                     mode: TravelMode) -> Dict[str, str]:
        """Query parameters for a call, without authentication."""
        return {
            "language": self.settings.language,
            "units": str(self.settings.units),
            "mode": str(mode),
            "origins": join_coordinates(origins),
            "destinations": join_coordinates(destinations),
        }

    def build_url(self, params: Dict[str, str]) -> str:
        """
        Build the complete authenticated URL for a set of parameters.

        Uses the API key when configured, otherwise adds the client id and
        an HMAC-SHA1 signature of the path and query.
        """
        params = dict(params)

        if not self.settings.uses_signature:
            params["key"] = self.settings.api_key
            return f"{self.BASE_HOST}{self.BASE_PATH}?{urlencode(params)}"

        params["client"] = self.settings.client_id
        query = urlencode(params)
        signature = googlemaps.client.sign_hmac(
            self.settings.client_secret, f"{self.BASE_PATH}?{query}"
        )
        return f"{self.BASE_HOST}{self.BASE_PATH}?{query}&signature={signature}"

    def render_url(self,
                   origins: Sequence[Coordinate],
                   destinations: Sequence[Coordinate],
                   mode: TravelMode) -> str:
        """Complete URL for sending all origins and destinations in one call."""
        return self.build_url(self.build_params(origins, destinations, mode))

    def dispatch(self,
                 group: CallGroup,
                 mode: TravelMode,
                 timeout: Optional[float] = None) -> DistanceMatrixResponse:
        """
        Send one call group and return its validated response.

        Args:
            group: Origins and destinations for this call
            mode: Travel mode
            timeout: Seconds allowed for the HTTP exchange (settings default if None)

        Returns:
            The decoded response, with rows matching the group's shape

        Raises:
            TransportError: On network or decoding failure
            ServiceStatusError: On a non-OK service status
            ResponseShapeError: On a row/element count mismatch
            ElementStatusError: On non-OK elements in strict mode
        """
        url = self.render_url(group.origins, group.destinations, mode)
        if timeout is None:
            timeout = self.settings.request_timeout

        log_debug(
            f"Dispatching {len(group.origins)}x{len(group.destinations)} call "
            f"({len(url)} chars)"
        )

        payload = self._transport.fetch(url, timeout)

        try:
            response = DistanceMatrixResponse.model_validate(payload)
        except ValidationError as e:
            log_error(f"Malformed distance matrix payload: {e}")
            raise TransportError(f"Malformed distance matrix payload: {e}")

        validate_response(group, response, strict_elements=self.settings.strict_elements)
        return response
