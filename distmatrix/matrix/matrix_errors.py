"""
Custom exceptions for the distance matrix module.

These exceptions provide granular error handling for the different failure
modes of a distance matrix request: bad client configuration, empty input,
transport failures, service status codes, malformed response shapes and
cancellation.
"""

from typing import List, Optional, Tuple


class DistanceMatrixError(Exception):
    """Base exception for the distance matrix module."""
    pass


class ClientConfigError(DistanceMatrixError):
    """Raised when the client is constructed with invalid settings."""
    pass


class EmptyInputError(DistanceMatrixError):
    """Raised when origins or destinations are empty."""
    pass


class TransportError(DistanceMatrixError):
    """Raised when the HTTP exchange or payload decoding fails."""
    pass


class ServiceStatusError(DistanceMatrixError):
    """
    Raised when the service answers with a non-OK top-level status.

    The client never retries by itself. ``retryable`` tells the caller
    whether repeating the same request may succeed.
    """

    retryable = False

    def __init__(self, message: str, status: str, error_message: Optional[str] = None):
        if error_message:
            message = f"{message}: {error_message}"
        super().__init__(message)
        self.status = status
        self.error_message = error_message


class InvalidRequestError(ServiceStatusError):
    """INVALID_REQUEST: the provided request was invalid."""
    pass


class MaxElementsExceededError(ServiceStatusError):
    """MAX_ELEMENTS_EXCEEDED: origins x destinations exceeds the per-query limit."""
    pass


class OverQueryLimitError(ServiceStatusError):
    """OVER_QUERY_LIMIT: too many requests within the allowed time period."""
    retryable = True


class RequestDeniedError(ServiceStatusError):
    """REQUEST_DENIED: the service denied use of the distance matrix service."""
    pass


class UnknownServiceError(ServiceStatusError):
    """Any other status, e.g. UNKNOWN_ERROR. The request may succeed if retried."""
    retryable = True


class ResponseShapeError(DistanceMatrixError):
    """Raised when the response rows/elements do not match the request."""
    pass


class RowCountMismatchError(ResponseShapeError):
    """Number of rows differs from the number of origins requested."""
    pass


class ElementCountMismatchError(ResponseShapeError):
    """Number of elements in a row differs from the number of destinations requested."""
    pass


class ElementStatusError(DistanceMatrixError):
    """Raised in strict mode when one or more elements carry a non-OK status."""

    def __init__(self, failures: List[Tuple[int, int, str]]):
        preview = ", ".join(
            f"({origin}, {destination}): {status}"
            for origin, destination, status in failures[:5]
        )
        if len(failures) > 5:
            preview += f", ... {len(failures) - 5} more"
        super().__init__(f"{len(failures)} element(s) failed: {preview}")
        self.failures = failures


class RequestCancelledError(DistanceMatrixError):
    """Raised when the caller cancels an invocation before it completes."""
    pass


class DeadlineExceededError(RequestCancelledError):
    """Raised when the caller's deadline passes before the invocation completes."""
    pass
