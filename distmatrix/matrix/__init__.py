"""
Distance matrix module.

This module provides functionality for:
- Modelling coordinates, travel modes, unit systems and account tiers
- Splitting large requests into calls within the service's element and URL limits
- Pacing calls against the rolling element quota
- Sending, validating and merging the calls into a single response

Main classes:
- DistanceMatrixOrchestrator: High-level interface for distance requests
- DistanceMatrixClient: Sends and validates single calls
- MatrixSettings: Static client configuration
- QuotaPacer: Rolling element budget for one request

Errors:
- DistanceMatrixError: Base exception for the module
- ClientConfigError, EmptyInputError, TransportError
- ServiceStatusError and its per-status subclasses
- ResponseShapeError, ElementStatusError
- RequestCancelledError, DeadlineExceededError
"""

from .matrix_client import DistanceMatrixClient, validate_response
from .matrix_config import MatrixSettings
from .matrix_errors import (
    ClientConfigError,
    DeadlineExceededError,
    DistanceMatrixError,
    ElementCountMismatchError,
    ElementStatusError,
    EmptyInputError,
    InvalidRequestError,
    MaxElementsExceededError,
    OverQueryLimitError,
    RequestCancelledError,
    RequestDeniedError,
    ResponseShapeError,
    RowCountMismatchError,
    ServiceStatusError,
    TransportError,
    UnknownServiceError,
)
from .matrix_merger import empty_response, merge_response
from .matrix_pacer import QuotaPacer
from .matrix_partitioner import (
    choose_split_axis,
    compute_call_count,
    partition,
    partition_within_cap,
    split_into_blocks,
)
from .matrix_transport import RequestsTransport
from .matrix_types import (
    AccountTier,
    CallGroup,
    Coordinate,
    DistanceMatrixResponse,
    Fare,
    MatrixElement,
    MatrixRow,
    SplitAxis,
    TextValue,
    TravelMode,
    UnitSystem,
    join_coordinates,
)
from .matrix_workflow import DistanceMatrixOrchestrator

__all__ = [
    # Main classes
    "DistanceMatrixOrchestrator",
    "DistanceMatrixClient",
    "MatrixSettings",
    "QuotaPacer",
    "RequestsTransport",

    # Values
    "AccountTier",
    "CallGroup",
    "Coordinate",
    "SplitAxis",
    "TravelMode",
    "UnitSystem",
    "join_coordinates",

    # Response models
    "DistanceMatrixResponse",
    "MatrixRow",
    "MatrixElement",
    "TextValue",
    "Fare",

    # Partitioning and merging
    "compute_call_count",
    "choose_split_axis",
    "partition",
    "partition_within_cap",
    "split_into_blocks",
    "empty_response",
    "merge_response",
    "validate_response",

    # Errors
    "DistanceMatrixError",
    "ClientConfigError",
    "EmptyInputError",
    "TransportError",
    "ServiceStatusError",
    "InvalidRequestError",
    "MaxElementsExceededError",
    "OverQueryLimitError",
    "RequestDeniedError",
    "UnknownServiceError",
    "ResponseShapeError",
    "RowCountMismatchError",
    "ElementCountMismatchError",
    "ElementStatusError",
    "RequestCancelledError",
    "DeadlineExceededError",
]

# Version info
__version__ = "1.0.0"
