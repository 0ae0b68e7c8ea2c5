"""
High-level orchestrator for distance matrix requests.

Takes any number of origins and destinations, splits them into calls the
service accepts, paces those calls against the rolling quota and merges the
answers into one response.
"""

import threading
import time
from typing import Optional, Sequence, Union

from ..config.logger_module import log_info, log_error
from .matrix_client import DistanceMatrixClient
from .matrix_errors import (
    DeadlineExceededError,
    DistanceMatrixError,
    EmptyInputError,
    RequestCancelledError,
    TransportError,
)
from .matrix_merger import empty_response, merge_response
from .matrix_pacer import QuotaPacer
from .matrix_partitioner import (
    choose_split_axis,
    compute_call_count,
    partition_within_cap,
)
from .matrix_types import Coordinate, DistanceMatrixResponse, TravelMode, parse_enum


class DistanceMatrixOrchestrator:
    """
    Coordinates partitioning, pacing, dispatch and merging for one request.

    Calls are sent one after the other on the calling thread. Each
    invocation gets its own QuotaPacer; the client's settings are read-only.
    """

    def __init__(self, client: DistanceMatrixClient = None):
        """
        Initialize the orchestrator.

        Args:
            client: Distance matrix client (built from the environment if not provided)
        """
        self.client = client or DistanceMatrixClient()

    def get_distances(self,
                      origins: Sequence[Coordinate],
                      destinations: Sequence[Coordinate],
                      mode: Union[TravelMode, str] = TravelMode.DRIVING,
                      timeout: Optional[float] = None,
                      deadline: Optional[float] = None,
                      cancel_event: Optional[threading.Event] = None) -> DistanceMatrixResponse:
        """
        Get distances and durations for every origin-destination pair.

        Workflow:
        1. Work out how many calls the element and URL limits require
        2. Split the longer coordinate list into one block per call, adding
           calls until no block exceeds the element cap
        3. For each call: check for cancellation, wait for quota if the
           budget is spent, send it and merge its response

        Args:
            origins: Origin points, at least one
            destinations: Destination points, at least one
            mode: Travel mode
            timeout: Seconds allowed for the whole invocation
            deadline: time.monotonic() value by which the invocation must finish
            cancel_event: Event that aborts the invocation when set

        Returns:
            One response with a row per origin and an element per destination

        Raises:
            EmptyInputError: If origins or destinations are empty
            RequestCancelledError: If cancel_event is set before the last call
            DeadlineExceededError: If the deadline passes before or during a call
            MaxElementsExceededError: If a single origin or destination row
                is already over the element cap (raised before any call)
            TransportError, ServiceStatusError, ResponseShapeError,
            ElementStatusError: The first failure of any call
        """
        if not origins:
            raise EmptyInputError("At least one origin is required")
        if not destinations:
            raise EmptyInputError("At least one destination is required")

        mode = parse_enum(TravelMode, mode, "travel mode")
        deadline = self._resolve_deadline(timeout, deadline)
        settings = self.client.settings

        url = self.client.render_url(origins, destinations, mode)
        call_count = compute_call_count(
            len(origins),
            len(destinations),
            settings.element_cap,
            len(url),
            settings.max_url_length,
        )
        groups, call_count = partition_within_cap(
            origins, destinations, call_count, settings.element_cap
        )
        axis = choose_split_axis(len(origins), len(destinations), call_count)

        log_info(
            f"Requesting {len(origins)}x{len(destinations)} distances "
            f"({mode}) in {len(groups)} call(s), split along {axis.value}"
        )

        pacer = QuotaPacer(settings.element_cap, settings.quota_wait_seconds)
        merged = empty_response()

        for i, group in enumerate(groups, 1):
            self._check_cancelled(deadline, cancel_event)

            need = group.element_count
            pacer.wait_for_budget(need, deadline=deadline, cancel_event=cancel_event)
            self._check_cancelled(deadline, cancel_event)

            try:
                part = self.client.dispatch(
                    group, mode, timeout=self._time_left(deadline)
                )
            except TransportError as e:
                if deadline is not None and time.monotonic() >= deadline:
                    log_error(f"Call {i}/{len(groups)} ran past the deadline: {e}")
                    raise DeadlineExceededError(
                        "Distance matrix request deadline exceeded during call"
                    ) from e
                log_error(f"Call {i}/{len(groups)} failed: {e}")
                raise
            except DistanceMatrixError as e:
                log_error(f"Call {i}/{len(groups)} failed: {e}")
                raise

            merge_response(merged, part, axis)
            pacer.consume(need)

            log_info(
                f"Processed call {i}/{len(groups)}: "
                f"{len(group.origins)}x{len(group.destinations)} elements"
            )

        return merged

    @staticmethod
    def _resolve_deadline(timeout: Optional[float],
                          deadline: Optional[float]) -> Optional[float]:
        """Earliest of an absolute deadline and now + timeout."""
        if timeout is None:
            return deadline

        from_timeout = time.monotonic() + timeout
        if deadline is None:
            return from_timeout
        return min(deadline, from_timeout)

    @staticmethod
    def _time_left(deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return max(0.001, deadline - time.monotonic())

    @staticmethod
    def _check_cancelled(deadline: Optional[float],
                         cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise RequestCancelledError("Distance matrix request cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise DeadlineExceededError("Distance matrix request deadline exceeded")
