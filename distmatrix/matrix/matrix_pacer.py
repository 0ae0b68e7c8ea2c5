"""
Rolling quota pacer for distance matrix calls.

The service allows a fixed number of elements per rolling window (100 per
10 seconds on a free account). The pacer keeps a local budget for one
invocation: when the next call needs more elements than are left, it waits
out the window and starts again with a full budget. This is a best-effort
local heuristic; it does not guarantee the service will not throttle.
"""

import threading
import time
from typing import Optional

from ..config.logger_module import log_info


class QuotaPacer:
    """
    Element budget for the calls of a single get_distances invocation.

    Not shared between invocations: create one per top-level request.
    """

    def __init__(self, element_cap: int, wait_seconds: float = 10.0):
        """
        Initialize the pacer with a full budget.

        Args:
            element_cap: Elements allowed per window (the per-call cap)
            wait_seconds: How long to wait for the window to roll over
        """
        if element_cap <= 0:
            raise ValueError(f"element_cap must be positive, got {element_cap}")
        if wait_seconds < 0:
            raise ValueError(f"wait_seconds cannot be negative, got {wait_seconds}")

        self.element_cap = element_cap
        self.wait_seconds = wait_seconds
        self.remaining = element_cap

    def wait_for_budget(self,
                        need: int,
                        deadline: Optional[float] = None,
                        cancel_event: Optional[threading.Event] = None) -> float:
        """
        Block until a call of ``need`` elements may be sent.

        The wait is cut short at ``deadline`` (a time.monotonic() value) or
        when ``cancel_event`` is set; the caller checks both before sending.

        Args:
            need: Elements the next call will consume
            deadline: Optional monotonic deadline of the invocation
            cancel_event: Optional event signalling cancellation

        Returns:
            Seconds actually waited (0.0 when the budget suffices)
        """
        if need <= self.remaining:
            return 0.0

        wait = self.wait_seconds
        if deadline is not None:
            wait = max(0.0, min(wait, deadline - time.monotonic()))

        log_info(
            f"Quota budget exhausted ({self.remaining} left, {need} needed). "
            f"Waiting {wait:.2f}s"
        )

        if cancel_event is not None:
            started = time.monotonic()
            cancel_event.wait(wait)
            waited = time.monotonic() - started
        else:
            time.sleep(wait)
            waited = wait

        self.reset()
        return waited

    def consume(self, need: int) -> None:
        """Charge a completed call against the budget."""
        self.remaining -= need

    def reset(self) -> None:
        """Restore the full budget."""
        self.remaining = self.element_cap
