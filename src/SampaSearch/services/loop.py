"""Single-threaded event loop for controller callbacks.

Transport workers never touch controller state directly; they post callbacks
here and the owning thread runs them one at a time in FIFO order.
"""

from __future__ import annotations

import queue
import time
from typing import Any, Callable

from SampaSearch.utils.log import log


class EventLoop:
    """FIFO queue of callbacks drained by one thread."""

    def __init__(self) -> None:
        self._queue: queue.Queue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.Queue()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)``; safe to call from any thread."""
        self._queue.put((callback, args))

    def run_pending(self) -> int:
        """Run every callback queued so far without blocking.

        Returns:
            Number of callbacks executed.
        """
        count = 0
        while True:
            try:
                callback, args = self._queue.get_nowait()
            except queue.Empty:
                return count
            self._dispatch(callback, args)
            count += 1

    def run_until(self, predicate: Callable[[], bool], timeout: float | None = None) -> bool:
        """Run callbacks until ``predicate()`` holds.

        Args:
            predicate: Condition checked before and after every callback.
            timeout: Optional overall deadline in seconds.

        Returns:
            True if the predicate was satisfied, False on timeout.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while not predicate():
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                return False
            try:
                callback, args = self._queue.get(timeout=remaining)
            except queue.Empty:
                return predicate()
            self._dispatch(callback, args)
        return True

    @staticmethod
    def _dispatch(callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            callback(*args)
        except Exception as error:  # noqa: BLE001 - one bad callback must not stop the loop
            log.error("Event callback failed: %s", error)
