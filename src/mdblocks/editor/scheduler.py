"""Deferred callback queue standing in for the UI event loop's microtask queue"""

from collections import deque
from typing import Any, Callable


class Scheduler:
    """FIFO of callbacks run after the current synchronous unit of work.

    Callbacks queued while draining run in the same drain, so one `run_pending`
    settles every mutation batch and mounted notification that follows an edit.
    """

    def __init__(self):
        self._queue: deque[tuple[Callable[..., Any], tuple]] = deque()

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.append((callback, args))

    def run_pending(self) -> int:
        """Run queued callbacks until the queue is empty. Returns the number run."""
        count = 0
        while self._queue:
            callback, args = self._queue.popleft()
            callback(*args)
            count += 1
        return count

    @property
    def pending(self) -> int:
        return len(self._queue)
