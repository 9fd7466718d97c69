"""
Single-threaded scheduling for bot turns.

The turn controller only needs ``call_later(delay_ms, callback)`` and
``cancel(handle)``, the same pair tkinter offers as ``after`` and
``after_cancel``. ManualScheduler provides them without an event loop.
"""

import itertools
import time
from typing import Callable, Dict, Tuple


class ManualScheduler:
    """
    Queue of delayed callbacks that run when the owner asks.

    Nothing runs by itself: call run_pending() from your own loop.
    """

    def __init__(self):
        self._pending: Dict[int, Tuple[int, Callable[[], None]]] = {}
        self._ids = itertools.count(1)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """
        Queue a callback.

        Args:
            delay_ms: How long the callback should wait.
            callback: Function to run.

        Returns:
            Handle for cancel().
        """
        handle = next(self._ids)
        self._pending[handle] = (delay_ms, callback)
        return handle

    def cancel(self, handle: int):
        """Drop a queued callback. Unknown or finished handles are ignored."""
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        return len(self._pending)

    def run_pending(self, sleep: bool = False) -> int:
        """
        Run everything queued so far, oldest first.

        Callbacks queued while running wait for the next call.

        Args:
            sleep: If True, wait out each callback's delay first.

        Returns:
            Number of callbacks run.
        """
        ran = 0

        for handle in sorted(self._pending):
            entry = self._pending.pop(handle, None)
            if entry is None:
                continue  # Cancelled by an earlier callback

            delay_ms, callback = entry
            if sleep and delay_ms > 0:
                time.sleep(delay_ms / 1000)

            callback()
            ran += 1

        return ran
