"""
Schedulers for the delayed "thinking" pause before automated moves.
"""

import time
from typing import Any, Callable


class Scheduler:
    """
    Runs a callback after a delay, on the caller's event loop.

    call_later() returns an opaque handle that cancel() accepts. Cancelling a
    handle that already ran (or None) is a no-op.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        raise NotImplementedError

    def cancel(self, handle: Any) -> None:
        raise NotImplementedError


class SynchronousScheduler(Scheduler):
    """
    Sleeps, then runs the callback before returning.

    For front ends without an event loop (the console). Nothing is ever left
    outstanding, so cancel() has nothing to do.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        if delay > 0:
            self._sleep(delay)
        callback()
        return None

    def cancel(self, handle: Any) -> None:
        pass
