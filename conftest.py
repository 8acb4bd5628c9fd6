"""
Shared fixtures for the tic-tac-toe tests.
"""

import random
from typing import Any, Callable, Dict, List

import pytest

from engine import AIPlayer, Scheduler


class ManualScheduler(Scheduler):
    """
    Holds delayed callbacks until the test runs them.
    """

    def __init__(self):
        self.pending: Dict[int, Callable[[], None]] = {}
        self.delays: List[float] = []
        self._next_handle = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        self._next_handle += 1
        self.pending[self._next_handle] = callback
        self.delays.append(delay)
        return self._next_handle

    def cancel(self, handle: Any) -> None:
        self.pending.pop(handle, None)

    def run_next(self) -> None:
        handle = min(self.pending)
        callback = self.pending.pop(handle)
        callback()

    def run_pending(self) -> None:
        # Callbacks may schedule more callbacks (computer vs computer)
        while self.pending:
            self.run_next()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def ai(rng) -> AIPlayer:
    return AIPlayer(rng)
