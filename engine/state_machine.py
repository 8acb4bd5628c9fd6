"""
Table-driven state machine.
Transitions are looked up by (state, event); guards pick between them.
"""

import logging
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar
from dataclasses import dataclass

from .errors import InvalidStateError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Hashable)
E = TypeVar("E", bound=Hashable)


@dataclass(frozen=True)
class Transition(Generic[S, E]):
    """
    One row of the transition table.

    When `event` arrives in `source` and `guard` (if any) returns True, the
    machine moves to `target` and then runs `action` (if any).
    """
    source: S
    target: S
    event: E
    guard: Optional[Callable[[], bool]] = None
    action: Optional[Callable[[], None]] = None


class StateMachine(Generic[S, E]):
    """
    A small finite state machine driven by a transition table.

    Several transitions may share the same (source, event); they are tried in
    table order and the first whose guard passes is taken. Actions run after
    the state has changed, so an action may dispatch further events.
    """

    def __init__(self, initial: S, transitions: Iterable[Transition[S, E]]):
        self._state = initial
        self._table: Dict[Tuple[S, E], List[Transition[S, E]]] = {}
        for transition in transitions:
            key = (transition.source, transition.event)
            self._table.setdefault(key, []).append(transition)

    @property
    def state(self) -> S:
        return self._state

    def _choose(self, event: E) -> Optional[Transition[S, E]]:
        for transition in self._table.get((self._state, event), []):
            if transition.guard is None or transition.guard():
                return transition
        return None

    def can_dispatch(self, event: E) -> bool:
        """Check whether an event would be accepted right now."""
        return self._choose(event) is not None

    def dispatch(self, event: E) -> S:
        """
        Feed an event to the machine.

        Args:
            event: The event to handle.

        Returns:
            The state after the transition (and any nested dispatches).

        Raises:
            InvalidStateError: If no transition exists for the event in the
                current state, or every guard blocked it.
        """
        options = self._table.get((self._state, event))
        if not options:
            raise InvalidStateError(f"No transition for {_name(event)} from {_name(self._state)}")

        chosen = self._choose(event)
        if chosen is None:
            raise InvalidStateError(f"All guards blocked {_name(event)} from {_name(self._state)}")

        logger.debug("%s --%s--> %s", _name(self._state), _name(event), _name(chosen.target))
        self._state = chosen.target
        if chosen.action is not None:
            chosen.action()
        return self._state


def _name(value: Hashable) -> str:
    return getattr(value, "name", str(value))
