"""
Builds a game for a front end, on top of either architecture.
"""

import random
from typing import Optional

from .adapters import GameAdapter
from .ai_player import AIPlayer
from .game import Game
from .game_state import Mode, PlayerKind, make_players
from .scheduler import Scheduler
from .store import Store, StoreAdapter, StoreState

ENGINES = ("machine", "store")


def create_adapter(
    engine: str = "machine",
    mode: Mode = Mode.STANDARD,
    player1_kind: PlayerKind = PlayerKind.HUMAN,
    player2_kind: PlayerKind = PlayerKind.HUMAN,
    scheduler: Optional[Scheduler] = None,
    rng: Optional[random.Random] = None,
    think_delay: Optional[float] = None
) -> GameAdapter:
    """
    Factory function to get a game adapter.

    Args:
        engine: "machine" for the state-machine Game, "store" for the
                reducer store.
        mode: Starting game mode.
        player1_kind: Who plays seat 1.
        player2_kind: Who plays seat 2.
        scheduler: Runs the delayed AI moves.
        rng: Random source for the AI.
        think_delay: Pause before AI moves, in seconds.

    Raises:
        ValueError: If the engine name is unknown.
    """
    ai = AIPlayer(rng)

    if engine == "machine":
        return Game(
            mode=mode,
            player1_kind=player1_kind,
            player2_kind=player2_kind,
            scheduler=scheduler,
            ai=ai,
            think_delay=think_delay,
        )

    elif engine == "store":
        initial = StoreState(mode=mode, players=make_players(mode, player1_kind, player2_kind))
        store = Store(initial, scheduler=scheduler, ai=ai, think_delay=think_delay)
        return StoreAdapter(store)

    raise ValueError(f"Unknown engine: {engine}")
