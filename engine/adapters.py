"""
The call surface shared by every game architecture.

Front ends only talk to a GameAdapter and render GameView snapshots, so the
same console or window works on top of the state machine or the store.
"""

from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass

from .game_state import GameStatus, Mode, Player, PlayerId, PlayerKind, Symbol

Listener = Callable[["GameView"], None]


@dataclass(frozen=True)
class GameView:
    """
    Read-only snapshot of a game, as the presentation layer sees it.
    """
    board: Tuple[Optional[Symbol], ...]
    mode: Mode
    players: Tuple[Player, Player]
    current_player: Player
    status: GameStatus
    winner: Optional[Symbol] = None
    is_draw: bool = False
    is_ai_turn: bool = False
    winning_line: Optional[Tuple[int, int, int]] = None
    error_message: Optional[str] = None

    @property
    def is_setup(self) -> bool:
        return self.status == GameStatus.AWAITING_SETUP

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.TERMINAL

    def player(self, player_id: PlayerId) -> Player:
        return self.players[0] if player_id == PlayerId.PLAYER1 else self.players[1]

    def status_text(self) -> str:
        """One-line status message for the front ends."""
        if self.is_setup:
            return "Set up your game"
        if self.is_draw:
            return "It's a draw!"
        if self.winner is not None:
            return f"Winner: {self.winner.value}"
        if self.is_ai_turn or self.current_player.is_computer:
            return "AI is thinking..."
        kind = "Human" if self.current_player.kind == PlayerKind.HUMAN else "Computer"
        return f"{self.current_player.label} ({kind})'s turn"


class GameAdapter:
    """
    Base class for the game architectures.

    Subclasses implement the game operations and snapshot(); listener
    bookkeeping lives here.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    # ---- intents from the presentation layer ----

    def set_mode(self, mode: Mode) -> None:
        raise NotImplementedError

    def set_player_kind(self, player_id: PlayerId, kind: PlayerKind) -> None:
        raise NotImplementedError

    def start_game(self) -> None:
        raise NotImplementedError

    def play(
        self,
        index: int,
        symbol: Optional[Symbol] = None,
        player_id: Optional[PlayerId] = None
    ) -> None:
        raise NotImplementedError

    def reset_game(self) -> None:
        raise NotImplementedError

    def reset_to_setup(self) -> None:
        raise NotImplementedError

    def clear_error(self) -> None:
        raise NotImplementedError

    # ---- reading state ----

    def snapshot(self) -> GameView:
        raise NotImplementedError

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback that receives a GameView after every change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        view = self.snapshot()
        for listener in list(self._listeners):
            listener(view)
