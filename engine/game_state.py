"""
Core game types for the tic-tac-toe engine.
Symbols, players, modes and the status of a game.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass, replace

from .config import GameConfig


class Symbol(Enum):
    """The two marks that can be placed on the board."""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        """Get the other symbol."""
        return Symbol.O if self == Symbol.X else Symbol.X


# Scan order used wherever both symbols are tried in turn
ALL_SYMBOLS: Tuple[Symbol, ...] = (Symbol.X, Symbol.O)


class Mode(Enum):
    """
    How symbols are assigned.

    STANDARD: each player owns one symbol for the whole game.
    WILD: either player may place either symbol on their turn.
    """
    STANDARD = "standard"
    WILD = "wild"


class PlayerId(Enum):
    """The two seats at the table."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    def opposite(self) -> "PlayerId":
        """Get the other seat."""
        return PlayerId.PLAYER2 if self == PlayerId.PLAYER1 else PlayerId.PLAYER1


class PlayerKind(Enum):
    """Who makes the decisions for a seat."""
    HUMAN = "human"
    COMPUTER = "computer"


class GameStatus(Enum):
    """Coarse lifecycle of a game."""
    AWAITING_SETUP = "awaiting_setup"
    IN_PROGRESS = "in_progress"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Player:
    """
    A player in the game.
    """
    id: PlayerId                      # Which seat
    kind: PlayerKind = PlayerKind.HUMAN
    symbol: Optional[Symbol] = None   # Only bound in standard mode

    @property
    def is_computer(self) -> bool:
        return self.kind == PlayerKind.COMPUTER

    def with_kind(self, kind: PlayerKind) -> "Player":
        return replace(self, kind=kind)

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "Player 1 (X)"."""
        number = "1" if self.id == PlayerId.PLAYER1 else "2"
        if self.symbol is None:
            return f"Player {number}"
        return f"Player {number} ({self.symbol.value})"


def bound_symbol(player_id: PlayerId, mode: Mode) -> Optional[Symbol]:
    """
    Get the symbol a seat owns in the given mode.

    Args:
        player_id: The seat.
        mode: Current game mode.

    Returns:
        X for player 1 and O for player 2 in standard mode, None in wild mode.
    """
    if mode != Mode.STANDARD:
        return None
    if player_id == PlayerId.PLAYER1:
        return Symbol(GameConfig.PLAYER1_SYMBOL)
    return Symbol(GameConfig.PLAYER2_SYMBOL)


def make_players(
    mode: Mode,
    player1_kind: PlayerKind = PlayerKind.HUMAN,
    player2_kind: PlayerKind = PlayerKind.HUMAN
) -> Tuple[Player, Player]:
    """Build both players with the symbols the mode binds to them."""
    return (
        Player(PlayerId.PLAYER1, player1_kind, bound_symbol(PlayerId.PLAYER1, mode)),
        Player(PlayerId.PLAYER2, player2_kind, bound_symbol(PlayerId.PLAYER2, mode)),
    )


def rebind_players(players: Tuple[Player, Player], mode: Mode) -> Tuple[Player, Player]:
    """Keep each player's kind but bind symbols for a new mode."""
    return tuple(
        replace(player, symbol=bound_symbol(player.id, mode)) for player in players
    )
