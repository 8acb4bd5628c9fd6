"""
Rule strategies and move validation for the tic-tac-toe engine.
Validates that moves follow the rules of the current mode.
"""

from typing import List, Optional
from dataclasses import dataclass

from .board import Board
from .config import GameConfig
from .errors import InvalidMoveError
from .game_state import ALL_SYMBOLS, Mode, Player, Symbol


class RuleStrategy:
    """
    Per-mode policy: which moves are legal and which symbols a player may use.

    Subclasses only override available_symbols(); the cell and winner checks
    are the same in every mode.
    """

    mode: Mode

    def is_move_valid(self, board: Board, index: int) -> bool:
        """
        Check that a cell can take a symbol.

        Range checking is the caller's job; this only checks occupancy.
        """
        return board.is_empty(index)

    def check_winner(self, board: Board) -> Optional[Symbol]:
        return board.winner()

    def available_symbols(self, player: Player, mode: Mode) -> List[Symbol]:
        raise NotImplementedError

    def _check_mode(self, mode: Mode) -> None:
        if mode != self.mode:
            raise ValueError(
                f"{type(self).__name__} handles {self.mode.value} mode, not {getattr(mode, 'value', mode)}"
            )


class StandardRules(RuleStrategy):
    """Each player owns one symbol for the whole game."""

    mode = Mode.STANDARD

    def available_symbols(self, player: Player, mode: Mode) -> List[Symbol]:
        self._check_mode(mode)
        return [player.symbol] if player.symbol is not None else []


class WildRules(RuleStrategy):
    """Either player may place either symbol."""

    mode = Mode.WILD

    def available_symbols(self, player: Player, mode: Mode) -> List[Symbol]:
        self._check_mode(mode)
        return list(ALL_SYMBOLS)


def create_rules(mode: Mode) -> RuleStrategy:
    """
    Build the rule strategy for a mode.

    Raises:
        ValueError: If the mode is unknown.
    """
    if mode == Mode.STANDARD:
        return StandardRules()
    if mode == Mode.WILD:
        return WildRules()
    raise ValueError(f"Unknown game mode: {mode!r}")


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates tic-tac-toe moves.

    Rules:
    1. The index must be on the board (0-8)
    2. Can only place on empty cells
    3. The symbol must be one the player may place in this mode
    """

    def validate_move(
        self,
        board: Board,
        player: Player,
        mode: Mode,
        index: int,
        symbol: Optional[Symbol]
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            player: The player making the move.
            mode: Current game mode.
            index: Cell to place the symbol on (0-8).
            symbol: Symbol to place.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if index is in valid range
        if not 0 <= index < GameConfig.CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )

        rules = create_rules(mode)

        # Check if cell is empty
        if not rules.is_move_valid(board, index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        if symbol is None:
            return ValidationResult(
                is_valid=False,
                error_message="Choose a symbol to place."
            )

        allowed = rules.available_symbols(player, mode)
        if symbol not in allowed:
            return ValidationResult(
                is_valid=False,
                error_message=f"{player.label} cannot place {symbol.value}"
            )

        return ValidationResult(is_valid=True)

    def check_move(
        self,
        board: Board,
        player: Player,
        mode: Mode,
        index: int,
        symbol: Optional[Symbol]
    ) -> None:
        """
        Same as validate_move(), but raise on failure.

        Raises:
            InvalidMoveError: With the validation message.
        """
        result = self.validate_move(board, player, mode, index, symbol)
        if not result.is_valid:
            raise InvalidMoveError(result.error_message)


def resolve_symbol(player: Player, mode: Mode, symbol: Optional[Symbol]) -> Optional[Symbol]:
    """
    Fill in the symbol for a move when the mode implies it.

    In standard mode a player's own symbol is used when none is given; in wild
    mode the caller must always choose.
    """
    if symbol is None and mode == Mode.STANDARD:
        return player.symbol
    return symbol
