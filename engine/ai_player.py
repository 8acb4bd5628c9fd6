"""
AI player for the tic-tac-toe engine.
Uses a fixed priority heuristic to choose the next move.
"""

import logging
import random
from typing import List, Optional
from dataclasses import dataclass

from .board import Board, find_winning_moves
from .config import GameConfig
from .errors import NoLegalMoveError
from .game_state import ALL_SYMBOLS, Mode, Symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIMove:
    """A move chosen by the AI."""
    index: int
    symbol: Symbol


class AIPlayer:
    """
    A rule-based tic-tac-toe opponent.

    Standard mode priority: win > block > center > corner > any cell.
    Wild mode priority: win with either symbol > block a threat with the
    other symbol > random cell with a random symbol.

    Ties within a priority level are broken by uniform random choice.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the AI player.

        Args:
            rng: Random source for tie-breaking (a fresh one if omitted).
                 Pass a seeded random.Random for reproducible games.
        """
        self.rng = rng if rng is not None else random.Random()

    def get_best_move(
        self,
        board: Board,
        mode: Mode,
        symbol: Optional[Symbol] = None
    ) -> AIMove:
        """
        Get the next move for the current position.

        Args:
            board: Current board (not modified).
            mode: Current game mode.
            symbol: Symbol the AI plays in standard mode (default: O).
                    Ignored in wild mode.

        Returns:
            The chosen index and symbol.

        Raises:
            NoLegalMoveError: If the board is full.
        """
        if not board.empty_cells():
            raise NoLegalMoveError("No empty cells available")

        if mode == Mode.WILD:
            move = self._wild_move(board)
        else:
            acting = symbol if symbol is not None else Symbol(GameConfig.DEFAULT_AI_SYMBOL)
            move = self._standard_move(board, acting)

        logger.debug("AI (%s) picks %s at %d on %s", mode.value, move.symbol.value, move.index, board.to_string())
        return move

    def _standard_move(self, board: Board, symbol: Symbol) -> AIMove:
        # 1. Try to win
        winning = find_winning_moves(board, symbol)
        if winning:
            return AIMove(self._pick(winning), symbol)

        # 2. Block the opponent
        blocking = find_winning_moves(board, symbol.opposite())
        if blocking:
            return AIMove(self._pick(blocking), symbol)

        # 3. Center
        if board.is_empty(GameConfig.CENTER):
            return AIMove(GameConfig.CENTER, symbol)

        # 4. A corner
        corners = [c for c in GameConfig.CORNERS if board.is_empty(c)]
        if corners:
            return AIMove(self._pick(corners), symbol)

        # 5. Anything left
        return AIMove(self._pick(board.empty_cells()), symbol)

    def _wild_move(self, board: Board) -> AIMove:
        # Win with whichever symbol completes a line first
        for symbol in ALL_SYMBOLS:
            winning = find_winning_moves(board, symbol)
            if winning:
                return AIMove(self._pick(winning), symbol)

        # Spoil a threat by dropping the other symbol on it
        for symbol in ALL_SYMBOLS:
            threats = find_winning_moves(board, symbol)
            if threats:
                return AIMove(self._pick(threats), symbol.opposite())

        return AIMove(self._pick(board.empty_cells()), self.rng.choice(ALL_SYMBOLS))

    def _pick(self, candidates: List[int]) -> int:
        return self.rng.choice(candidates)


# Quick test
if __name__ == "__main__":
    print("Testing AIPlayer...")

    ai = AIPlayer(random.Random(0))

    # Test 1: AI should take a winning move
    board = Board.from_string("XX. .O. ...")
    print(board.render())
    move = ai.get_best_move(board, Mode.STANDARD, Symbol.X)
    print(f"AI's move: {move}")
    assert move.index == 2, f"Expected 2, got {move.index}"
    print("✓ AI correctly takes the win!")

    # Test 2: AI should block
    board = Board.from_string("XX. .O. ...")
    move = ai.get_best_move(board, Mode.STANDARD, Symbol.O)
    print(f"AI's move: {move}")
    assert move.index == 2, f"Expected 2, got {move.index}"
    print("✓ AI correctly blocks the win!")

    print("\nAIPlayer test done!")
