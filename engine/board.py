"""
Board model and win detection for the tic-tac-toe engine.
A flat 9-cell grid, indexed 0-8 row by row.
"""

from typing import Iterable, List, Optional, Tuple

from .config import GameConfig
from .errors import InvalidMoveError
from .game_state import Symbol


# All possible winning lines (as triples of cell indices)
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


class Board:
    """
    The 3x3 tic-tac-toe board.

    Each cell holds None (empty), Symbol.X or Symbol.O. The board always has
    exactly 9 cells, and an occupied cell is only cleared by reset().
    """

    def __init__(self, cells: Optional[Iterable[Optional[Symbol]]] = None):
        """
        Initialize the board.

        Args:
            cells: Optional starting cells (must be exactly 9). Empty if omitted.
        """
        if cells is None:
            self._cells: List[Optional[Symbol]] = [None] * GameConfig.CELL_COUNT
        else:
            self._cells = list(cells)
            if len(self._cells) != GameConfig.CELL_COUNT:
                raise ValueError(
                    f"A board has {GameConfig.CELL_COUNT} cells, got {len(self._cells)}"
                )

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from a 9-character string such as "XO..X...O".

        Whitespace is ignored; ".", "-" or "_" marks an empty cell.
        """
        chars = [c for c in text if not c.isspace()]
        cells = []
        for char in chars:
            if char.upper() in ("X", "O"):
                cells.append(Symbol(char.upper()))
            elif char in (".", "-", "_"):
                cells.append(None)
            else:
                raise ValueError(f"Unexpected board character {char!r}")
        return cls(cells)

    @property
    def cells(self) -> Tuple[Optional[Symbol], ...]:
        """Read-only view of the cells."""
        return tuple(self._cells)

    def __getitem__(self, index: int) -> Optional[Symbol]:
        return self._cells[index]

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board({self.to_string()!r})"

    def place(self, index: int, symbol: Symbol) -> None:
        """
        Place a symbol on an empty cell.

        Args:
            index: Cell index (0-8).
            symbol: The symbol to place.

        Raises:
            InvalidMoveError: If the index is out of range or the cell is taken.
        """
        if not 0 <= index < GameConfig.CELL_COUNT:
            raise InvalidMoveError(
                f"Invalid cell {index}. Must be 0-{GameConfig.CELL_COUNT - 1}."
            )
        if self._cells[index] is not None:
            raise InvalidMoveError(
                f"Cell {index} is already occupied by {self._cells[index].value}"
            )
        self._cells[index] = symbol

    def is_empty(self, index: int) -> bool:
        return self._cells[index] is None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self._cells)

    def empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            List of cell indices, in ascending order.
        """
        return [i for i, cell in enumerate(self._cells) if cell is None]

    def winner(self) -> Optional[Symbol]:
        """
        Check if there's a winner.

        Returns:
            The symbol filling a complete line, or None if no line is complete.
        """
        line = self.winning_line()
        if line is None:
            return None
        return self._cells[line[0]]

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        Returns:
            The first complete line as a triple of indices, or None.
        """
        for line in WINNING_LINES:
            a, b, c = line
            if self._cells[a] is not None and self._cells[a] == self._cells[b] == self._cells[c]:
                return line
        return None

    def copy(self) -> "Board":
        return Board(self._cells)

    def reset(self) -> None:
        """Clear every cell."""
        self._cells = [None] * GameConfig.CELL_COUNT

    def to_string(self) -> str:
        return "".join("." if cell is None else cell.value for cell in self._cells)

    def render(self) -> str:
        """
        Draw the board as text for the console.

        Empty cells show their index so players know what to type.
        """
        size = GameConfig.BOARD_SIZE
        rows = []
        for row in range(size):
            parts = []
            for col in range(size):
                index = row * size + col
                cell = self._cells[index]
                parts.append(f" {index if cell is None else cell.value} ")
            rows.append("│".join(parts))
        divider = "\n" + "┼".join(["───"] * size) + "\n"
        return divider.join(rows)


def find_winning_moves(board: Board, symbol: Symbol) -> List[int]:
    """
    Find every empty cell that would complete a line for a symbol.

    Args:
        board: The board to inspect (not modified).
        symbol: The symbol that would be placed.

    Returns:
        Cell indices in ascending order (may be empty).
    """
    moves = []
    for index in board.empty_cells():
        # Only lines through this cell can be completed by it
        for line in WINNING_LINES:
            if index in line and all(board[i] == symbol for i in line if i != index):
                moves.append(index)
                break
    return moves


# Quick test
if __name__ == "__main__":
    print("Testing Board...")

    board = Board()
    for index, symbol in [(0, Symbol.X), (1, Symbol.O), (4, Symbol.X), (2, Symbol.O), (8, Symbol.X)]:
        board.place(index, symbol)
    print(board.render())

    assert board.winner() == Symbol.X
    assert board.winning_line() == (0, 4, 8)
    print(f"Winner: {board.winner().value} on {board.winning_line()}")

    print("\nBoard test done!")
