"""
Errors raised by the tic-tac-toe engine.
All of them are recoverable: callers catch GameError and report it.
"""


class GameError(Exception):
    """Base class for every engine error."""


class InvalidMoveError(GameError):
    """The cell is out of range, already taken, or the symbol is not allowed."""


class InvalidStateError(GameError):
    """The request does not fit the current phase of the game."""


class NoLegalMoveError(GameError):
    """The move selector was asked to play on a full board."""
