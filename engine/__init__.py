"""
Tic-tac-toe game-state engine.
Board, rules, AI opponent, and two ways of running a game:
a table-driven state machine (Game) and a reducer store (Store).
"""

__version__ = "1.0.0"

from .errors import GameError, InvalidMoveError, InvalidStateError, NoLegalMoveError
from .game_state import GameStatus, Mode, Player, PlayerId, PlayerKind, Symbol
from .board import Board, WINNING_LINES, find_winning_moves
from .rules import MoveValidator, RuleStrategy, StandardRules, WildRules, create_rules
from .ai_player import AIMove, AIPlayer
from .state_machine import StateMachine, Transition
from .scheduler import Scheduler, SynchronousScheduler
from .adapters import GameAdapter, GameView
from .game import Game, GamePhase, GameEvent
from .store import Store, StoreAdapter, StoreState, reduce
from .factory import create_adapter
