"""
Turn/result state machine for the tic-tac-toe engine.
Tracks whose turn it is, applies moves, detects win/draw and drives the AI.
"""

import logging
from enum import Enum
from typing import Any, List, Optional

from .adapters import GameAdapter, GameView
from .ai_player import AIPlayer
from .board import Board
from .config import GameConfig
from .errors import GameError, InvalidStateError
from .game_state import (
    GameStatus, Mode, Player, PlayerId, PlayerKind, Symbol,
    make_players, rebind_players,
)
from .rules import MoveValidator, RuleStrategy, create_rules, resolve_symbol
from .scheduler import Scheduler, SynchronousScheduler
from .state_machine import StateMachine, Transition

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """States of the turn/result machine."""
    SETUP = "setup"
    PLAYER1_TURN = "player1_turn"
    PLAYER2_TURN = "player2_turn"
    AI_PENDING = "ai_pending"      # an automated move is scheduled
    WON = "won"
    DRAW = "draw"


class GameEvent(Enum):
    """Events fed to the turn/result machine."""
    BEGIN = "begin"
    MOVE = "move"
    AI_MOVE = "ai_move"
    RESET = "reset"
    RESET_TO_SETUP = "reset_to_setup"


TURN_PHASES = (GamePhase.PLAYER1_TURN, GamePhase.PLAYER2_TURN)
TERMINAL_PHASES = (GamePhase.WON, GamePhase.DRAW)


class Game(GameAdapter):
    """
    A game of tic-tac-toe driven by a table-driven state machine.

    Game flow:
    1. In SETUP, choose the mode and who plays each seat
    2. start_game() hands the first turn to player 1
    3. Human moves come in through play(); computer turns go through
       AI_PENDING, where the move is scheduled after a short pause
    4. Every move is checked for a win, then a draw, before the turn passes
    5. reset_game() starts over with the same settings; reset_to_setup()
       goes back to SETUP
    """

    def __init__(
        self,
        mode: Mode = Mode.STANDARD,
        player1_kind: PlayerKind = PlayerKind.HUMAN,
        player2_kind: PlayerKind = PlayerKind.HUMAN,
        scheduler: Optional[Scheduler] = None,
        ai: Optional[AIPlayer] = None,
        think_delay: Optional[float] = None
    ):
        """
        Initialize the game in SETUP.

        Args:
            mode: Starting game mode.
            player1_kind: Who plays seat 1.
            player2_kind: Who plays seat 2.
            scheduler: Runs the delayed AI move (synchronous if omitted).
            ai: Move selector for computer players.
            think_delay: Pause before AI moves, in seconds
                         (default: GameConfig.AI_THINK_DELAY_S).
        """
        super().__init__()
        self._initial_settings = (mode, player1_kind, player2_kind)
        self.mode = mode
        self.players = make_players(mode, player1_kind, player2_kind)
        self.board = Board()
        self.current_player_id = PlayerId.PLAYER1
        self.error_message: Optional[str] = None

        self.scheduler = scheduler if scheduler is not None else SynchronousScheduler()
        self.ai = ai if ai is not None else AIPlayer()
        self.think_delay = GameConfig.AI_THINK_DELAY_S if think_delay is None else think_delay
        self.validator = MoveValidator()

        # At most one automated move is ever outstanding
        self._pending_handle: Any = None

        self.machine: StateMachine[GamePhase, GameEvent] = StateMachine(
            GamePhase.SETUP, self._build_transitions()
        )

    # ==================== TRANSITION TABLE ====================

    def _build_transitions(self) -> List[Transition]:
        transitions = [
            Transition(GamePhase.SETUP, GamePhase.AI_PENDING, GameEvent.BEGIN,
                       guard=self._first_is_computer),
            Transition(GamePhase.SETUP, GamePhase.PLAYER1_TURN, GameEvent.BEGIN),
        ]

        # After a move: win, then draw, then hand over the turn
        for source, event in (
            (GamePhase.PLAYER1_TURN, GameEvent.MOVE),
            (GamePhase.PLAYER2_TURN, GameEvent.MOVE),
            (GamePhase.AI_PENDING, GameEvent.AI_MOVE),
        ):
            transitions += [
                Transition(source, GamePhase.WON, event,
                           guard=self._has_winner, action=self._on_finished),
                Transition(source, GamePhase.DRAW, event,
                           guard=self.board.is_full, action=self._on_finished),
                Transition(source, GamePhase.AI_PENDING, event,
                           guard=self._next_is_computer, action=self._pass_turn),
                Transition(source, GamePhase.PLAYER1_TURN, event,
                           guard=lambda: self._next_player_id() == PlayerId.PLAYER1,
                           action=self._pass_turn),
                Transition(source, GamePhase.PLAYER2_TURN, event,
                           guard=lambda: self._next_player_id() == PlayerId.PLAYER2,
                           action=self._pass_turn),
            ]

        # Reset keeps the settings and starts a fresh board
        transitions.append(Transition(GamePhase.SETUP, GamePhase.SETUP, GameEvent.RESET))
        for source in TURN_PHASES + (GamePhase.AI_PENDING,) + TERMINAL_PHASES:
            transitions += [
                Transition(source, GamePhase.AI_PENDING, GameEvent.RESET,
                           guard=self._first_is_computer),
                Transition(source, GamePhase.PLAYER1_TURN, GameEvent.RESET),
            ]

        for source in GamePhase:
            transitions.append(Transition(source, GamePhase.SETUP, GameEvent.RESET_TO_SETUP))

        return transitions

    # Guards

    def _has_winner(self) -> bool:
        return self.rules.check_winner(self.board) is not None

    def _first_is_computer(self) -> bool:
        return self.player(PlayerId.PLAYER1).is_computer

    def _next_player_id(self) -> PlayerId:
        return self.current_player_id.opposite()

    def _next_is_computer(self) -> bool:
        return self.player(self._next_player_id()).is_computer

    # Actions

    def _pass_turn(self) -> None:
        self.current_player_id = self._next_player_id()

    def _on_finished(self) -> None:
        winner = self.rules.check_winner(self.board)
        if winner is not None:
            logger.info("Game over: %s wins on %s", winner.value, self.board.winning_line())
        else:
            logger.info("Game over: draw")

    # ==================== READING STATE ====================

    @property
    def phase(self) -> GamePhase:
        return self.machine.state

    @property
    def status(self) -> GameStatus:
        if self.phase == GamePhase.SETUP:
            return GameStatus.AWAITING_SETUP
        if self.phase in TERMINAL_PHASES:
            return GameStatus.TERMINAL
        return GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Symbol]:
        return self.rules.check_winner(self.board) if self.phase == GamePhase.WON else None

    @property
    def is_draw(self) -> bool:
        return self.phase == GamePhase.DRAW

    @property
    def is_ai_turn(self) -> bool:
        return self.phase == GamePhase.AI_PENDING

    @property
    def rules(self) -> RuleStrategy:
        """Rule strategy for the current mode."""
        return create_rules(self.mode)

    @property
    def current_player(self) -> Player:
        return self.player(self.current_player_id)

    def player(self, player_id: PlayerId) -> Player:
        return self.players[0] if player_id == PlayerId.PLAYER1 else self.players[1]

    def snapshot(self) -> GameView:
        return GameView(
            board=self.board.cells,
            mode=self.mode,
            players=self.players,
            current_player=self.current_player,
            status=self.status,
            winner=self.winner,
            is_draw=self.is_draw,
            is_ai_turn=self.is_ai_turn,
            winning_line=self.board.winning_line() if self.phase == GamePhase.WON else None,
            error_message=self.error_message,
        )

    # ==================== SETUP ====================

    def _require_setup(self, what: str) -> None:
        if self.phase != GamePhase.SETUP:
            self._reject(InvalidStateError(f"Cannot {what} while a game is running"))

    def set_mode(self, mode: Mode) -> None:
        """Switch between standard and wild mode (only in SETUP)."""
        self._require_setup("change the mode")
        self.mode = mode
        self.players = rebind_players(self.players, mode)
        logger.debug("Mode set to %s", mode.value)
        self._notify()

    def set_player_kind(self, player_id: PlayerId, kind: PlayerKind) -> None:
        """Choose human or computer for a seat (only in SETUP)."""
        self._require_setup("change players")
        self.players = tuple(
            p.with_kind(kind) if p.id == player_id else p for p in self.players
        )
        logger.debug("%s is now %s", player_id.value, kind.value)
        self._notify()

    def start_game(self) -> None:
        """
        Leave SETUP and give the first turn to player 1.

        Raises:
            InvalidStateError: If a game is already running.
        """
        self._require_setup("start a new game")
        self._clear_board()
        logger.info(
            "Game started: %s, %s vs %s", self.mode.value,
            self.players[0].kind.value, self.players[1].kind.value
        )
        self.machine.dispatch(GameEvent.BEGIN)
        self._publish()

    # ==================== MOVES ====================

    def play(
        self,
        index: int,
        symbol: Optional[Symbol] = None,
        player_id: Optional[PlayerId] = None
    ) -> None:
        """
        Make a human move.

        Args:
            index: Cell to play (0-8).
            symbol: Symbol to place. Required in wild mode; in standard mode
                    it defaults to the player's own symbol.
            player_id: Seat making the move, if the caller wants it checked.

        Raises:
            InvalidStateError: If it's not a human turn, or not this player's.
            InvalidMoveError: If the cell or symbol is not allowed.
        """
        if not self.machine.can_dispatch(GameEvent.MOVE):
            self._reject(InvalidStateError(self._no_move_reason()))
        if player_id is not None and player_id != self.current_player_id:
            self._reject(InvalidStateError(f"It's not {player_id.value}'s turn"))

        player = self.current_player
        symbol = resolve_symbol(player, self.mode, symbol)
        try:
            self.validator.check_move(self.board, player, self.mode, index, symbol)
        except GameError as e:
            self._reject(e)

        self._apply(index, symbol, GameEvent.MOVE)

    def _no_move_reason(self) -> str:
        if self.phase == GamePhase.SETUP:
            return "The game has not started yet"
        if self.phase in TERMINAL_PHASES:
            return "Game is already over!"
        return "Wait for the computer's move"

    def _apply(self, index: int, symbol: Symbol, event: GameEvent) -> None:
        logger.debug("%s places %s at %d", self.current_player_id.value, symbol.value, index)
        self.board.place(index, symbol)
        self.error_message = None
        self.machine.dispatch(event)
        self._publish()

    def _publish(self) -> None:
        # Listeners see the computer's turn before its move is scheduled
        self._notify()
        if self.phase == GamePhase.AI_PENDING and self._pending_handle is None:
            self._schedule_ai_move()

    def _schedule_ai_move(self) -> None:
        self._cancel_pending()
        self._pending_handle = self.scheduler.call_later(self.think_delay, self._run_ai_move)

    def _run_ai_move(self) -> None:
        """Pick and apply the computer's move (runs from the scheduler)."""
        self._pending_handle = None
        if self.phase != GamePhase.AI_PENDING:
            return

        player = self.current_player
        move = self.ai.get_best_move(self.board, self.mode, player.symbol)

        # Same checks as a human move
        self.validator.check_move(self.board, player, self.mode, move.index, move.symbol)
        self._apply(move.index, move.symbol, GameEvent.AI_MOVE)

    def _cancel_pending(self) -> None:
        if self._pending_handle is not None:
            self.scheduler.cancel(self._pending_handle)
            self._pending_handle = None

    # ==================== RESET ====================

    def _clear_board(self) -> None:
        self._cancel_pending()
        self.board.reset()
        self.current_player_id = PlayerId.PLAYER1
        self.error_message = None

    def reset_game(self) -> None:
        """Start over with an empty board and the same settings."""
        logger.info("Resetting game...")
        self._clear_board()
        self.machine.dispatch(GameEvent.RESET)
        self._publish()

    def reset_to_setup(self) -> None:
        """Go back to SETUP with the settings the game was created with."""
        logger.info("Back to setup")
        self._clear_board()
        mode, player1_kind, player2_kind = self._initial_settings
        self.mode = mode
        self.players = make_players(mode, player1_kind, player2_kind)
        self.machine.dispatch(GameEvent.RESET_TO_SETUP)
        self._notify()

    def clear_error(self) -> None:
        self.error_message = None
        self._notify()

    def _reject(self, error: GameError) -> None:
        """Record an error for the view, tell listeners, and raise it."""
        logger.info("Rejected: %s", error)
        self.error_message = str(error)
        self._notify()
        raise error
