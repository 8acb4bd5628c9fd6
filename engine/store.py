"""
Global-store variant of the tic-tac-toe engine.

The whole game lives in one immutable StoreState. Actions describe intents,
reduce() computes the next state, and Store holds the current state, notifies
subscribers and schedules the computer's moves.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple
from dataclasses import dataclass, field, replace

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

logger = logging.getLogger(__name__)

EMPTY_BOARD: Tuple[Optional[Symbol], ...] = (None,) * GameConfig.CELL_COUNT


@dataclass(frozen=True)
class StoreState:
    """Everything the store knows about the game."""
    board: Tuple[Optional[Symbol], ...] = EMPTY_BOARD
    mode: Mode = Mode.STANDARD
    players: Tuple[Player, Player] = field(default_factory=lambda: make_players(Mode.STANDARD))
    current_player_id: PlayerId = PlayerId.PLAYER1
    winner: Optional[Symbol] = None
    is_draw: bool = False
    is_setup: bool = True
    error_message: Optional[str] = None

    @property
    def current_player(self) -> Player:
        return self.player(self.current_player_id)

    def player(self, player_id: PlayerId) -> Player:
        return self.players[0] if player_id == PlayerId.PLAYER1 else self.players[1]

    @property
    def rules(self) -> RuleStrategy:
        return create_rules(self.mode)

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw

    @property
    def status(self) -> GameStatus:
        if self.is_setup:
            return GameStatus.AWAITING_SETUP
        if self.is_over:
            return GameStatus.TERMINAL
        return GameStatus.IN_PROGRESS

    @property
    def is_ai_turn(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS and self.current_player.is_computer


# ==================== ACTIONS ====================

@dataclass(frozen=True)
class SetMode:
    mode: Mode


@dataclass(frozen=True)
class SetPlayerKind:
    player_id: PlayerId
    kind: PlayerKind


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class MakeMove:
    index: int
    symbol: Optional[Symbol] = None
    player_id: Optional[PlayerId] = None    # checked against the current player if given


@dataclass(frozen=True)
class MakeAIMove:
    pass


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class ResetToSetup:
    pass


@dataclass(frozen=True)
class SetError:
    message: str


@dataclass(frozen=True)
class ClearError:
    pass


# ==================== REDUCER ====================

_validator = MoveValidator()


def _place(state: StoreState, index: int, symbol: Symbol) -> StoreState:
    """Put a validated symbol on the board and work out what happens next."""
    board = Board(state.board)
    board.place(index, symbol)

    winner = state.rules.check_winner(board)
    if winner is not None:
        logger.info("Game over: %s wins", winner.value)
        return replace(state, board=board.cells, winner=winner, error_message=None)

    if board.is_full():
        logger.info("Game over: draw")
        return replace(state, board=board.cells, is_draw=True, error_message=None)

    return replace(
        state,
        board=board.cells,
        current_player_id=state.current_player_id.opposite(),
        error_message=None,
    )


def _require_active_turn(state: StoreState) -> None:
    if state.is_setup:
        raise InvalidStateError("The game has not started yet")
    if state.is_over:
        raise InvalidStateError("Game is already over!")


def reduce(
    state: StoreState,
    action: Any,
    ai: Optional[AIPlayer] = None,
    initial: Optional[StoreState] = None
) -> StoreState:
    """
    Compute the state after an action.

    The input state is never modified. The only impurity is the AI's random
    choices on MakeAIMove.

    Args:
        state: Current state.
        action: One of the action classes above.
        ai: Move selector used for MakeAIMove.
        initial: State that ResetToSetup returns to (defaults to StoreState()).

    Returns:
        The next state.

    Raises:
        InvalidStateError: If the action does not fit the current state.
        InvalidMoveError: If a move is not allowed.
    """
    if isinstance(action, SetMode):
        if not state.is_setup:
            raise InvalidStateError("Cannot change the mode while a game is running")
        return replace(state, mode=action.mode, players=rebind_players(state.players, action.mode))

    elif isinstance(action, SetPlayerKind):
        if not state.is_setup:
            raise InvalidStateError("Cannot change players while a game is running")
        players = tuple(
            p.with_kind(action.kind) if p.id == action.player_id else p for p in state.players
        )
        return replace(state, players=players)

    elif isinstance(action, StartGame):
        if not state.is_setup:
            raise InvalidStateError("Cannot start a new game while a game is running")
        return replace(
            state, board=EMPTY_BOARD, winner=None, is_draw=False, is_setup=False,
            current_player_id=PlayerId.PLAYER1, error_message=None,
        )

    elif isinstance(action, MakeMove):
        _require_active_turn(state)
        player = state.current_player
        if player.is_computer:
            raise InvalidStateError("Wait for the computer's move")
        if action.player_id is not None and action.player_id != state.current_player_id:
            raise InvalidStateError(f"It's not {action.player_id.value}'s turn")
        symbol = resolve_symbol(player, state.mode, action.symbol)
        _validator.check_move(Board(state.board), player, state.mode, action.index, symbol)
        return _place(state, action.index, symbol)

    elif isinstance(action, MakeAIMove):
        _require_active_turn(state)
        player = state.current_player
        if not player.is_computer:
            raise InvalidStateError(f"{player.label} is not a computer player")
        board = Board(state.board)
        move = (ai or AIPlayer()).get_best_move(board, state.mode, player.symbol)
        _validator.check_move(board, player, state.mode, move.index, move.symbol)
        return _place(state, move.index, move.symbol)

    elif isinstance(action, ResetGame):
        return replace(
            state, board=EMPTY_BOARD, winner=None, is_draw=False,
            current_player_id=PlayerId.PLAYER1, error_message=None,
        )

    elif isinstance(action, ResetToSetup):
        return initial if initial is not None else StoreState()

    elif isinstance(action, SetError):
        return replace(state, error_message=action.message)

    elif isinstance(action, ClearError):
        return replace(state, error_message=None)

    raise TypeError(f"Unknown action: {action!r}")


# ==================== STORE ====================

StoreListener = Callable[[StoreState], None]


class Store:
    """
    Holds the current StoreState and runs actions through reduce().

    When the resulting state is a computer's turn, the store schedules a
    MakeAIMove after the thinking delay. Resets cancel a scheduled move.
    """

    def __init__(
        self,
        initial_state: Optional[StoreState] = None,
        scheduler: Optional[Scheduler] = None,
        ai: Optional[AIPlayer] = None,
        think_delay: Optional[float] = None
    ):
        self.initial_state = initial_state if initial_state is not None else StoreState()
        self._state = self.initial_state
        self.scheduler = scheduler if scheduler is not None else SynchronousScheduler()
        self.ai = ai if ai is not None else AIPlayer()
        self.think_delay = GameConfig.AI_THINK_DELAY_S if think_delay is None else think_delay
        self._listeners: List[StoreListener] = []
        self._pending_handle: Any = None

    def get_state(self) -> StoreState:
        return self._state

    @property
    def has_pending_ai_move(self) -> bool:
        return self._pending_handle is not None

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Any) -> StoreState:
        """
        Run an action through the reducer and publish the result.

        Raises:
            GameError: After recording its message in the state.
        """
        try:
            new_state = reduce(self._state, action, ai=self.ai, initial=self.initial_state)
        except GameError as e:
            logger.info("Rejected %s: %s", type(action).__name__, e)
            self._commit(replace(self._state, error_message=str(e)))
            raise

        # Only an accepted restart drops the scheduled computer move
        if isinstance(action, (StartGame, ResetGame, ResetToSetup)):
            self._cancel_pending()
        self._commit(new_state)
        self._maybe_schedule_ai()
        return self._state

    def _commit(self, state: StoreState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _maybe_schedule_ai(self) -> None:
        if self._state.is_ai_turn and self._pending_handle is None:
            self._pending_handle = self.scheduler.call_later(self.think_delay, self._run_ai_move)

    def _run_ai_move(self) -> None:
        self._pending_handle = None
        if self._state.is_ai_turn:
            self.dispatch(MakeAIMove())

    def _cancel_pending(self) -> None:
        if self._pending_handle is not None:
            self.scheduler.cancel(self._pending_handle)
            self._pending_handle = None


class StoreAdapter(GameAdapter):
    """Exposes a Store through the shared GameAdapter surface."""

    def __init__(self, store: Store):
        super().__init__()
        self.store = store
        store.subscribe(lambda _state: self._notify())

    def set_mode(self, mode: Mode) -> None:
        self.store.dispatch(SetMode(mode))

    def set_player_kind(self, player_id: PlayerId, kind: PlayerKind) -> None:
        self.store.dispatch(SetPlayerKind(player_id, kind))

    def start_game(self) -> None:
        self.store.dispatch(StartGame())

    def play(
        self,
        index: int,
        symbol: Optional[Symbol] = None,
        player_id: Optional[PlayerId] = None
    ) -> None:
        self.store.dispatch(MakeMove(index, symbol, player_id))

    def reset_game(self) -> None:
        self.store.dispatch(ResetGame())

    def reset_to_setup(self) -> None:
        self.store.dispatch(ResetToSetup())

    def clear_error(self) -> None:
        self.store.dispatch(ClearError())

    def snapshot(self) -> GameView:
        state = self.store.get_state()
        line = Board(state.board).winning_line() if state.winner is not None else None
        return GameView(
            board=state.board,
            mode=state.mode,
            players=state.players,
            current_player=state.current_player,
            status=state.status,
            winner=state.winner,
            is_draw=state.is_draw,
            is_ai_turn=state.is_ai_turn,
            winning_line=line,
            error_message=state.error_message,
        )
