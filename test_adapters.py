"""
Both engines behind the GameAdapter surface must behave the same.
"""

import random

import pytest

from engine import (
    GameError, GameStatus, InvalidMoveError, InvalidStateError, Mode,
    PlayerId, PlayerKind, Symbol, create_adapter,
)
from engine.factory import ENGINES
from engine.rules import StandardRules


@pytest.fixture(params=ENGINES)
def make(request, scheduler):
    def build(mode=Mode.STANDARD, p1=PlayerKind.HUMAN, p2=PlayerKind.HUMAN, seed=7):
        return create_adapter(
            engine=request.param,
            mode=mode,
            player1_kind=p1,
            player2_kind=p2,
            scheduler=scheduler,
            rng=random.Random(seed),
            think_delay=0.5,
        )
    return build


def test_unknown_engine():
    with pytest.raises(ValueError):
        create_adapter(engine="quantum")


def test_setup_view(make):
    view = make().snapshot()
    assert view.is_setup
    assert view.status_text() == "Set up your game"
    assert view.board == (None,) * 9


def test_first_turn_text(make):
    adapter = make()
    adapter.start_game()
    assert adapter.snapshot().status_text() == "Player 1 (X) (Human)'s turn"


def test_win_view(make):
    adapter = make()
    adapter.start_game()
    for index in (2, 0, 4, 1, 6):
        adapter.play(index)

    view = adapter.snapshot()
    assert view.status == GameStatus.TERMINAL
    assert view.winner == Symbol.X
    assert view.winning_line == (2, 4, 6)
    assert not view.is_draw


def test_rejections_raise_and_record(make):
    adapter = make()
    with pytest.raises(InvalidStateError):
        adapter.play(0)

    adapter.start_game()
    adapter.play(0)
    with pytest.raises(InvalidMoveError) as excinfo:
        adapter.play(0)
    assert adapter.snapshot().error_message == str(excinfo.value)


def test_move_by_the_wrong_player(make):
    adapter = make()
    adapter.start_game()
    with pytest.raises(InvalidStateError, match="not player2's turn"):
        adapter.play(0, None, PlayerId.PLAYER2)
    assert adapter.snapshot().board[0] is None

    adapter.play(0, None, PlayerId.PLAYER1)
    assert adapter.snapshot().board[0] == Symbol.X


def test_win_detection_goes_through_the_rules(make, monkeypatch):
    monkeypatch.setattr(StandardRules, "check_winner", lambda self, board: None)
    adapter = make()
    adapter.start_game()
    for index in (0, 3, 1, 4, 2):
        adapter.play(index)

    view = adapter.snapshot()
    assert view.winner is None
    assert view.status == GameStatus.IN_PROGRESS


def test_settings_locked_during_play(make):
    adapter = make()
    adapter.start_game()
    with pytest.raises(InvalidStateError):
        adapter.set_mode(Mode.WILD)


def test_computer_reply_waits_for_scheduler(make, scheduler):
    adapter = make(p2=PlayerKind.COMPUTER)
    adapter.start_game()
    adapter.play(0)

    view = adapter.snapshot()
    assert view.is_ai_turn
    assert view.status_text() == "AI is thinking..."
    assert scheduler.delays == [0.5]

    scheduler.run_pending()
    view = adapter.snapshot()
    assert not view.is_ai_turn
    assert view.board[4] == Symbol.O


def test_rejected_restart_keeps_the_computer_move(make, scheduler):
    adapter = make(p2=PlayerKind.COMPUTER)
    adapter.start_game()
    adapter.play(0)

    with pytest.raises(InvalidStateError):
        adapter.start_game()
    assert len(scheduler.pending) == 1

    scheduler.run_pending()
    view = adapter.snapshot()
    assert view.board.count(Symbol.O) == 1
    assert not view.is_ai_turn


def test_reset_cancels_computer_move(make, scheduler):
    adapter = make(p2=PlayerKind.COMPUTER)
    adapter.start_game()
    adapter.play(0)
    adapter.reset_game()

    assert scheduler.pending == {}
    view = adapter.snapshot()
    assert view.board == (None,) * 9
    assert view.current_player.id == PlayerId.PLAYER1


def test_reset_to_setup_restores_creation_settings(make):
    adapter = make(mode=Mode.WILD)
    adapter.set_mode(Mode.STANDARD)
    adapter.set_player_kind(PlayerId.PLAYER2, PlayerKind.COMPUTER)
    adapter.reset_to_setup()

    view = adapter.snapshot()
    assert view.is_setup
    assert view.mode == Mode.WILD
    assert not view.player(PlayerId.PLAYER2).is_computer


def test_engines_agree_on_a_scripted_game(scheduler):
    """Same seed, same moves: both engines produce the same views."""
    def play_out(engine):
        adapter = create_adapter(
            engine=engine,
            mode=Mode.WILD,
            player2_kind=PlayerKind.COMPUTER,
            scheduler=scheduler,
            rng=random.Random(99),
        )
        views = []
        adapter.subscribe(views.append)
        adapter.start_game()
        for index in range(9):
            if adapter.snapshot().is_over:
                break
            try:
                adapter.play(index, Symbol.X)
            except GameError:
                continue
            scheduler.run_pending()
        return [(v.board, v.status, v.winner, v.is_ai_turn) for v in views]

    assert play_out("machine") == play_out("store")
