import pytest

from engine import (
    Game, GamePhase, GameStatus, InvalidMoveError, InvalidStateError,
    Mode, PlayerId, PlayerKind, Symbol,
)

# X: 0 2 3 7 8, O: 1 4 5 6 - nobody completes a line
DRAW_SEQUENCE = [0, 1, 2, 4, 3, 5, 7, 6, 8]


@pytest.fixture
def game(scheduler, ai):
    game = Game(scheduler=scheduler, ai=ai, think_delay=0.25)
    game.start_game()
    return game


def test_new_game_awaits_setup(scheduler):
    game = Game(scheduler=scheduler)
    assert game.phase == GamePhase.SETUP
    assert game.status == GameStatus.AWAITING_SETUP
    assert game.snapshot().is_setup


def test_start_gives_first_turn_to_player1(game):
    assert game.phase == GamePhase.PLAYER1_TURN
    assert game.status == GameStatus.IN_PROGRESS
    assert game.current_player.id == PlayerId.PLAYER1


def test_turns_alternate(game):
    game.play(0)
    assert game.board[0] == Symbol.X
    assert game.phase == GamePhase.PLAYER2_TURN

    game.play(4)
    assert game.board[4] == Symbol.O
    assert game.phase == GamePhase.PLAYER1_TURN


def test_diagonal_win(game):
    for index in (0, 1, 4, 2, 8):
        game.play(index)

    assert game.phase == GamePhase.WON
    assert game.status == GameStatus.TERMINAL
    assert game.winner == Symbol.X

    view = game.snapshot()
    assert view.is_over
    assert view.winner == Symbol.X
    assert view.winning_line == (0, 4, 8)
    assert view.status_text() == "Winner: X"


def test_nine_moves_without_winner_is_a_draw(game):
    for index in DRAW_SEQUENCE:
        game.play(index)

    assert game.phase == GamePhase.DRAW
    assert game.is_draw
    assert game.winner is None
    assert game.snapshot().status_text() == "It's a draw!"


def test_occupied_cell_is_rejected_without_changes(game):
    game.play(0)
    before = game.board.cells

    with pytest.raises(InvalidMoveError):
        game.play(0)

    assert game.board.cells == before
    assert game.phase == GamePhase.PLAYER2_TURN
    assert "already occupied" in game.snapshot().error_message


def test_out_of_range_is_rejected(game):
    with pytest.raises(InvalidMoveError):
        game.play(9)
    assert game.board.empty_cells() == list(range(9))


def test_next_valid_move_clears_the_error(game):
    with pytest.raises(InvalidMoveError):
        game.play(-1)
    game.play(0)
    assert game.error_message is None


def test_move_before_start_is_rejected(scheduler):
    game = Game(scheduler=scheduler)
    with pytest.raises(InvalidStateError):
        game.play(0)


def test_move_after_game_over_is_rejected(game):
    for index in (0, 3, 1, 4, 2):
        game.play(index)
    assert game.phase == GamePhase.WON

    with pytest.raises(InvalidStateError):
        game.play(8)
    assert game.board[8] is None


def test_move_by_the_wrong_player_is_rejected(game):
    with pytest.raises(InvalidStateError):
        game.play(0, player_id=PlayerId.PLAYER2)
    game.play(0, player_id=PlayerId.PLAYER1)


def test_standard_mode_rejects_the_other_symbol(game):
    with pytest.raises(InvalidMoveError):
        game.play(0, Symbol.O)
    game.play(0, Symbol.X)
    assert game.board[0] == Symbol.X


class TestWildMode:

    @pytest.fixture
    def game(self, scheduler, ai):
        game = Game(mode=Mode.WILD, scheduler=scheduler, ai=ai)
        game.start_game()
        return game

    def test_players_have_no_bound_symbol(self, game):
        assert all(p.symbol is None for p in game.players)

    def test_symbol_is_required(self, game):
        with pytest.raises(InvalidMoveError):
            game.play(0)

    def test_either_symbol_may_be_placed(self, game):
        game.play(0, Symbol.O)
        game.play(1, Symbol.O)
        game.play(2, Symbol.O)
        # Player 1 completed the line, but the line belongs to O
        assert game.winner == Symbol.O


class TestComputerPlayer:

    @pytest.fixture
    def game(self, scheduler, ai):
        game = Game(player2_kind=PlayerKind.COMPUTER, scheduler=scheduler, ai=ai, think_delay=0.25)
        game.start_game()
        return game

    def test_computer_turn_waits_for_the_scheduler(self, game, scheduler):
        game.play(0)

        assert game.phase == GamePhase.AI_PENDING
        assert game.is_ai_turn
        assert game.current_player.id == PlayerId.PLAYER2
        assert len(scheduler.pending) == 1
        assert scheduler.delays == [0.25]
        assert game.snapshot().status_text() == "AI is thinking..."

    def test_human_cannot_move_while_computer_thinks(self, game):
        game.play(0)
        with pytest.raises(InvalidStateError):
            game.play(1)
        assert game.board[1] is None

    def test_scheduled_move_is_applied(self, game, scheduler):
        game.play(0)
        scheduler.run_pending()

        assert game.phase == GamePhase.PLAYER1_TURN
        assert game.board.cells.count(Symbol.O) == 1
        # Center is the best reply to a corner
        assert game.board[4] == Symbol.O

    def test_computer_blocks(self, game, scheduler):
        game.play(0)
        scheduler.run_pending()   # O takes the center
        game.play(1)
        scheduler.run_pending()
        assert game.board[2] == Symbol.O

    def test_listeners_see_the_pending_state(self, game, scheduler):
        views = []
        game.subscribe(views.append)
        game.play(0)
        scheduler.run_pending()

        assert any(v.is_ai_turn for v in views)
        assert not views[-1].is_ai_turn

    def test_reset_cancels_the_pending_move(self, game, scheduler):
        game.play(0)
        assert scheduler.pending

        game.reset_game()

        assert scheduler.pending == {}
        assert game.board.empty_cells() == list(range(9))
        assert game.phase == GamePhase.PLAYER1_TURN
        assert game.current_player.id == PlayerId.PLAYER1

    def test_reset_to_setup_cancels_the_pending_move(self, game, scheduler):
        game.play(0)
        game.reset_to_setup()

        assert scheduler.pending == {}
        assert game.phase == GamePhase.SETUP


def test_computer_as_player1_moves_first(scheduler, ai):
    game = Game(player1_kind=PlayerKind.COMPUTER, scheduler=scheduler, ai=ai)
    game.start_game()
    assert game.phase == GamePhase.AI_PENDING

    scheduler.run_pending()
    assert game.board[4] == Symbol.X
    assert game.phase == GamePhase.PLAYER2_TURN


def test_reset_with_computer_player1_schedules_one_move(scheduler, ai):
    game = Game(player1_kind=PlayerKind.COMPUTER, scheduler=scheduler, ai=ai)
    game.start_game()
    game.reset_game()

    assert game.phase == GamePhase.AI_PENDING
    assert len(scheduler.pending) == 1


@pytest.mark.parametrize("mode", list(Mode))
def test_computer_vs_computer_finishes(scheduler, ai, mode):
    game = Game(mode, PlayerKind.COMPUTER, PlayerKind.COMPUTER, scheduler=scheduler, ai=ai)
    game.start_game()
    scheduler.run_pending()

    assert game.status == GameStatus.TERMINAL
    assert game.winner is not None or game.board.is_full()


def test_computer_vs_computer_with_synchronous_scheduler(ai):
    game = Game(player1_kind=PlayerKind.COMPUTER, player2_kind=PlayerKind.COMPUTER, ai=ai, think_delay=0)
    game.start_game()
    # Every computer move runs inside the previous one's call_later
    assert game.status == GameStatus.TERMINAL


def test_reset_restores_empty_board_and_first_turn(game):
    game.play(0)
    game.play(1)
    game.reset_game()

    assert game.board.empty_cells() == list(range(9))
    assert game.phase == GamePhase.PLAYER1_TURN
    assert game.current_player.id == PlayerId.PLAYER1


def test_reset_after_game_over(game):
    for index in (0, 3, 1, 4, 2):
        game.play(index)
    game.reset_game()
    assert game.status == GameStatus.IN_PROGRESS
    assert game.winner is None


class TestSetup:

    def test_set_mode_rebinds_symbols(self, scheduler):
        game = Game(scheduler=scheduler)
        game.set_mode(Mode.WILD)
        assert game.mode == Mode.WILD
        assert [p.symbol for p in game.players] == [None, None]

        game.set_mode(Mode.STANDARD)
        assert [p.symbol for p in game.players] == [Symbol.X, Symbol.O]

    def test_set_player_kind(self, scheduler):
        game = Game(scheduler=scheduler)
        game.set_player_kind(PlayerId.PLAYER2, PlayerKind.COMPUTER)
        assert game.player(PlayerId.PLAYER2).is_computer
        assert not game.player(PlayerId.PLAYER1).is_computer

    def test_settings_are_locked_during_play(self, game):
        with pytest.raises(InvalidStateError):
            game.set_mode(Mode.WILD)
        with pytest.raises(InvalidStateError):
            game.set_player_kind(PlayerId.PLAYER1, PlayerKind.COMPUTER)
        with pytest.raises(InvalidStateError):
            game.start_game()

    def test_reset_to_setup_restores_initial_settings(self, scheduler):
        game = Game(scheduler=scheduler)
        game.set_mode(Mode.WILD)
        game.set_player_kind(PlayerId.PLAYER1, PlayerKind.COMPUTER)
        game.reset_to_setup()

        assert game.mode == Mode.STANDARD
        assert not game.player(PlayerId.PLAYER1).is_computer
        assert game.phase == GamePhase.SETUP

    def test_reset_during_setup_stays_in_setup(self, scheduler):
        game = Game(scheduler=scheduler)
        game.reset_game()
        assert game.phase == GamePhase.SETUP


def test_subscribe_and_unsubscribe(game):
    views = []
    unsubscribe = game.subscribe(views.append)
    game.play(0)
    assert views[-1].board[0] == Symbol.X

    unsubscribe()
    game.play(1)
    assert len(views) == 1


def test_clear_error(game):
    with pytest.raises(InvalidMoveError):
        game.play(42)
    game.clear_error()
    assert game.snapshot().error_message is None
