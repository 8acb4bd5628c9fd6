"""
Main entry point for the tic-tac-toe engine.

Opens the Tkinter window by default; with --no-ui the game is played in the
console instead. Either front end runs on top of the state-machine engine or
the reducer store (--engine).

Run this script to play tic-tac-toe against a friend or the computer!
"""

import argparse
import logging
import random
import sys
from typing import Optional, Tuple

from engine import (
    Board, GameAdapter, GameError, GameView, Mode, PlayerId, PlayerKind,
    Symbol, SynchronousScheduler, create_adapter,
)
from engine.config import GameConfig
from engine.factory import ENGINES


class ConsoleGame:
    """
    Plays a game through stdin/stdout.

    Game flow:
    1. Settings come from the command line (or the setup prompts after 's')
    2. Humans type a cell number, plus a symbol in wild mode ("4 X")
    3. Computer moves are applied after the thinking pause
    4. 'r' restarts, 's' goes back to setup, 'q' quits
    """

    def __init__(self, adapter: GameAdapter):
        self.adapter = adapter
        self.is_running = False
        self._last_board: Optional[Tuple] = None
        self.adapter.subscribe(self._on_change)

    def start(self):
        """Start the game."""
        print("\n" + "=" * 60)
        print("   Tic-Tac-Toe")
        print("=" * 60)
        print("Type a cell number (0-8), 'r' to restart, 's' for setup, 'q' to quit\n")

        self.is_running = True
        self._start_round()
        self._game_loop()

    def _start_round(self):
        view = self.adapter.snapshot()
        print(f"   Mode: {view.mode.value}")
        for player in view.players:
            print(f"   {player.label}: {player.kind.value}")
        self._last_board = None
        self.adapter.start_game()

    def _game_loop(self):
        """Main game loop."""
        while self.is_running:
            view = self.adapter.snapshot()

            if view.is_over:
                self._show_game_result(view)
                command = self._read("Play again? [r]estart / [s]etup / [q]uit: ")
            else:
                print(f"\n{view.status_text()}")
                command = self._read(self._prompt(view))

            if command is None or command == "q":
                print("\nGame quit by user.")
                self.is_running = False
            elif command == "r":
                print("\nResetting game...")
                self._last_board = None
                self.adapter.reset_game()
            elif command == "s":
                self.adapter.reset_to_setup()
                self._setup()
                self._start_round()
            elif not view.is_over:
                self._handle_move(command)

    def _prompt(self, view: GameView) -> str:
        if view.mode == Mode.WILD:
            return f"{view.current_player.label}, cell and symbol (e.g. 4 X): "
        return f"{view.current_player.label}, cell: "

    def _handle_move(self, command: str):
        try:
            index, symbol = parse_move(command)
        except ValueError as e:
            print(f"✗ {e}")
            return

        try:
            self.adapter.play(index, symbol)
        except GameError as e:
            print(f"✗ {e}")

    def _setup(self):
        """Ask for the mode and who plays each seat."""
        print("\n--- Setup ---")
        answer = self._read("Mode [standard/wild] (standard): ") or "standard"
        try:
            self.adapter.set_mode(Mode(answer))
        except ValueError:
            print(f"Unknown mode {answer!r}, keeping the current one")

        for player_id in PlayerId:
            label = "Player 1" if player_id == PlayerId.PLAYER1 else "Player 2"
            answer = self._read(f"{label} [human/computer] (human): ") or "human"
            try:
                self.adapter.set_player_kind(player_id, PlayerKind(answer))
            except ValueError:
                print(f"Unknown player type {answer!r}, keeping the current one")

    def _on_change(self, view: GameView):
        # Print every board change, so computer moves show up too
        if view.board != self._last_board and not view.is_setup:
            self._print_board(view)

    def _print_board(self, view: GameView):
        self._last_board = view.board
        print()
        print(Board(view.board).render())

    def _show_game_result(self, view: GameView):
        """Show the final game result."""
        print("\n" + "=" * 60)
        print("   GAME OVER!")
        print("=" * 60)
        if view.winner is not None:
            print(f"\n🏆 {view.winner.value} WINS! (line {view.winning_line})")
        else:
            print("\n🤝 It's a draw! Good game!")
        print()

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt).strip().lower()
        except EOFError:
            return None


def parse_move(text: str) -> Tuple[int, Optional[Symbol]]:
    """
    Parse console input such as "4", "4 x" or "4x".

    Returns:
        (cell index, symbol or None)

    Raises:
        ValueError: If the text is not a move.
    """
    text = text.replace(" ", "").upper()
    if not text:
        raise ValueError("Type a cell number")

    symbol = None
    if text[-1] in ("X", "O"):
        symbol = Symbol(text[-1])
        text = text[:-1]

    if not text.isdigit():
        raise ValueError(f"Not a cell number: {text!r}")
    return int(text), symbol


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Tic-Tac-Toe")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=GameConfig.DEFAULT_MODE,
        help="standard (X vs O) or wild (choose X or O each turn)"
    )
    parser.add_argument(
        "--player1",
        choices=[k.value for k in PlayerKind],
        default=GameConfig.DEFAULT_PLAYER1_KIND,
        help="Who plays player 1"
    )
    parser.add_argument(
        "--player2",
        choices=[k.value for k in PlayerKind],
        default=GameConfig.DEFAULT_PLAYER2_KIND,
        help="Who plays player 2"
    )
    parser.add_argument(
        "--engine",
        choices=ENGINES,
        default=GameConfig.DEFAULT_ENGINE,
        help="State-machine engine or reducer store"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=GameConfig.AI_THINK_DELAY_S,
        help="Seconds the computer 'thinks' before moving"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the computer's random choices"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Play in the console instead of opening a window"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else GameConfig.LOG_LEVEL,
        format=GameConfig.LOG_FORMAT
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    settings = dict(
        engine=args.engine,
        mode=Mode(args.mode),
        player1_kind=PlayerKind(args.player1),
        player2_kind=PlayerKind(args.player2),
        rng=rng,
        think_delay=args.delay,
    )

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        ui = TicTacToeUI(**settings)
        ui.run()
        return 0

    # Console mode (--no-ui)
    adapter = create_adapter(scheduler=SynchronousScheduler(), **settings)
    game = ConsoleGame(adapter)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
