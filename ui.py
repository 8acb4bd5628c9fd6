"""
Tic-Tac-Toe UI
A graphical interface for the tic-tac-toe engine using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Game setup: mode and who plays each seat
- Symbol selection in wild mode
- Game status and the computer's thinking state
"""

import random
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Optional

from engine import (
    GameError, GameView, Mode, PlayerId, PlayerKind, Scheduler, Symbol,
    create_adapter,
)
from engine.config import GameConfig


class TkScheduler(Scheduler):
    """Runs delayed callbacks on the Tk event loop."""

    def __init__(self, root: tk.Misc):
        self.root = root

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        return self.root.after(int(delay * 1000), callback)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            self.root.after_cancel(handle)


# Colors for each symbol (foreground, background)
SYMBOL_COLORS = {
    Symbol.X: ('#8acaff', '#1e3a5f'),
    Symbol.O: ('#ff8a8a', '#5f1e1e'),
}
EMPTY_BG = '#16213e'
WIN_BG = '#065f46'


class TicTacToeUI:
    """
    Main UI class for the tic-tac-toe game.
    """

    def __init__(
        self,
        engine: str = GameConfig.DEFAULT_ENGINE,
        mode: Mode = Mode.STANDARD,
        player1_kind: PlayerKind = PlayerKind.HUMAN,
        player2_kind: PlayerKind = PlayerKind.COMPUTER,
        rng: Optional[random.Random] = None,
        think_delay: Optional[float] = None
    ):
        """Initialize the UI."""
        self.root = tk.Tk()
        self.adapter = create_adapter(
            engine=engine,
            mode=mode,
            player1_kind=player1_kind,
            player2_kind=player2_kind,
            scheduler=TkScheduler(self.root),
            rng=rng,
            think_delay=think_delay,
        )

        # Create UI
        self._create_ui()

        self.adapter.subscribe(self._render)
        self._render(self.adapter.snapshot())

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root.title("Tic-Tac-Toe")
        self.root.configure(bg='#1a1a2e')
        self.root.minsize(640, 420)

        # Main container
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('TRadiobutton', background='#1a1a2e', foreground='white')
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Error.TLabel', font=('Segoe UI', 10), foreground='#f87171')

        # Left panel - Board
        left_frame = ttk.Frame(main_frame)
        left_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 10))

        ttk.Label(left_frame, text="🎮 Game Board", style='Title.TLabel').pack(pady=(0, 10))

        board_frame = ttk.Frame(left_frame)
        board_frame.pack(pady=10)

        self.board_cells = []
        for index in range(GameConfig.CELL_COUNT):
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=4,
                height=2,
                bg=EMPTY_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=index // GameConfig.BOARD_SIZE, column=index % GameConfig.BOARD_SIZE, padx=2, pady=2)
            self.board_cells.append(cell)

        # Right panel
        right_frame = ttk.Frame(main_frame, width=300)
        right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        right_frame.pack_propagate(False)

        # Setup section
        ttk.Label(right_frame, text="⚙️ Setup", style='Title.TLabel').pack()

        self.mode_var = tk.StringVar()
        mode_frame = ttk.Frame(right_frame)
        mode_frame.pack(pady=5)
        self.setup_widgets = []
        for text, mode in (("Standard", Mode.STANDARD), ("Wild", Mode.WILD)):
            radio = ttk.Radiobutton(
                mode_frame, text=text, value=mode.value, variable=self.mode_var,
                command=self._on_mode_change
            )
            radio.pack(side=tk.LEFT, padx=5)
            self.setup_widgets.append(radio)

        self.kind_vars = {}
        for player_id, text in ((PlayerId.PLAYER1, "Player 1"), (PlayerId.PLAYER2, "Player 2")):
            row = ttk.Frame(right_frame)
            row.pack(pady=2)
            ttk.Label(row, text=f"{text}:").pack(side=tk.LEFT, padx=5)
            var = tk.StringVar()
            self.kind_vars[player_id] = var
            for kind in PlayerKind:
                radio = ttk.Radiobutton(
                    row, text=kind.value.capitalize(), value=kind.value, variable=var,
                    command=lambda p=player_id: self._on_kind_change(p)
                )
                radio.pack(side=tk.LEFT)
                self.setup_widgets.append(radio)

        # Symbol section (wild mode only)
        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(right_frame, text="✏️ Symbol", style='Title.TLabel').pack()

        self.symbol_var = tk.StringVar(value="")
        symbol_frame = ttk.Frame(right_frame)
        symbol_frame.pack(pady=5)
        self.symbol_buttons = []
        for symbol in Symbol:
            radio = ttk.Radiobutton(
                symbol_frame, text=symbol.value, value=symbol.value, variable=self.symbol_var
            )
            radio.pack(side=tk.LEFT, padx=10)
            self.symbol_buttons.append(radio)

        # Game status section
        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(right_frame, text="📊 Game Status", style='Title.TLabel').pack()

        self.status_label = ttk.Label(right_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.error_label = ttk.Label(right_frame, text="", style='Error.TLabel', wraplength=260)
        self.error_label.pack()

        # Control buttons
        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        control_frame = ttk.Frame(right_frame)
        control_frame.pack(pady=5)

        self.start_btn = tk.Button(
            control_frame, text="▶ Start", font=('Segoe UI', 10, 'bold'),
            bg='#10b981', fg='white', width=8, command=self._start_game
        )
        self.start_btn.pack(side=tk.LEFT, padx=3)

        self.reset_btn = tk.Button(
            control_frame, text="🔄 Reset", font=('Segoe UI', 10, 'bold'),
            bg='#6366f1', fg='white', width=8, command=self._reset_game
        )
        self.reset_btn.pack(side=tk.LEFT, padx=3)

        self.setup_btn = tk.Button(
            control_frame, text="⚙ Setup", font=('Segoe UI', 10, 'bold'),
            bg='#2d3748', fg='white', width=8, command=self._reset_to_setup
        )
        self.setup_btn.pack(side=tk.LEFT, padx=3)

        # Quit button
        tk.Button(
            right_frame, text="✕ Quit", font=('Segoe UI', 10),
            bg='#ef4444', fg='white', width=26, command=self._quit
        ).pack(pady=10)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ==================== USER INTENTS ====================

    def _run(self, intent: Callable[[], None]):
        # The engine records the message in the view; nothing else to do here
        try:
            intent()
        except GameError as e:
            print(f"Rejected: {e}")

    def _on_cell_click(self, index: int):
        view = self.adapter.snapshot()
        symbol = None
        if view.mode == Mode.WILD:
            symbol = Symbol(self.symbol_var.get()) if self.symbol_var.get() else None
        self._run(lambda: self.adapter.play(index, symbol))

    def _on_mode_change(self):
        self._run(lambda: self.adapter.set_mode(Mode(self.mode_var.get())))

    def _on_kind_change(self, player_id: PlayerId):
        kind = PlayerKind(self.kind_vars[player_id].get())
        self._run(lambda: self.adapter.set_player_kind(player_id, kind))

    def _start_game(self):
        self._run(self.adapter.start_game)

    def _reset_game(self):
        print("Resetting game...")
        self._run(self.adapter.reset_game)

    def _reset_to_setup(self):
        self._run(self.adapter.reset_to_setup)

    # ==================== RENDERING ====================

    def _render(self, view: GameView):
        """Update every widget from a snapshot."""
        highlight = set(view.winning_line or ())
        for index, cell in enumerate(self.board_cells):
            symbol = view.board[index]
            if symbol is None:
                cell.configure(text="", bg=EMPTY_BG)
            else:
                fg, bg = SYMBOL_COLORS[symbol]
                cell.configure(text=symbol.value, fg=fg, bg=WIN_BG if index in highlight else bg)

            clickable = (
                symbol is None and not view.is_setup and not view.is_over
                and not view.is_ai_turn and not view.current_player.is_computer
            )
            cell.configure(state='normal' if clickable else 'disabled')

        # Setup widgets only make sense before the game starts
        self.mode_var.set(view.mode.value)
        for player in view.players:
            self.kind_vars[player.id].set(player.kind.value)
        setup_state = 'normal' if view.is_setup else 'disabled'
        for widget in self.setup_widgets:
            widget.configure(state=setup_state)
        self.start_btn.configure(state=setup_state)

        symbol_state = 'normal' if view.mode == Mode.WILD and not view.is_setup else 'disabled'
        for widget in self.symbol_buttons:
            widget.configure(state=symbol_state)

        self.status_label.configure(text=view.status_text())
        self.error_label.configure(text=view.error_message or "")

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()


def main():
    """Main entry point."""
    print("\n" + "=" * 60)
    print("   Tic-Tac-Toe UI")
    print("=" * 60 + "\n")

    ui = TicTacToeUI()
    ui.run()


if __name__ == "__main__":
    main()
