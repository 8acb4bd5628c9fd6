"""
Configuration for the tic-tac-toe engine.
Board geometry, symbols, AI timing and front-end defaults.
"""

import logging


class GameConfig:
    """
    Configuration class for game settings.
    Command-line flags in main.py override the defaults below.
    """

    # ==================== BOARD SETTINGS ====================
    # Tic-tac-toe is a 3x3 grid, stored as a flat list of 9 cells
    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE

    # Cell indices used by the heuristic opponent
    CENTER = 4
    CORNERS = (0, 2, 6, 8)

    # ==================== PLAYER SETTINGS ====================
    # Symbols bound to each player in standard mode
    PLAYER1_SYMBOL = "X"
    PLAYER2_SYMBOL = "O"

    # Symbol the AI plays in standard mode when none is given
    DEFAULT_AI_SYMBOL = "O"

    # ==================== GAME DEFAULTS ====================
    DEFAULT_MODE = "standard"        # "standard" or "wild"
    DEFAULT_PLAYER1_KIND = "human"   # "human" or "computer"
    DEFAULT_PLAYER2_KIND = "computer"
    DEFAULT_ENGINE = "machine"       # "machine" or "store"

    # ==================== AI TIMING ====================
    # Cosmetic "thinking" pause before an automated move (seconds)
    AI_THINK_DELAY_S = 0.5

    # ==================== LOGGING ====================
    LOG_LEVEL = logging.WARNING      # console default; --verbose switches to DEBUG
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
