"""
Minesweeper game package.

Provides the board engine and its terminal and gymnasium front ends.
"""
from .cell import MINE, Cell, CellState
from .board import Board, BoardConfig, GameState, DEFAULT_CONFIG, create
from .errors import (
    MinesweeperError,
    InvalidDimensions,
    InvalidMineCount,
    OutOfBounds,
    CommandError,
)
from .terminal import TerminalGame, render_board, status_line, parse_command
from .environment import MinesweeperEnv

__all__ = [
    "MINE",
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameState",
    "DEFAULT_CONFIG",
    "create",
    "MinesweeperError",
    "InvalidDimensions",
    "InvalidMineCount",
    "OutOfBounds",
    "CommandError",
    "TerminalGame",
    "render_board",
    "status_line",
    "parse_command",
    "MinesweeperEnv",
]
