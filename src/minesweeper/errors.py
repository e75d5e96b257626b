"""
Exceptions raised by the Minesweeper engine.

Game-logic misuse (revealing a revealed or flagged cell, acting after the
game has ended) is not an error; those calls are no-ops.
"""


class MinesweeperError(Exception):
    """Base class for engine errors."""


class InvalidDimensions(MinesweeperError, ValueError):
    """Board rows or columns are not positive."""


class InvalidMineCount(MinesweeperError, ValueError):
    """Mine count is negative or exceeds the number of cells."""


class OutOfBounds(MinesweeperError, IndexError):
    """Coordinates fall outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col


class CommandError(MinesweeperError, ValueError):
    """Player input could not be parsed into a command."""
