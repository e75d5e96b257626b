"""
Terminal front end for Minesweeper.

Renders a board as text and runs an interactive play loop that forwards
reveal, flag and restart commands to the engine.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from .board import Board, BoardConfig, GameState
from .cell import MINE
from .errors import CommandError, OutOfBounds

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

HIDDEN_SYMBOL = "."
FLAG_SYMBOL = "F"
MINE_SYMBOL = "*"
EMPTY_SYMBOL = " "

WIN_MESSAGE = "Congratulations, you won!"
LOSS_MESSAGE = "Game over, you hit a mine!"

HELP_TEXT = (
    "Commands: r ROW COL (reveal), f ROW COL (flag), "
    "n (new game), q (quit)"
)

REVEAL = "reveal"
FLAG = "flag"
RESTART = "restart"
QUIT = "quit"

_ACTIONS = {
    "r": REVEAL,
    "reveal": REVEAL,
    "f": FLAG,
    "flag": FLAG,
    "n": RESTART,
    "new": RESTART,
    "q": QUIT,
    "quit": QUIT,
}


# ============================================================================
# Rendering
# ============================================================================

def _cell_symbol(board: Board, row: int, col: int, reveal_mines: bool) -> str:
    value = board.cell_value(row, col)
    if board.is_revealed(row, col):
        if value == MINE:
            return MINE_SYMBOL
        return str(value) if value > 0 else EMPTY_SYMBOL
    if board.is_flagged(row, col):
        return FLAG_SYMBOL
    if reveal_mines and value == MINE:
        return MINE_SYMBOL
    return HIDDEN_SYMBOL


def render_board(board: Board, reveal_mines: bool = False) -> str:
    """
    Render a board as text with row and column headers.

    Args:
        board: Board to draw.
        reveal_mines: Also show mines that are still hidden.

    Returns:
        Multi-line string, one line per row plus a header line.
    """
    width = len(str(max(board.rows, board.cols) - 1))
    header = " " * (width + 1) + " ".join(
        str(col).rjust(width) for col in range(board.cols)
    )
    lines = [header]
    for row in range(board.rows):
        symbols = (
            _cell_symbol(board, row, col, reveal_mines).rjust(width)
            for col in range(board.cols)
        )
        lines.append(str(row).rjust(width) + " " + " ".join(symbols))
    return "\n".join(lines)


def status_line(board: Board) -> str:
    """Mines remaining while playing, otherwise the end-of-game message."""
    if board.won:
        return WIN_MESSAGE
    if board.lost:
        return LOSS_MESSAGE
    return f"Mines: {board.mines_remaining}"


# ============================================================================
# Command Parsing
# ============================================================================

@dataclass(frozen=True)
class Command:
    """A parsed player command."""

    action: str
    row: Optional[int] = None
    col: Optional[int] = None


def parse_command(text: str) -> Command:
    """
    Parse one line of player input.

    Raises:
        CommandError: If the line is not a known command.
    """
    parts = text.split()
    if not parts:
        raise CommandError("Empty command")

    action = _ACTIONS.get(parts[0].lower())
    if action is None:
        raise CommandError(f"Unknown command: {parts[0]!r}")

    if action in (RESTART, QUIT):
        if len(parts) != 1:
            raise CommandError(f"{parts[0]!r} takes no arguments")
        return Command(action)

    if len(parts) != 3:
        raise CommandError(f"{parts[0]!r} needs ROW and COL")
    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        raise CommandError("ROW and COL must be integers") from None
    return Command(action, row, col)


# ============================================================================
# Play Loop
# ============================================================================

class TerminalGame:
    """
    Interactive text game.

    Holds exactly one board at a time; a restart replaces it with a
    freshly created board.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or BoardConfig()
        self._input = input_fn
        self._output = output_fn
        self._rng = random.Random(seed)
        self.board = self._new_board()

    def _new_board(self) -> Board:
        return Board.create(self.config, rng=self._rng)

    def restart(self) -> None:
        """Discard the current board and start a new game."""
        self.board = self._new_board()
        logger.debug("Game restarted")

    def draw(self) -> None:
        self._output(render_board(self.board, reveal_mines=self.board.game_over))
        self._output(status_line(self.board))

    def handle(self, command: Command) -> bool:
        """
        Apply a command to the current game.

        Returns:
            False when the player asked to quit, True otherwise.

        Raises:
            OutOfBounds: If the command targets a cell off the board.
        """
        if command.action == QUIT:
            return False
        if command.action == RESTART:
            self.restart()
        elif command.action == REVEAL:
            self.board.reveal(command.row, command.col)
        elif command.action == FLAG:
            self.board.toggle_flag(command.row, command.col)
        return True

    def run(self) -> GameState:
        """
        Play until the player quits or input runs out.

        Returns:
            State of the board in play when the loop ended.
        """
        self._output(HELP_TEXT)
        self.draw()
        while True:
            try:
                line = self._input("> ")
            except EOFError:
                break

            try:
                command = parse_command(line)
                if not self.handle(command):
                    break
            except (CommandError, OutOfBounds) as exc:
                self._output(f"Error: {exc}")
                continue

            self.draw()
            if self.board.game_over:
                self._output("Type n for a new game or q to quit.")
        return self.board.game_state
