"""
Board module for Minesweeper.

Implements the board engine: mine placement, adjacency counting,
flood-fill reveal, flag toggling, and win/loss detection.
"""
import logging
import random
from collections import deque
from dataclasses import InitVar, dataclass, field, replace
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import MINE, Cell
from .errors import InvalidDimensions, InvalidMineCount, OutOfBounds

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidDimensions("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidMineCount("Number of mines cannot be negative")
        if self.num_mines > self.total_cells:
            raise InvalidMineCount(
                f"Too many mines (max {self.total_cells})"
            )

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


DEFAULT_CONFIG = BoardConfig(10, 10, 10)

Position = Tuple[int, int]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the cell grid for one game session. Cells live in a flat list
    indexed by ``row * cols + col`` and are only reachable through
    bounds-checked accessors. Restarting a game means creating a new
    Board.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: InitVar[Optional[random.Random]] = None
    mine_positions: InitVar[Optional[Iterable[Position]]] = None
    _cells: List[Cell] = field(init=False, default_factory=list, repr=False)
    _game_state: GameState = field(init=False, default=GameState.PLAYING)
    _safe_revealed: int = field(init=False, default=0)

    def __post_init__(
        self,
        rng: Optional[random.Random],
        mine_positions: Optional[Iterable[Position]],
    ) -> None:
        """Build the grid, place mines and compute cell values."""
        self._init_grid()
        if mine_positions is None:
            self._place_random_mines(rng or random.Random())
        else:
            self._place_mines_at(mine_positions)
        self._calculate_values()
        logger.debug(
            "Created %dx%d board with %d mines",
            self.rows, self.cols, self.mine_count,
        )

    # ========================================================================
    # Constructors
    # ========================================================================

    @classmethod
    def create(
        cls,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> "Board":
        """
        Create a board with randomly placed mines.

        Args:
            config: Board configuration (default: 10x10 with 10 mines).
            rng: Random generator used for mine placement.
            seed: Seed for a fresh generator when ``rng`` is not given.

        Returns:
            A new board in the playing state.
        """
        if rng is None:
            rng = random.Random(seed)
        return cls(config or BoardConfig(), rng=rng)

    @classmethod
    def from_mines(
        cls, positions: Iterable[Position], rows: int, cols: int
    ) -> "Board":
        """
        Create a board with mines at the given positions.

        Duplicate positions count once.

        Raises:
            InvalidDimensions: If rows or cols is not positive.
            OutOfBounds: If a position lies outside the board.
        """
        mines = set(positions)
        config = BoardConfig(rows, cols, 0)
        for row, col in mines:
            if not (0 <= row < rows and 0 <= col < cols):
                raise OutOfBounds(row, col, rows, cols)
        return cls(replace(config, num_mines=len(mines)), mine_positions=mines)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create an empty grid of hidden cells."""
        self._cells = [Cell() for _ in range(self.config.total_cells)]

    def _place_random_mines(self, rng: random.Random) -> None:
        """Mark ``num_mines`` distinct cells, chosen uniformly, as mines."""
        chosen = rng.sample(range(self.config.total_cells), self.config.num_mines)
        for index in chosen:
            self._cells[index].value = MINE

    def _place_mines_at(self, positions: Iterable[Position]) -> None:
        placed = 0
        for row, col in positions:
            cell = self._cells[self._index(row, col)]
            if not cell.is_mine:
                cell.value = MINE
                placed += 1
        if placed != self.config.num_mines:
            raise InvalidMineCount(
                f"Expected {self.config.num_mines} mines, got {placed}"
            )

    def _calculate_values(self) -> None:
        """Set every non-mine cell to its adjacent mine count."""
        for row, col in self.iter_positions():
            cell = self._cells[row * self.cols + col]
            if not cell.is_mine:
                cell.value = self.count_adjacent_mines(row, col)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _index(self, row: int, col: int) -> int:
        """Flat index of a position, raising OutOfBounds when invalid."""
        if not self._is_valid_position(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return row * self.cols + col

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _get_block(self, row: int, col: int) -> List[Position]:
        """
        Get the 3x3 block centered on a cell, clipped to the board.

        The center cell is included.
        """
        return [
            (block_row, block_col)
            for block_row in range(max(0, row - 1), min(self.rows, row + 2))
            for block_col in range(max(0, col - 1), min(self.cols, col + 2))
        ]

    def count_adjacent_mines(self, row: int, col: int) -> int:
        """
        Count mines in the 3x3 block around a cell.

        The cell itself is part of the block, so the result only means
        "neighboring mines" for a non-mine cell.

        Raises:
            OutOfBounds: If the position lies outside the board.
        """
        self._index(row, col)
        count = 0
        for block_row, block_col in self._get_block(row, col):
            if self._cells[block_row * self.cols + block_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        A mine ends the game as lost. A cell with no adjacent mines
        reveals its whole connected zero region and the numbered cells
        bordering it. Revealing the last safe cell wins the game.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False if the call was a no-op
            (game over, cell already revealed, or cell flagged).

        Raises:
            OutOfBounds: If the position lies outside the board.
        """
        index = self._index(row, col)
        if not self._can_reveal(index):
            return False

        self._reveal_region(row, col)
        self._check_win_condition()
        return True

    def _can_reveal(self, index: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        return self._cells[index].is_hidden

    def _reveal_region(self, row: int, col: int) -> None:
        """Reveal a cell, flooding outward through zero cells."""
        pending = deque([(row, col)])
        revealed = 0
        while pending:
            current_row, current_col = pending.popleft()
            cell = self._cells[current_row * self.cols + current_col]
            if not cell.reveal():
                continue

            if cell.is_mine:
                self._game_state = GameState.LOST
                logger.info("Mine hit at (%d, %d); game lost", row, col)
                return

            revealed += 1
            self._safe_revealed += 1
            if cell.value == 0:
                pending.extend(self._get_block(current_row, current_col))

        if revealed > 1:
            logger.debug(
                "Cascade from (%d, %d) revealed %d cells", row, col, revealed
            )

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._game_state != GameState.PLAYING:
            return
        safe_cells = self.config.total_cells - self.mine_count
        if self._safe_revealed >= safe_cells:
            self._game_state = GameState.WON
            logger.info("All %d safe cells revealed; game won", safe_cells)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle the flag on a cell.

        Returns:
            True if the flag was toggled, False if the game is over or
            the cell is revealed.

        Raises:
            OutOfBounds: If the position lies outside the board.
        """
        index = self._index(row, col)
        if self._game_state != GameState.PLAYING:
            return False
        return self._cells[index].toggle_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Board size as (rows, cols)."""
        return self.config.rows, self.config.cols

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def game_over(self) -> bool:
        """Check if the game has ended, won or lost."""
        return self._game_state != GameState.PLAYING

    @property
    def won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, including a revealed mine."""
        return sum(1 for cell in self._cells if cell.is_revealed)

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self._cells if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags; negative when over-flagged."""
        return self.mine_count - self.flag_count

    def cell_value(self, row: int, col: int) -> int:
        """Value of a cell: MINE (-1) or its adjacent mine count."""
        return self._cells[self._index(row, col)].value

    def is_revealed(self, row: int, col: int) -> bool:
        return self._cells[self._index(row, col)].is_revealed

    def is_flagged(self, row: int, col: int) -> bool:
        return self._cells[self._index(row, col)].is_flagged

    def get_cell(self, row: int, col: int) -> Cell:
        """Get a detached copy of the cell at a position."""
        return replace(self._cells[self._index(row, col)])

    def iter_positions(self) -> Iterator[Position]:
        """Yield every (row, col) position in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.fromiter(
            (cell.to_observation() for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        )
        return obs.reshape(self.dimensions)

    def values(self) -> np.ndarray:
        """Get every cell value (mines as -1) as a new int8 array."""
        values = np.fromiter(
            (cell.value for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        )
        return values.reshape(self.dimensions)

    def revealed_mask(self) -> np.ndarray:
        """Get a new bool array, True where a cell is revealed."""
        mask = np.fromiter(
            (cell.is_revealed for cell in self._cells),
            dtype=bool,
            count=len(self._cells),
        )
        return mask.reshape(self.dimensions)

    def flagged_mask(self) -> np.ndarray:
        """Get a new bool array, True where a cell is flagged."""
        mask = np.fromiter(
            (cell.is_flagged for cell in self._cells),
            dtype=bool,
            count=len(self._cells),
        )
        return mask.reshape(self.dimensions)

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        if self.game_over:
            return []
        return [
            (row, col)
            for row, col in self.iter_positions()
            if self._cells[row * self.cols + col].is_hidden
        ]


# ============================================================================
# Module-level Factory
# ============================================================================

def create(
    rows: int = DEFAULT_CONFIG.rows,
    cols: int = DEFAULT_CONFIG.cols,
    mines: int = DEFAULT_CONFIG.num_mines,
    seed: Optional[int] = None,
) -> Board:
    """
    Create a board of the given size with randomly placed mines.

    Raises:
        InvalidDimensions: If rows or cols is not positive.
        InvalidMineCount: If mines is negative or exceeds rows * cols.
    """
    return Board.create(BoardConfig(rows, cols, mines), seed=seed)
