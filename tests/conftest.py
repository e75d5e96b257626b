"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 10 mines."""
    return Board.create(seed=1234)


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with its only mine in the center."""
    return Board.from_mines([(1, 1)], 3, 3)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.from_mines([], 5, 5)


@pytest.fixture
def wall_board() -> Board:
    """
    5x5 board with a wall of mines down column 3.

    Layout (M = mine):
        0 0 2 M 2
        0 0 3 M 3
        0 0 3 M 3
        0 0 3 M 3
        0 0 2 M 2
    """
    return Board.from_mines([(row, 3) for row in range(5)], 5, 5)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(value=-1)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(10, 10, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """3x3 configuration with a single mine."""
    return BoardConfig(3, 3, 1)
