"""
Gymnasium environment wrapper for Minesweeper.

Exposes the board engine through the standard step/reset interface for
scripted play and agents.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .terminal import render_board


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        action i >= rows * cols toggles the flag on cell i - rows * cols.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
        - 0 for toggling a flag
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board.create(self.config)
        self.render_mode = render_mode
        self._num_cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One reveal and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0
        self._total_safe_cells = self._num_cells - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly created board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(2**31))
        self.board = Board.create(self.config, rng=random.Random(board_seed))
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}")

        self._steps += 1
        if action < self._num_cells:
            reward = self._reveal(*self._action_to_position(action))
        else:
            reward = self._flag(*self._action_to_position(action))

        observation = self.board.get_observation()
        terminated = self.board.game_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert action index to (row, col) position."""
        return divmod(int(action) % self._num_cells, self.config.cols)

    def _reveal(self, row: int, col: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.board.reveal(row, col):
            return -0.1
        if self.board.won:
            return 10.0
        if self.board.lost:
            return -10.0
        return 1.0

    def _flag(self, row: int, col: int) -> float:
        """Toggle a flag; penalize toggles the board rejects."""
        if not self.board.toggle_flag(row, col):
            return -0.1
        return 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "total_safe": self._total_safe_cells,
            "mines_remaining": self.board.mines_remaining,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.board)
        if self.render_mode == "human":
            print(render_board(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action. Reveal actions are
            valid for hidden unflagged cells, flag actions for any
            unrevealed cell while the game is in progress.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.game_over:
            return mask
        mask[: self._num_cells] = self.board.get_observation().ravel() == -1
        mask[self._num_cells:] = ~self.board.revealed_mask().ravel()
        return mask
