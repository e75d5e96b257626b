"""
Unit tests for the gymnasium environment.
"""
import numpy as np
import pytest
from minesweeper import Board, BoardConfig, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """3x3 environment with one mine."""
    return MinesweeperEnv(config=BoardConfig(3, 3, 1), render_mode="ansi")


def use_board(env: MinesweeperEnv, board: Board) -> None:
    """Swap in a hand-placed board."""
    env.board = board


class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_has_reveal_and_flag_per_cell(
        self, env: MinesweeperEnv
    ) -> None:
        assert env.action_space.n == 18

    def test_reset_observation_is_hidden(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=3)
        assert obs.shape == (3, 3)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "PLAYING"
        assert info["total_safe"] == 8

    def test_reset_creates_new_board(self, env: MinesweeperEnv) -> None:
        first_board = env.board
        env.reset(seed=0)
        assert env.board is not first_board

    def test_reset_with_seed_is_reproducible(self, env: MinesweeperEnv) -> None:
        env.reset(seed=11)
        first = env.board.values()
        env.reset(seed=11)
        assert np.array_equal(first, env.board.values())


class TestStep:
    """Test reveal and flag actions."""

    def test_safe_reveal_reward(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        obs, reward, terminated, truncated, info = env.step(0)
        assert reward == 1.0
        assert obs[0, 0] == 1
        assert terminated is False
        assert truncated is False
        assert info["revealed"] == 1

    def test_mine_reveal_terminates(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        _, reward, terminated, _, info = env.step(4)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_last_safe_reveal_wins(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        for action in (0, 1, 2, 3, 5, 6, 7):
            env.step(action)
        _, reward, terminated, _, info = env.step(8)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_repeat_reveal_is_penalized(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        env.step(0)
        _, reward, _, _, _ = env.step(0)
        assert reward == pytest.approx(-0.1)

    def test_flag_action_toggles_flag(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        obs, reward, _, _, info = env.step(9 + 4)
        assert reward == 0.0
        assert obs[1, 1] == -2
        assert info["mines_remaining"] == 0

        _, reward, _, _, _ = env.step(4)
        assert reward == pytest.approx(-0.1)
        assert env.board.game_over is False

    def test_invalid_action_raises(self, env: MinesweeperEnv) -> None:
        with pytest.raises(ValueError):
            env.step(18)


class TestActionMaskAndRender:
    """Test action masks and rendering."""

    def test_mask_tracks_board_state(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        env.step(0)
        env.step(9 + 8)
        mask = env.get_action_mask()
        assert mask.shape == (18,)
        assert not mask[0]
        assert not mask[8]
        assert mask[9 + 8]
        assert not mask[9 + 0]
        assert mask[4]

    def test_mask_empty_after_game_over(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        env.step(4)
        assert not env.get_action_mask().any()

    def test_ansi_render(
        self, env: MinesweeperEnv, center_mine_board: Board
    ) -> None:
        use_board(env, center_mine_board)
        env.step(0)
        assert env.render().splitlines()[1] == "0 1 . ."
