"""
Gymnasium environment wrapper for the Minesweeper engine.

Provides a standard RL interface so automated agents can drive the
engine the same way an interactive driver does.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, GameState
from .cell import CellState
from .engine import Minesweeper
from .render import render_snapshot


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
        Discrete action space of size width * height.
        Action i reveals cell (x, y) = (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
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
            config: Board configuration (default: 16x16 with 40 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.game = Minesweeper(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.seed(int(self.np_random.integers(0, 2**31 - 1)))
        self.game.reset()
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self.action_to_position(int(action))
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.game.board.get_observation()
        terminated = self.game.game_state != GameState.PLAYING

        return observation, reward, terminated, False, self._get_info()

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return action % self.config.width, action // self.config.width

    def position_to_action(self, x: int, y: int) -> int:
        """Convert (x, y) position to flat action index."""
        return y * self.config.width + x

    def _calculate_reward(self, x: int, y: int) -> float:
        """
        Reveal a cell and score the outcome.

        Args:
            x: Column.
            y: Row.

        Returns:
            Reward value.
        """
        if not self.game.reveal(x, y):
            return -0.1

        if self.game.game_state == GameState.WON:
            return 10.0
        if self.game.game_state == GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.game.board
        return {
            "steps": self._steps,
            "revealed": board.count_state(CellState.REVEALED),
            "total_safe": self.config.safe_cells,
            "game_state": self.game.game_state.name,
            "valid_actions": len(board.get_valid_actions()),
            "mines_left": self.game.mines_left,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_snapshot(self.game.snapshot())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            int8 array where 1 = hidden cell that can be revealed.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for x, y in self.game.board.get_valid_actions():
            mask[self.position_to_action(x, y)] = 1
        return mask
