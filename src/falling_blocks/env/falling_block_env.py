from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlockGame, GameConfig, TetrominoType
from falling_blocks.visualization.palette import color_for_value


class FallingBlockEnv(gym.Env):
    """
    Single-agent environment around :class:`FallingBlockGame`.

    Each step applies one :class:`Action` and then advances the engine clock by
    ``frame_ms`` milliseconds. With the default ``frame_ms`` equal to the drop
    interval, gravity pulls the piece down one row on every step.

    Observation:
      board:      (height, width) int8, locked ids 1..7, falling piece as -1..-7
      next_piece: queued piece type id (1..7)
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_ms: Optional[float] = None,
        max_episode_steps: int = 5000,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms) if frame_ms is not None else float(self.game.config.drop_interval_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        width = self.game.board.width
        height = self.game.board.height
        n_types = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_types, high=n_types, shape=(height, width), dtype=np.int8),
                "next_piece": spaces.Discrete(n_types + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_type = self.game.next_piece()
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": int(next_type) if next_type is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score(),
            "lines_cleared": self.game.lines_cleared(),
            "steps": self._steps,
            "state": self.game.game_state().name,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start_game(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        score_before = self.game.score()

        moved = self.game.step(action)
        if not self.game.game_over:
            self.game.tick(self.frame_ms)
        self._steps += 1

        gained = self.game.score() - score_before
        reward_components: Dict[str, float] = {
            "lines": gained / float(self.game.rules.points_per_line),
            "step": self.step_penalty,
        }
        terminated = self.game.game_over
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["action_applied"] = moved
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(board[y, x])
            return img
        return None

    def close(self) -> None:
        pass
