from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from retro_tetris.game import Action, GameConfig, GravityRules, TetrisGame
from retro_tetris.visualization.renderer import color_for_value


class TetrisEnv(gym.Env):
    """Falling-block game driven one action per frame.

    Each step applies one engine command and then advances a virtual clock by
    ``frame_time`` seconds before calling ``update``, so gravity acts on the
    agent exactly as it does on a human at that frame rate.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 gravity: Optional[GravityRules] = None,
                 frame_time: float = 0.1,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode
        self.frame_time = float(frame_time)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        self._time = 0.0
        self.game = TetrisGame(config, gravity=gravity, clock=self._virtual_clock)

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Dict(
            {
                # Locked cells are positive kinds, the falling piece negative
                "board": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(8),
                "fall_interval": spaces.Box(low=0.0, high=self.game.gravity.base_interval,
                                            shape=(1,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._last_obs: Optional[Dict[str, Any]] = None

    def _virtual_clock(self) -> float:
        return self._time

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_piece": int(self.game.next_piece.kind),
            "fall_interval": np.array([self.game.fall_interval], dtype=np.float32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.get_score(),
            "lines": self.game.get_lines(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self._time = 0.0
        self._steps = 0
        # Unseeded resets keep drawing from the current piece stream
        if seed is None:
            self.game.restart()
        else:
            self.game.reset(seed)
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        score_before = self.game.get_score()

        self.game.step(Action(int(action)))
        self._time += self.frame_time
        self.game.update(self._time)
        self._steps += 1

        reward = float(self.game.get_score() - score_before)
        terminated = self.game.is_game_over()
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward += self.terminal_penalty

        obs = self._get_obs()
        self._last_obs = obs
        return obs, reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
