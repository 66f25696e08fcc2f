"""Gymnasium environments for Retro Tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default falling-block environment (6 discrete actions)
register(
    id="RetroTetris-v0",
    entry_point="retro_tetris.env.tetris_env:TetrisEnv",
)

__all__ = ["RetroTetris-v0"]
