"""Gymnasium environments for Tetris RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 10x25 (2 hidden rows) Tetris environment
register(
    id="Tetris-10x25-v0",
    entry_point="tetris_rl.env.tetris_env:TetrisEnv",
)

__all__ = ["Tetris-10x25-v0"]
