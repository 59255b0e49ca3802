"""Gymnasium environments for Complex Tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .complex_tetris_env import ACTIONS, ComplexTetrisEnv

register(
    id="ComplexTetris-v0",
    entry_point="complex_tetris.env.complex_tetris_env:ComplexTetrisEnv",
)

__all__ = ["ACTIONS", "ComplexTetrisEnv"]
