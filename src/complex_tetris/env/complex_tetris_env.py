from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from complex_tetris.complexlib import ComplexFunction
from complex_tetris.game import Action, GameConfig, GameState, ShapeType, TetrisMachine, random_shape_picker


# Discrete action index -> (engine action, transform function)
ACTIONS: List[Tuple[Action, ComplexFunction]] = [
    (Action.LEFT, ComplexFunction.ROTATION),
    (Action.RIGHT, ComplexFunction.ROTATION),
    (Action.SOFT_DROP, ComplexFunction.ROTATION),
    (Action.HARD_DROP, ComplexFunction.ROTATION),
    (Action.ROTATE, ComplexFunction.ROTATION),
    (Action.TRANSFORM, ComplexFunction.SQUARE),
    (Action.TRANSFORM, ComplexFunction.EXP),
    (Action.TRANSFORM, ComplexFunction.RECIPROCAL),
]

_CELL_COLORS = {
    0: (30, 30, 36),
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 240, 0),    # S
    5: (240, 0, 0),    # Z
    6: (0, 0, 240),    # J
    7: (240, 160, 0),  # L
}


def _compute_action_mask(machine: TetrisMachine, state: GameState) -> np.ndarray:
    mask = np.zeros((len(ACTIONS),), dtype=np.bool_)
    if not state.is_running:
        return mask
    for idx, (action, kind) in enumerate(ACTIONS):
        if action in (Action.SOFT_DROP, Action.HARD_DROP):
            # Always has an effect, and probing it would draw from the piece picker
            mask[idx] = True
        else:
            mask[idx] = machine.step(state, action, kind) is not state
    return mask


class ComplexTetrisEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self._rng = random.Random(self.config.random_seed)
        self.machine = TetrisMachine(self.config, picker=random_shape_picker(self._rng))
        self.state: GameState = self.machine.initial_state()
        self._steps = 0

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-len(ShapeType), high=len(ShapeType), shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(len(ShapeType) + 1),
                "level": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.machine.overlay(self.state).astype(np.int8),
            "next": int(self.state.next_type),
            "level": np.array(self.state.level, dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "score": self.state.score,
            "lines": self.state.lines,
            "level": self.state.level,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.machine, self.state)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.state = self.machine.restart(self.state)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        engine_action, kind = ACTIONS[int(action)]
        before = self.state
        self.state = self.machine.step(before, engine_action, kind)
        self._steps += 1

        reward = float(self.state.score - before.score)
        terminated = bool(self.state.game_over)
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["accepted"] = self.state is not before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering lives in complex_tetris.visualization
            return None
        grid = self.machine.overlay(self.state)
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = _CELL_COLORS.get(abs(int(grid[y, x])), (200, 200, 200))
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
