from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

import gymnasium as gym
import numpy as np

import complex_tetris.env  # noqa: F401  (registers ComplexTetris-v0)


logger = logging.getLogger(__name__)


def run_random(steps: int = 500, seed: Optional[int] = None) -> float:
    env = gym.make("ComplexTetris-v0")
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer actions that change the state
        valid = np.flatnonzero(info["action_mask"])
        if valid.size:
            action = int(rng.choice(list(valid)))
        else:
            action = int(env.action_space.sample())
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("Episode %d finished: score=%d lines=%d", episodes, info["score"], info["lines"])
            obs, info = env.reset()
    env.close()
    return total_reward


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
