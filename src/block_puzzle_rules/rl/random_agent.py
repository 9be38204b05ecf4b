from __future__ import annotations

import argparse
import random
from typing import Optional

import gymnasium as gym
import numpy as np

import block_puzzle_rules.env  # noqa: F401


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    """Play uniformly random legal placements and return the total reward."""
    rng = random.Random(seed)
    env = gym.make("BlockPuzzleRules-10x10-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        valid = np.argwhere(info["action_mask"])
        if len(valid):
            action = tuple(int(v) for v in valid[rng.randrange(len(valid))])
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    total_reward = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total_reward:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
