from __future__ import annotations

import argparse
import logging

import gymnasium as gym
import numpy as np

import tetris_rl.env  # noqa: F401


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("Tetris-10x25-v0")
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer allowed actions (HOLD is masked until the next lock)
        valid = np.flatnonzero(info.get("action_mask", np.ones(env.action_space.n, dtype=bool)))
        if valid.size:
            action = int(rng.choice(valid))
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished: score=%d lines=%d", episodes, info["score"], info["lines"])
            obs, info = env.reset()
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args()
    total_reward = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total_reward:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
