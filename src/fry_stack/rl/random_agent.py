from __future__ import annotations

import argparse
import random

import gymnasium as gym
import numpy as np

import fry_stack.env  # noqa: F401  (registers FryStack-v0)


def run_random(steps: int = 2000, seed: int = 0) -> float:
    rng = random.Random(seed)
    env = gym.make("FryStack-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer actions that actually move the piece
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(valid.tolist())) if valid.size else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
