from __future__ import annotations

import random
from typing import Optional

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401  (registers environments)


def run_random(steps: int = 200, env_id: str = "BlockBlast-10x10-v0", seed: Optional[int] = None) -> float:
    rng = random.Random(seed)
    env = gym.make(env_id)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = np.argwhere(info["action_mask"])
        if len(valid):
            action = valid[rng.randrange(len(valid))]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    print(f"Random agent total reward: {run_random():.2f}")
