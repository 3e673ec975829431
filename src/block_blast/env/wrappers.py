from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .block_blast_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (slot, row, col) -> Discrete(N).

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: slot, row, col (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        k, rows, cols = map(int, env.action_space.nvec)
        assert rows == cols, "Expected square grid"
        self.k = k
        self.size = rows
        self.n = int(k * self.size * self.size)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        col = idx % self.size
        idx //= self.size
        row = idx % self.size
        slot = idx // self.size
        return int(slot), int(row), int(col)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        mask3d = _compute_action_mask(self.env.unwrapped.session)
        return mask3d.reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """Swaps a flat action that does not fit the board for a random one that does.

    ``info["resampled_from"]`` holds the rejected action, or None when the
    chosen action was played as given. With an empty mask the action passes
    through and the env applies its invalid-action penalty.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        if not isinstance(env.action_space, spaces.Discrete):
            raise TypeError("ResampleInvalidActionWrapper needs a flat Discrete action space")

    def step(self, action):  # type: ignore[override]
        action = int(action)
        rejected = None
        mask = self.get_action_mask()
        if not (0 <= action < mask.shape[0] and mask[action]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                rejected = action
                action = int(self.np_random.choice(valid_idxs))
        obs, reward, terminated, truncated, info = self.env.step(action)
        info["resampled_from"] = rejected
        return obs, reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.session).reshape(-1)
