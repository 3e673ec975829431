from __future__ import annotations

import dataclasses
import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import GameConfig, GameSession, ShapeType


def _compute_action_mask(session: GameSession) -> np.ndarray:
    size = session.grid.size
    k = session.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    if session.game_over:
        return mask
    for slot, piece in enumerate(session.tray):
        if piece.used:
            continue
        for row, col in session.grid.valid_anchors(piece.shape):
            mask[slot, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    """Agent-facing view of a session.

    Action: (tray slot, row, col), placed exactly at that anchor.
    Reward: the engine score delta scaled by ``score_scale`` plus a per-line
    bonus, or ``invalid_action_penalty`` when the action does not fit.
    Time inside the session advances ``seconds_per_step`` per step, which
    drives the minimum-time rule of the level policy.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        board_size: Optional[int] = None,
        render_mode: Optional[str] = None,
        score_scale: float = 0.01,
        line_reward: float = 1.0,
        invalid_action_penalty: float = -0.1,
        terminal_penalty: float = 0.0,
        seconds_per_step: float = 1.0,
    ) -> None:
        super().__init__()
        config = config or GameConfig()
        # Agents act faster than any clear animation.
        config = dataclasses.replace(
            config,
            clear_delay=0.0,
            board_size=board_size if board_size is not None else config.board_size,
        )
        self.config = config
        # Level timers run on steps taken, not wall time, so seeded episodes replay exactly.
        self.seconds_per_step = float(seconds_per_step)
        self._steps = 0
        self.session = GameSession(config, clock=self._step_clock)
        self.render_mode = render_mode

        self.score_scale = float(score_scale)
        self.line_reward = float(line_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = config.board_size
        k = config.pieces_per_set

        # Observation space: grid occupancy (0/1) and tray shape ids (-1 once used)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(ShapeType) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

    def _step_clock(self) -> float:
        return self._steps * self.seconds_per_step

    def _get_obs(self) -> Dict[str, Any]:
        k = self.config.pieces_per_set
        grid = (self.session.grid.cells != 0).astype(np.int8)
        pieces = np.full((k,), -1, dtype=np.int8)
        for i, piece in enumerate(list(self.session.tray)[:k]):
            if not piece.used:
                pieces[i] = int(piece.shape_type)
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": len(self.session.tray.available()),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.session),
            "score": self.session.score,
            "level": self.session.level,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self._steps = 0
        if seed is not None:
            self.session = GameSession(self.config, rng=random.Random(seed), clock=self._step_clock)
        else:
            self.session.reset()
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)

        reward_components: Dict[str, float] = {}
        outcome = None
        pieces = list(self.session.tray)
        if 0 <= slot < len(pieces) and not pieces[slot].used:
            outcome = self.session.place(pieces[slot].id, row, col)

        if outcome is not None:
            reward_components["score"] = self.score_scale * float(outcome.score_delta)
            reward_components["lines"] = self.line_reward * float(outcome.lines_cleared)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.session.game_over)
        self._steps += 1
        truncated = self._steps >= self.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(outcome.score_delta if outcome is not None else 0.0)
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from block_blast.visualization.renderer import PALETTE_RGB

        # One color per palette index; a dark line separates cells.
        lut = np.array([PALETTE_RGB.get(i, (200, 200, 200)) for i in range(256)], dtype=np.uint8)
        cell = 12
        img = lut[self.session.grid.cells.astype(np.uint8)]
        img = np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)
        img[::cell, :, :] = 0
        img[:, ::cell, :] = 0
        return img

    def close(self) -> None:
        pass
