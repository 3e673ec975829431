import time

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401
from block_blast.env.block_blast_env import BlockBlastEnv
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from block_blast.game import Piece, ShapeType, Tray
from block_blast.rl.random_agent import run_random
from block_blast.visualization.renderer import PALETTE_RGB
from helpers import FakeClock, fill_row_except


def _mono_tray(env):
    env.session.tray = Tray([Piece(100 + i, ShapeType.MONO, 2) for i in range(3)])


def _board_wipe_episode(env):
    env.reset(seed=11)
    _mono_tray(env)
    fill_row_except(env.session.grid.cells, 0, 9)
    _, reward, _, _, info = env.step((0, 0, 9))
    return reward, info


def test_reset_observation_shapes():
    env = BlockBlastEnv()
    obs, info = env.reset(seed=3)
    assert obs["grid"].shape == (10, 10)
    assert not obs["grid"].any()
    assert obs["pieces"].shape == (3,)
    assert (obs["pieces"] >= 0).all()
    assert obs["pieces_remaining"] == 3
    assert info["action_mask"].shape == (3, 10, 10)
    assert info["action_mask"].any()
    assert env.observation_space.contains(obs)


def test_env_disables_clear_delay():
    env = BlockBlastEnv()
    assert env.config.clear_delay == 0.0


def test_valid_step_rewards_engine_score():
    env = BlockBlastEnv()
    _, info = env.reset(seed=1)
    slot, row, col = np.argwhere(info["action_mask"])[0]
    obs, reward, terminated, truncated, info = env.step((slot, row, col))
    assert info["engine_score_delta"] > 0
    assert reward > 0
    assert obs["pieces"][slot] == -1
    assert obs["pieces_remaining"] == 2
    assert obs["grid"].sum() > 0
    assert not info["action_mask"][slot].any()


def test_invalid_step_is_penalised():
    env = BlockBlastEnv(invalid_action_penalty=-0.5)
    env.reset(seed=2)
    env.session.grid.cells[:] = 1
    _, reward, _, _, info = env.step((0, 0, 0))
    assert reward == -0.5
    assert info["engine_score_delta"] == 0.0
    assert "invalid" in info["reward_components"]


def test_registered_variants():
    env = gym.make("BlockBlast-8x8-v0")
    obs, _ = env.reset(seed=0)
    assert obs["grid"].shape == (8, 8)
    env.close()


def test_flatten_wrapper_round_trip():
    env = FlattenDiscreteActionWrapper(BlockBlastEnv())
    env.reset(seed=0)
    assert env.action_space.n == 300
    assert env._unflatten(123) == (1, 2, 3)
    assert env.get_action_mask().shape == (300,)


def test_resample_wrapper_replaces_invalid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockBlastEnv()))
    env.reset(seed=0)
    env.unwrapped.session.grid.cells[9, 9] = 1
    invalid = 99  # slot 0 anchored on the filled corner
    assert not env.get_action_mask()[invalid]
    _, _, _, _, info = env.step(invalid)
    assert "invalid" not in info["reward_components"]
    assert info["resampled_from"] == invalid


def test_resample_wrapper_keeps_valid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(BlockBlastEnv()))
    env.reset(seed=0)
    _, _, _, _, info = env.step(0)
    assert info["resampled_from"] is None
    assert env.unwrapped.session.grid.cells.any()


def test_rgb_render():
    env = BlockBlastEnv(render_mode="rgb_array")
    env.reset(seed=0)
    _mono_tray(env)
    env.step((0, 4, 7))
    frame = env.render()
    assert frame.shape == (120, 120, 3)
    assert tuple(frame[4 * 12 + 6, 7 * 12 + 6]) == PALETTE_RGB[2]
    assert tuple(frame[6, 6]) == PALETTE_RGB[0]


def test_random_agent_runs():
    assert isinstance(run_random(steps=30, seed=0), float)


def test_seeded_episode_ignores_wall_clock(monkeypatch):
    expected_reward, expected_info = _board_wipe_episode(BlockBlastEnv())

    wall = FakeClock(0.0)
    monkeypatch.setattr(time, "monotonic", wall)
    env = BlockBlastEnv()
    env.reset(seed=11)
    _mono_tray(env)
    fill_row_except(env.session.grid.cells, 0, 9)
    wall.advance(1000)
    _, reward, _, _, info = env.step((0, 0, 9))

    assert reward == expected_reward
    assert info["engine_score_delta"] == expected_info["engine_score_delta"]
    assert info["level"] == expected_info["level"] == 1


def test_level_timer_counts_steps():
    env = BlockBlastEnv(seconds_per_step=50)
    env.reset(seed=0)
    _mono_tray(env)
    env.step((0, 0, 0))
    fill_row_except(env.session.grid.cells, 0, 9)
    _, _, _, _, info = env.step((1, 0, 9))
    assert env.session.grid.is_clear()
    assert info["level"] == 2
