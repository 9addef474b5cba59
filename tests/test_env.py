import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FLAT_ACTIONS, FallingBlocksEnv
from falling_blocks.game import Action, GameConfig


def test_flat_env_spaces_and_reset():
    env = FallingBlocksEnv(render_mode="rgb_array")
    obs, info = env.reset(seed=3)
    assert env.action_space.n == len(FLAT_ACTIONS)
    assert obs["board"].shape == (20, 10)
    assert obs["board"].dtype == np.int8
    assert env.observation_space.contains(obs)
    assert 1 <= obs["next"] <= 7
    assert obs["stored"] == 0
    assert info["score"] == 0


def test_hard_drop_rewards_score_delta():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(FLAT_ACTIONS.index(Action.HARD_DROP))
    assert reward >= 10
    assert reward == info["engine_score_delta"]
    assert not terminated and not truncated
    assert np.count_nonzero(obs["board"] > 0) == 4


def test_store_action_fills_hold_slot():
    env = FallingBlocksEnv()
    env.reset(seed=1)
    obs, *_ = env.step(FLAT_ACTIONS.index(Action.STORE))
    assert obs["stored"] != 0


def test_invalid_action_penalty():
    env = FallingBlocksEnv(invalid_action_penalty=-1.0)
    env.reset(seed=2)
    left = FLAT_ACTIONS.index(Action.LEFT)
    rewards = [env.step(left)[1] for _ in range(8)]
    assert rewards[0] == 0.0
    assert rewards[-1] == -1.0


def test_truncation():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=0)
    none = FLAT_ACTIONS.index(Action.NONE)
    results = [env.step(none) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_random_play_reaches_game_over():
    env = FallingBlocksEnv()
    env.reset(seed=5)
    hard_drop = FLAT_ACTIONS.index(Action.HARD_DROP)
    terminated = False
    for _ in range(200):
        _, _, terminated, _, _ = env.step(hard_drop)
        if terminated:
            break
    assert terminated


def test_render_rgb_array():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8


def test_volumetric_env():
    env = FallingBlocksEnv(GameConfig.volumetric(), render_mode="rgb_array")
    obs, _ = env.reset(seed=4)
    assert env.action_space.n == len(Action)
    assert obs["board"].shape == (10, 20, 10)
    obs, *_ = env.step(int(Action.FORWARD))
    assert env.render().shape == (240, 120, 3)


def test_registered_ids():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, _ = env.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    env.close()
    env = gym.make("FallingBlocksVolumetric-10x20x10-v0")
    obs, _ = env.reset(seed=0)
    assert obs["board"].shape == (10, 20, 10)
    env.close()
