import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_block_env import FallingBlockEnv
from falling_blocks.game import Action, TetrominoType


def test_reset_observation_matches_space():
    env = FallingBlockEnv()
    obs, info = env.reset(seed=3)
    assert obs["board"].shape == (20, 10)
    assert env.observation_space.contains(obs)
    assert 1 <= obs["next_piece"] <= 7
    assert info["score"] == 0
    assert info["state"] == "RUNNING"
    # Falling piece shows up as negative ids
    assert (obs["board"] < 0).sum() == 4


def test_each_step_applies_gravity():
    env = FallingBlockEnv()
    env.reset(seed=0)
    y_before = env.game.current.y
    obs, reward, terminated, truncated, info = env.step(int(Action.NONE))
    assert env.game.current.y == y_before + 1
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["action_applied"] is False


def test_line_clear_is_rewarded(sequence):
    env = FallingBlockEnv()
    env.game.generator = sequence([TetrominoType.I])
    env.reset()
    env.game.board.grid[19, :] = 2
    env.game.board.grid[19, 3:7] = 0

    obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
    assert info["action_applied"] is True
    assert info["lines_cleared"] == 1
    assert reward == 1.0
    assert not terminated


def test_terminates_on_game_over(sequence):
    env = FallingBlockEnv(terminal_penalty=-5.0)
    env.game.generator = sequence([TetrominoType.I, TetrominoType.T])
    env.reset()
    env.game.board.grid[1:, :9] = 2

    obs, reward, terminated, truncated, info = env.step(int(Action.NONE))
    assert terminated
    assert not truncated
    assert reward == -5.0
    assert info["state"] == "GAME_OVER"


def test_truncates_after_max_steps():
    env = FallingBlockEnv(max_episode_steps=2)
    env.reset(seed=1)
    _, _, terminated, truncated, _ = env.step(int(Action.NONE))
    assert not truncated
    _, _, terminated, truncated, _ = env.step(int(Action.NONE))
    assert truncated and not terminated


def test_random_rollout_through_registry():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=11)
    env.action_space.seed(11)
    for _ in range(300):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert np.isfinite(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()


def test_rgb_render():
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=2)
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
