"""
Tests for the Gymnasium environment API.
"""

import dataclasses

import numpy as np
import pytest

from gravity_worm.worm_core.async_vector_env import make_sync_vec_env
from gravity_worm.worm_core.env_gym import ACTION_HOLD, ACTION_RELEASE, WormEnv


@pytest.fixture
def env():
    env = WormEnv()
    yield env
    env.close()


class TestWormEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        obs, info = env.reset(seed=42)
        assert isinstance(obs, dict)
        assert info["status"] == "during"
        assert info["score"] == 0
        assert info["delta_score"] == 0

    def test_observation_structure(self, env):
        """Observation keys, shapes and dtypes match the declared space."""
        obs, _ = env.reset(seed=42)
        max_prizes = env.config.observation.max_prizes

        assert obs["cave_top"].shape == (128,)
        assert obs["cave_top"].dtype == np.int32
        assert obs["worm_height"].shape == (64,)
        assert obs["worm_height"].dtype == np.float32
        assert obs["prize_mask"].shape == (max_prizes,)
        assert int(obs["worm_velocity"]) == -16
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        env.reset(seed=42)
        obs, reward, terminated, truncated, info = env.step(ACTION_RELEASE)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert info["ticks"] == 1
        assert info["prizes_this_tick"] == 0
        assert env.observation_space.contains(obs)

    def test_numpy_action(self, env):
        env.reset(seed=1)
        _, reward, _, _, _ = env.step(np.array(ACTION_HOLD))
        assert reward == 1.0
        assert env.game.worm.velocity == -16

    @pytest.mark.parametrize("action", [2, -1])
    def test_invalid_action(self, env, action):
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step(action)

    def test_terminates_on_death(self, env):
        """Holding the button flies the worm into the top wall."""
        env.reset(seed=42)
        terminated = False
        steps = 0
        while not terminated:
            _, reward, terminated, truncated, info = env.step(ACTION_HOLD)
            steps += 1
            assert not truncated
            assert steps < 200
        assert reward == 0.0
        assert info["terminated_reason"] == "hit_top_wall"

        # Stepping a finished episode does not restart it
        env.step(ACTION_RELEASE)
        assert env.game.is_over

    def test_truncation(self, config):
        short = dataclasses.replace(config, caps=dataclasses.replace(config.caps, max_ticks=3))
        env = WormEnv(config=short)
        env.reset(seed=0)
        results = [env.step(ACTION_RELEASE) for _ in range(3)]
        assert [r[3] for r in results] == [False, False, True]
        assert not results[-1][2]
        env.close()

    def test_same_seed_same_episode(self):
        def rollout(seed):
            env = WormEnv()
            env.reset(seed=seed)
            inputs = np.random.default_rng(0)
            trace = []
            for _ in range(150):
                obs, reward, terminated, _, _ = env.step(int(inputs.integers(0, 2)))
                trace.append((reward, obs["prize_x"].tolist(), obs["prize_y"].tolist()))
                if terminated:
                    break
            env.close()
            return trace

        assert rollout(7) == rollout(7)

    def test_image_obs(self):
        env = WormEnv(image_obs=True, image_width=64, image_height=48)
        obs, _ = env.reset(seed=0)
        assert obs["board_rgb"].shape == (48, 64, 3)
        assert obs["board_rgb"].dtype == np.uint8
        assert env.observation_space.contains(obs)
        env.close()

    def test_rgb_render_mode(self):
        env = WormEnv(render_mode="rgb_array")
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (128, 128, 3)
        env.close()


class TestVectorEnv:
    """Test gymnasium vector wrappers."""

    def test_sync_vec_env(self):
        vec_env = make_sync_vec_env(num_envs=3, seed=42)
        try:
            obs, _ = vec_env.reset(seed=42)
            assert obs["cave_top"].shape == (3, 128)
            obs, rewards, terms, truncs, _ = vec_env.step(np.array([0, 1, 0]))
            assert rewards.shape == (3,)
            assert rewards.tolist() == [1.0, 1.0, 1.0]
            assert not terms.any()
        finally:
            vec_env.close()
