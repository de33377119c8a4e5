"""
Vector Environment Factories
============================

Build gymnasium vector environments of ``WormEnv``. Each sub-environment
is seeded ``seed + rank`` so a batch always replays the same prize
sequences.

Usage:
    from gravity_worm.worm_core.async_vector_env import make_async_vec_env

    vec_env = make_async_vec_env(num_envs=8, seed=42)
    obs, infos = vec_env.reset()
    obs, rewards, terms, truncs, infos = vec_env.step(np.ones(8, dtype=np.int64))
    vec_env.close()

Terminated worms are reset automatically by gymnasium on the next step.
"""

from __future__ import annotations

import multiprocessing
from dataclasses import dataclass
from typing import Callable, List, Optional

import gymnasium as gym
from gymnasium.vector import AsyncVectorEnv, SyncVectorEnv


@dataclass(frozen=True)
class WormEnvFactory:
    """Picklable constructor for one sub-environment."""
    seed: int
    config_path: Optional[str] = None
    render_mode: Optional[str] = None
    image_obs: bool = False

    def __call__(self) -> gym.Env:
        # Imported in the worker so spawned processes load pygame lazily
        from gravity_worm.worm_core.env_gym import WormEnv

        env = WormEnv(
            config_path=self.config_path,
            render_mode=self.render_mode,
            image_obs=self.image_obs,
        )
        env.reset(seed=self.seed)
        return env


def make_env(
    rank: int,
    seed: int,
    config_path: Optional[str] = None,
    render_mode: Optional[str] = None,
    image_obs: bool = False,
) -> Callable[[], gym.Env]:
    """
    Factory for the environment at index *rank*.

    Args:
        rank: Index of this environment (0 to num_envs-1).
        seed: Base seed; the environment uses seed + rank.
        config_path: Path to game_config.yaml (None = default).
        render_mode: "human", "rgb_array", or None.
        image_obs: Include board_rgb in observations.
    """
    return WormEnvFactory(seed + rank, config_path, render_mode, image_obs)


def get_recommended_num_envs() -> int:
    """One environment per CPU core, leaving one core free."""
    return max(1, multiprocessing.cpu_count() - 1)


def _env_fns(
    num_envs: int,
    seed: int,
    config_path: Optional[str],
    image_obs: bool
) -> List[Callable[[], gym.Env]]:
    if num_envs <= 0:
        raise ValueError(f"num_envs must be positive, got {num_envs}")
    return [make_env(rank, seed, config_path, image_obs=image_obs) for rank in range(num_envs)]


def make_async_vec_env(
    num_envs: Optional[int] = None,
    seed: int = 42,
    config_path: Optional[str] = None,
    image_obs: bool = False,
) -> AsyncVectorEnv:
    """
    One worker process per environment.

    Args:
        num_envs: Number of environments. Uses get_recommended_num_envs() if None.
        seed: Base seed; env i gets seed + i.
        config_path: Path to game_config.yaml.
        image_obs: Include board_rgb in observations (costly over pipes).
    """
    if num_envs is None:
        num_envs = get_recommended_num_envs()
    return AsyncVectorEnv(_env_fns(num_envs, seed, config_path, image_obs))


def make_sync_vec_env(
    num_envs: int = 4,
    seed: int = 42,
    config_path: Optional[str] = None,
    image_obs: bool = False,
) -> SyncVectorEnv:
    """In-process counterpart of make_async_vec_env, easier to debug."""
    return SyncVectorEnv(_env_fns(num_envs, seed, config_path, image_obs))
