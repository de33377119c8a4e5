"""
Worm Core - The game simulation and its adapters.

Main exports:
- CoreGame: Fixed-timestep simulation (Before / During / Dead)
- SharedGame: Lock-guarded CoreGame for multi-threaded front-ends
- WormEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from gravity_worm.worm_core.config_loader import GameConfig, load_config
from gravity_worm.worm_core.rules import Button, Direction, Status
from gravity_worm.worm_core.game import CoreGame, TickResult
from gravity_worm.worm_core.shared_game import SharedGame
from gravity_worm.worm_core.state_snapshot import GameSnapshot
from gravity_worm.worm_core.env_gym import WormEnv
from gravity_worm.worm_core.async_vector_env import (
    make_async_vec_env,
    make_sync_vec_env,
    make_env,
    get_recommended_num_envs,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Button",
    "Direction",
    "Status",
    "CoreGame",
    "TickResult",
    "SharedGame",
    "GameSnapshot",
    "WormEnv",
    "make_async_vec_env",
    "make_sync_vec_env",
    "make_env",
    "get_recommended_num_envs",
]
