"""
Gymnasium Environment
=====================

``WormEnv`` exposes the game to agents. One ``step`` is one simulation
tick; the agent decides each tick whether the action button is held.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from gravity_worm.worm_core.config_loader import GameConfig, load_config
from gravity_worm.worm_core.game import CoreGame
from gravity_worm.worm_core.rules import Button


ACTION_RELEASE = 0
ACTION_HOLD = 1

Observation = Dict[str, np.ndarray]


def build_observation_space(
    config: GameConfig,
    image_shape: Optional[Tuple[int, int]] = None
) -> spaces.Dict:
    """
    Observation space for a board.

    Args:
        config: Game configuration (board size, velocity limit, prize cap).
        image_shape: (height, width) of board_rgb, or None to omit it.
    """
    board = config.board
    rows = board.y_blocks
    max_prizes = config.observation.max_prizes
    v = config.worm.max_velocity

    def wall_box() -> spaces.Box:
        # Walls can scroll past the grid edge by a block before bouncing
        return spaces.Box(low=-rows, high=2 * rows, shape=(board.x_blocks,), dtype=np.int32)

    def scalar(low, high, dtype) -> spaces.Box:
        return spaces.Box(low=low, high=high, shape=(), dtype=dtype)

    fields = {
        "cave_top": wall_box(),
        "cave_bottom": wall_box(),
        "worm_height": spaces.Box(-np.inf, np.inf, shape=(board.worm_length,), dtype=np.float32),
        "worm_velocity": scalar(-v, v, np.int32),
        "score": scalar(0, np.iinfo(np.int64).max, np.int64),
        "gap_above": scalar(-np.inf, np.inf, np.float32),
        "gap_below": scalar(-np.inf, np.inf, np.float32),
        "prize_x": spaces.Box(0, board.x_blocks, shape=(max_prizes,), dtype=np.int32),
        "prize_y": spaces.Box(0, rows, shape=(max_prizes,), dtype=np.int32),
        "prize_mask": spaces.MultiBinary(max_prizes),
    }
    if image_shape is not None:
        fields["board_rgb"] = spaces.Box(0, 255, shape=(*image_shape, 3), dtype=np.uint8)
    return spaces.Dict(fields)


class WormEnv(gym.Env):
    """
    Gravity worm for reinforcement learning.

    Action Space:
        Discrete(2): ACTION_RELEASE (0) lets the worm fall,
        ACTION_HOLD (1) makes it climb.

    Observation Space:
        Dict of wall rows, worm trail, velocity, clearance at the head,
        padded prize arrays and, with ``image_obs``, an RGB frame.

    Reward:
        Score gained this tick: 1 for surviving plus 10 per prize eaten.
        The tick the worm dies earns nothing.

    Episode end:
        terminated when the worm hits a wall, truncated at ``caps.max_ticks``.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 16,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        render_style: str = "solid",
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Args:
            config_path: game_config.yaml to load when *config* is None.
            config: Already-loaded configuration.
            render_mode: "human", "rgb_array" or None.
            render_style: "solid" (numpy) or "pygame" for rgb frames.
            image_obs: Add a board_rgb frame to every observation.
            image_width: Frame width, defaults to observation.image_width.
            image_height: Frame height, defaults to observation.image_height.
            debug: Print one [DEBUG] line per step.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode {render_mode!r}")

        self._config = config if config is not None else load_config(config_path)
        self.render_mode = render_mode
        self._render_style = render_style
        self._debug = debug

        obs_cfg = self._config.observation
        self._frame_size = (image_width or obs_cfg.image_width, image_height or obs_cfg.image_height)
        self._image_obs = image_obs

        self._game = CoreGame(config=self._config)
        self._renderer = None

        self.action_space = spaces.Discrete(2)
        image_shape = (self._frame_size[1], self._frame_size[0]) if image_obs else None
        self.observation_space = build_observation_space(self._config, image_shape)

        if self._debug:
            board = self._config.board
            print(f"[DEBUG] WormEnv: {board.x_blocks}x{board.y_blocks} blocks, "
                  f"worm length {board.worm_length}, "
                  f"tick cap {self._config.caps.max_ticks}")

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Observation, Dict[str, Any]]:
        """
        Start a new episode, already past the "tap to begin" screen.

        A new *seed* rebuilds the game with that prize seed; without one the
        current game restarts with its previous seed.
        """
        super().reset(seed=seed)

        if seed is None:
            self._game.reset()
        else:
            self._game = CoreGame(config=self._config, seed=seed)
        self._game.start()

        return self._observe(), self._info(delta_score=0)

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Observation, float, bool, bool, Dict[str, Any]]:
        """
        Hold or release the button for one tick.

        Args:
            action: ACTION_HOLD or ACTION_RELEASE.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        action = int(np.asarray(action).item())
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}, expected 0 or 1")

        # Releasing after death would restart the game, so a finished
        # episode only ever returns idle ticks.
        if not self._game.is_over:
            if action == ACTION_HOLD:
                self._game.press_btn(Button.ACTION)
            else:
                self._game.release_btn(Button.ACTION)

        result = self._game.tick()

        terminated = self._game.is_over
        truncated = not terminated and self._game.ticks >= self._config.caps.max_ticks
        obs = self._observe()
        info = self._info(delta_score=result.delta_score, prizes_this_tick=len(result.collected))

        if self._debug:
            print(f"[DEBUG] tick {self._game.ticks} action={action} "
                  f"v={int(obs['worm_velocity'])} "
                  f"gap=({float(obs['gap_above']):.2f}, {float(obs['gap_below']):.2f}) "
                  f"score={self._game.score}"
                  + (f" TERMINATED: {info['terminated_reason']}" if terminated else ""))

        return obs, float(result.delta_score), terminated, truncated, info

    def _observe(self) -> Observation:
        obs = self._game.snapshot().to_obs_dict(self._config.observation.max_prizes)
        if self._image_obs:
            obs["board_rgb"] = self._frame()
        return obs

    def _info(self, **extra: Any) -> Dict[str, Any]:
        info = self._game.get_info()
        info.update(extra)
        return info

    def _get_renderer(self):
        if self._renderer is None:
            if self._render_style == "pygame" or self.render_mode == "human":
                from gravity_worm.worm_core.render_pygame import PygameRenderer
                self._renderer = PygameRenderer(self._config)
            else:
                from gravity_worm.worm_core.render_solid import SolidRenderer
                self._renderer = SolidRenderer(self._config)
        return self._renderer

    def _frame(self) -> np.ndarray:
        width, height = self._frame_size
        return self._get_renderer().render(self._game.get_render_data(), width, height)

    def render(self) -> Optional[np.ndarray]:
        """RGB frame in "rgb_array" mode; draws the window in "human" mode."""
        if self.render_mode == "rgb_array":
            return self._frame()
        if self.render_mode == "human":
            self._get_renderer().render_to_screen(self._game.get_render_data())
        return None

    def close(self) -> None:
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CoreGame:
        """Underlying game, for tools and debugging."""
        return self._game

    @property
    def config(self) -> GameConfig:
        return self._config
