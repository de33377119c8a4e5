"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class BoardConfig:
    """Viewport size and the block grid derived from it."""
    width: int                   # Viewport width in pixels
    height: int                  # Viewport height in pixels
    columns: int                 # Fixed column count across the viewport

    @property
    def block_width(self) -> int:
        """Pixel size of one grid cell."""
        return self.width // self.columns

    @property
    def x_blocks(self) -> int:
        """Number of horizontal blocks (cave length)."""
        return self.width // self.block_width

    @property
    def y_blocks(self) -> int:
        """Grid height in blocks."""
        return self.height // self.block_width

    @property
    def worm_length(self) -> int:
        """Worm trail length: the left half of the board."""
        return self.x_blocks // 2


@dataclass(frozen=True)
class TimingConfig:
    """Fixed-timestep and frame pacing parameters."""
    tick_seconds: float
    max_fps: int


@dataclass(frozen=True)
class CaveConfig:
    """Initial wall placement and bounce behaviour."""
    top_divisor: int
    bottom_numerator: int
    bottom_divisor: int
    initial_direction: str
    thunk: int
    min_gap: int

    def initial_top(self, y_blocks: int) -> int:
        return y_blocks // self.top_divisor

    def initial_bottom(self, y_blocks: int) -> int:
        return y_blocks * self.bottom_numerator // self.bottom_divisor


@dataclass(frozen=True)
class WormConfig:
    """Worm physics and colour ramp."""
    max_velocity: int
    velocity_divisor: int
    initial_velocity: int
    initial_direction: str
    color_rising: Color          # Colour at velocity -max_velocity (moving up-screen)
    color_sinking: Color         # Colour at velocity +max_velocity (moving down-screen)


@dataclass(frozen=True)
class PrizeConfig:
    """Prize spawning and collection parameters."""
    spawn_modulus: int
    spawn_threshold: int
    collect_radius: int
    bonus: int

    @property
    def spawn_probability(self) -> float:
        """Chance of a spawn on any tick."""
        return (self.spawn_modulus - 1 - self.spawn_threshold) / self.spawn_modulus


@dataclass(frozen=True)
class ColorConfig:
    """Cosmetic colours."""
    background: Color
    wall: Color
    prize: Color
    text: Color


@dataclass(frozen=True)
class WindowConfig:
    """Window presentation settings."""
    title: str
    exit_on_esc: bool


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits for agent play."""
    max_ticks: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_prizes: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    timing: TimingConfig
    cave: CaveConfig
    worm: WormConfig
    prizes: PrizeConfig
    colors: ColorConfig
    window: WindowConfig
    caps: CapsConfig
    observation: ObservationConfig

    def with_size(self, width: Optional[int] = None, height: Optional[int] = None) -> "GameConfig":
        """Return a copy with the viewport size overridden."""
        if width is None and height is None:
            return self
        board = replace(
            self.board,
            width=self.board.width if width is None else int(width),
            height=self.board.height if height is None else int(height),
        )
        config = replace(self, board=board)
        _validate_config(config)
        return config


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    if not all(0 <= c <= 255 for c in color):
        raise ValueError(f"Color components must be in [0, 255], got {color_data}")
    return color


def _parse_direction(value: str) -> str:
    direction = str(value).lower()
    if direction not in ("up", "down"):
        raise ValueError(f"Direction must be 'up' or 'down', got '{value}'")
    return direction


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.width <= 0 or board.height <= 0 or board.columns <= 0:
        raise ValueError(
            f"Board dimensions must be positive, got "
            f"{board.width}x{board.height} with {board.columns} columns"
        )
    if board.columns > board.width:
        raise ValueError(f"columns ({board.columns}) exceeds board width ({board.width})")

    if config.timing.tick_seconds <= 0:
        raise ValueError(f"tick_seconds must be positive, got {config.timing.tick_seconds}")

    cave = config.cave
    if cave.min_gap < 2:
        raise ValueError(f"cave.min_gap must be at least 2, got {cave.min_gap}")
    top = cave.initial_top(board.y_blocks)
    bottom = cave.initial_bottom(board.y_blocks)
    if bottom - top < cave.min_gap:
        raise ValueError(
            f"Initial cave gap ({top}, {bottom}) is narrower than min_gap ({cave.min_gap})"
        )

    worm = config.worm
    if worm.max_velocity <= 0 or worm.velocity_divisor <= 0:
        raise ValueError("worm.max_velocity and worm.velocity_divisor must be positive")
    if abs(worm.initial_velocity) > worm.max_velocity:
        raise ValueError(
            f"worm.initial_velocity ({worm.initial_velocity}) outside "
            f"[-{worm.max_velocity}, {worm.max_velocity}]"
        )

    prizes = config.prizes
    if not 0 <= prizes.spawn_threshold < prizes.spawn_modulus:
        raise ValueError(
            f"prizes.spawn_threshold ({prizes.spawn_threshold}) must be in "
            f"[0, spawn_modulus={prizes.spawn_modulus})"
        )

    if config.caps.max_ticks <= 0:
        raise ValueError(f"caps.max_ticks must be positive, got {config.caps.max_ticks}")
    if config.observation.max_prizes <= 0:
        raise ValueError("observation.max_prizes must be positive")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        columns=int(board_data.get("columns", 128))
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        tick_seconds=float(timing_data.get("tick_seconds", 0.0625)),
        max_fps=int(timing_data.get("max_fps", 60))
    )

    cave_data = raw.get("cave", {})
    cave = CaveConfig(
        top_divisor=int(cave_data.get("top_divisor", 8)),
        bottom_numerator=int(cave_data.get("bottom_numerator", 7)),
        bottom_divisor=int(cave_data.get("bottom_divisor", 8)),
        initial_direction=_parse_direction(cave_data.get("initial_direction", "up")),
        thunk=int(cave_data.get("thunk", -1)),
        min_gap=int(cave_data.get("min_gap", 2))
    )

    worm_data = raw["worm"]
    worm = WormConfig(
        max_velocity=int(worm_data.get("max_velocity", 16)),
        velocity_divisor=int(worm_data.get("velocity_divisor", 8)),
        initial_velocity=int(worm_data.get("initial_velocity", -16)),
        initial_direction=_parse_direction(worm_data.get("initial_direction", "down")),
        color_rising=_parse_color(worm_data["color_rising"]),
        color_sinking=_parse_color(worm_data["color_sinking"])
    )

    prize_data = raw.get("prizes", {})
    prizes = PrizeConfig(
        spawn_modulus=int(prize_data.get("spawn_modulus", 10)),
        spawn_threshold=int(prize_data.get("spawn_threshold", 8)),
        collect_radius=int(prize_data.get("collect_radius", 2)),
        bonus=int(prize_data.get("bonus", 10))
    )

    color_data = raw["colors"]
    colors = ColorConfig(
        background=_parse_color(color_data["background"]),
        wall=_parse_color(color_data["wall"]),
        prize=_parse_color(color_data["prize"]),
        text=_parse_color(color_data.get("text", color_data["wall"]))
    )

    window_data = raw.get("window", {})
    window = WindowConfig(
        title=str(window_data.get("title", "Gravity worm")),
        exit_on_esc=bool(window_data.get("exit_on_esc", True))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_ticks=int(caps_data.get("max_ticks", 10000))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_prizes=int(obs_data.get("max_prizes", 32)),
        image_width=int(obs_data.get("image_width", 128)),
        image_height=int(obs_data.get("image_height", 128))
    )

    config = GameConfig(
        board=board,
        timing=timing,
        cave=cave,
        worm=worm,
        prizes=prizes,
        colors=colors,
        window=window,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
