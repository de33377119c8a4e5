"""
Worm
====

Player-controlled trail. Only the newest sample is the live position;
older samples are history kept for drawing.
"""

from __future__ import annotations

from typing import Optional, Tuple
import numpy as np

from gravity_worm.worm_core.config_loader import Color, GameConfig, get_config
from gravity_worm.worm_core.rules import Direction
from gravity_worm.worm_core.scroll_buffer import ScrollBuffer


class Worm:
    """
    Worm state: trail heights and colours, desired direction, velocity.

    Velocity is an integer in eighths of a block per tick, clamped to
    ``[-max_velocity, max_velocity]``. Height grows toward the bottom of
    the screen, so positive velocity sinks and negative velocity rises.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        cfg = config.worm
        self._max_velocity = cfg.max_velocity
        self._divisor = cfg.velocity_divisor
        self._rising = np.array(cfg.color_rising, dtype=np.float64)
        self._sinking = np.array(cfg.color_sinking, dtype=np.float64)

        self.direction = Direction.parse(cfg.initial_direction)
        self.velocity: int = cfg.initial_velocity

        length = config.board.worm_length
        start_height = config.board.y_blocks / 2.0
        self.heights = ScrollBuffer(length, start_height, dtype=np.float64)
        self.colors = ScrollBuffer(
            length,
            self.color_for_velocity(self.velocity),
            dtype=np.uint8,
            item_shape=(3,)
        )

    def __len__(self) -> int:
        return len(self.heights)

    @property
    def column(self) -> int:
        """Board column the head is compared against for prizes."""
        return len(self.heights)

    @property
    def head_index(self) -> int:
        """Cave column index under the worm's head."""
        return len(self.heights) - 1

    @property
    def height(self) -> float:
        """Current head height in blocks."""
        return self.heights.last

    def color_for_velocity(self, velocity: int) -> Color:
        """Linear ramp from the rising colour (-max) to the sinking colour (+max)."""
        t = (velocity + self._max_velocity) / (2.0 * self._max_velocity)
        t = min(1.0, max(0.0, t))
        color = self._rising + t * (self._sinking - self._rising)
        r, g, b = (int(round(c)) for c in color)
        return (r, g, b)

    def integrate_velocity(self) -> int:
        """Add the desired direction to velocity and clamp."""
        velocity = self.velocity + self.direction.unit
        self.velocity = max(-self._max_velocity, min(self._max_velocity, velocity))
        return self.velocity

    def scroll(self) -> Tuple[float, Color]:
        """Drop the oldest sample and append the next head position."""
        height = self.heights.last + self.velocity / self._divisor
        color = self.color_for_velocity(self.velocity)
        self.heights.push(height)
        self.colors.push(color)
        return height, color
