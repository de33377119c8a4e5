"""
Cave
====

The two scrolling walls and their shared vertical direction.
"""

from __future__ import annotations

from typing import Optional
import numpy as np

from gravity_worm.worm_core.config_loader import GameConfig, get_config
from gravity_worm.worm_core.rules import Direction
from gravity_worm.worm_core.scroll_buffer import ScrollBuffer


class Cave:
    """
    Top and bottom wall boundaries, one block-row index per column.

    Both walls move together one row per tick in the shared direction.
    The direction flips when the newest column touches the top or bottom
    edge of the grid. A flip from up to down also nudges the bottom wall
    by ``thunk`` rows for that one tick.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        board = config.board
        self._y_blocks = board.y_blocks
        self._thunk = config.cave.thunk
        self._min_gap = config.cave.min_gap
        self._initial_direction = Direction.parse(config.cave.initial_direction)

        self.top = ScrollBuffer(board.x_blocks, config.cave.initial_top(board.y_blocks), dtype=np.int64)
        self.bottom = ScrollBuffer(board.x_blocks, config.cave.initial_bottom(board.y_blocks), dtype=np.int64)
        self.direction = self._initial_direction

    def __len__(self) -> int:
        return len(self.top)

    @property
    def height(self) -> int:
        """Grid height in blocks."""
        return self._y_blocks

    def is_wall_collided(self) -> bool:
        """True if the newest column touches the top or bottom edge."""
        return self.top.last <= 0 or self.bottom.last >= self._y_blocks - 1

    def bounce(self) -> int:
        """
        Flip direction if the walls reached an edge.

        Returns:
            Thunk offset for the bottom wall this tick (0 if none).
        """
        if not self.is_wall_collided():
            return 0
        thunk = self._thunk if self.direction is Direction.UP else 0
        self.direction = self.direction.flipped()
        return thunk

    def scroll(self, thunk: int = 0) -> None:
        """Drop the oldest column and append a new one in the current direction."""
        step = self.direction.unit
        new_top = self.top.last + step
        new_bottom = self.bottom.last + step + thunk
        if thunk and new_bottom - new_top < self._min_gap:
            new_bottom -= thunk
        self.top.push(new_top)
        self.bottom.push(new_bottom)

    def gap_at(self, column: int):
        """(top, bottom) boundaries at *column*."""
        return self.top[column], self.bottom[column]
