"""
Prizes
======

Collectible tokens that spawn inside the cave gap at the right edge and
scroll left with the walls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from gravity_worm.worm_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class Prize:
    """A prize at integer grid coordinates."""
    column: int
    row: int


class PrizeField:
    """
    Live prizes and their per-tick lifecycle: spawn, scroll, cull, collect.

    Prizes spawn at ``column = x_blocks`` (the right edge) and move one
    column left per tick until they are collected or their column goes
    negative.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng=None):
        """
        Initialize prize field.

        Args:
            config: Game configuration. Uses default if None.
            rng: Random source with ``should_spawn()`` and ``row_between(top, bottom)``.
        """
        if config is None:
            config = get_config()

        self._spawn_column = config.board.x_blocks
        self._radius = config.prizes.collect_radius
        self._rng = rng
        self._prizes: List[Prize] = []

    def __len__(self) -> int:
        return len(self._prizes)

    def __iter__(self):
        return iter(self._prizes)

    @property
    def prizes(self) -> Tuple[Prize, ...]:
        return tuple(self._prizes)

    def add(self, column: int, row: int) -> Prize:
        """Place a prize directly."""
        prize = Prize(column, row)
        self._prizes.append(prize)
        return prize

    def maybe_spawn(self, top: int, bottom: int) -> Optional[Prize]:
        """
        Spawn a prize at the right edge with the configured probability.

        Args:
            top: New top boundary of the rightmost column.
            bottom: New bottom boundary of the rightmost column.

        Returns:
            The new prize, or None if nothing spawned.

        Raises:
            RuntimeError: If the drawn row is not strictly inside the gap.
        """
        if not self._rng.should_spawn():
            return None
        row = self._rng.row_between(top, bottom)
        if not top < row < bottom:
            raise RuntimeError(
                f"Prize row {row} is not strictly inside the cave gap ({top}, {bottom})"
            )
        return self.add(self._spawn_column, row)

    def scroll(self) -> None:
        """Move every prize one column left and drop the ones past the left edge."""
        moved = (Prize(p.column - 1, p.row) for p in self._prizes)
        self._prizes = [p for p in moved if p.column >= 0]

    def collect(self, column: int, height: float) -> List[Prize]:
        """
        Remove and return prizes within ``collect_radius`` of the worm head.

        Both axes are checked independently (a square, not a circle).
        """
        collected = []
        remaining = []
        for prize in self._prizes:
            if abs(prize.column - column) < self._radius and abs(prize.row - height) < self._radius:
                collected.append(prize)
            else:
                remaining.append(prize)
        self._prizes = remaining
        return collected

    def clear(self) -> None:
        self._prizes = []
