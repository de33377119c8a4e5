"""
State Snapshot
==============

Read-only copy of the game state for renderers, agents and other threads.
Arrays are copied out of the scroll buffers in logical (oldest to newest)
order, so a snapshot never aliases live simulation state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, TYPE_CHECKING
import numpy as np

from gravity_worm.worm_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from gravity_worm.worm_core.cave import Cave
    from gravity_worm.worm_core.prizes import Prize
    from gravity_worm.worm_core.worm import Worm


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete game state at one instant.

    ``prizes`` is an ``(N, 2)`` int array of (column, row) pairs.
    """
    status: str
    score: int
    ticks: int
    worm_velocity: int
    worm_direction: str
    cave_direction: str

    # Board info
    board_width: int
    board_height: int
    block_width: int

    cave_top: np.ndarray              # (x_blocks,) int64
    cave_bottom: np.ndarray           # (x_blocks,) int64
    worm_height: np.ndarray           # (worm_length,) float64
    worm_color: np.ndarray            # (worm_length, 3) uint8
    prizes: np.ndarray                # (N, 2) int64

    @property
    def head_height(self) -> float:
        return float(self.worm_height[-1])

    @property
    def gap_above(self) -> float:
        """Clearance between the worm head and the top collision limit."""
        head = len(self.worm_height) - 1
        return self.head_height - (float(self.cave_top[head]) + 1.0)

    @property
    def gap_below(self) -> float:
        """Clearance between the worm head and the bottom wall."""
        head = len(self.worm_height) - 1
        return float(self.cave_bottom[head]) - self.head_height

    def to_obs_dict(self, max_prizes: int) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary with padded prize arrays."""
        prize_x = np.zeros(max_prizes, dtype=np.int32)
        prize_y = np.zeros(max_prizes, dtype=np.int32)
        prize_mask = np.zeros(max_prizes, dtype=np.int8)
        count = min(len(self.prizes), max_prizes)
        if count:
            prize_x[:count] = self.prizes[:count, 0]
            prize_y[:count] = self.prizes[:count, 1]
            prize_mask[:count] = 1

        return {
            "cave_top": self.cave_top.astype(np.int32),
            "cave_bottom": self.cave_bottom.astype(np.int32),
            "worm_height": self.worm_height.astype(np.float32),
            "worm_velocity": np.array(self.worm_velocity, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "gap_above": np.array(self.gap_above, dtype=np.float32),
            "gap_below": np.array(self.gap_below, dtype=np.float32),
            "prize_x": prize_x,
            "prize_y": prize_y,
            "prize_mask": prize_mask,
        }


class SnapshotBuilder:
    """Builds game state snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._board_width = config.board.width
        self._board_height = config.board.height
        self._block_width = config.board.block_width

    def build(
        self,
        cave: "Cave",
        worm: "Worm",
        prizes: Iterable["Prize"],
        status: str,
        score: int,
        ticks: int
    ) -> GameSnapshot:
        """Build a snapshot from current game state."""
        prize_array = np.array(
            [(p.column, p.row) for p in prizes],
            dtype=np.int64
        ).reshape(-1, 2)

        return GameSnapshot(
            status=status,
            score=score,
            ticks=ticks,
            worm_velocity=worm.velocity,
            worm_direction=worm.direction.value,
            cave_direction=cave.direction.value,
            board_width=self._board_width,
            board_height=self._board_height,
            block_width=self._block_width,
            cave_top=cave.top.to_array(),
            cave_bottom=cave.bottom.to_array(),
            worm_height=worm.heights.to_array(),
            worm_color=worm.colors.to_array(),
            prizes=prize_array,
        )
