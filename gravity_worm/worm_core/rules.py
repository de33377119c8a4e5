"""
Game Rules
==========

Shared enums, the worm/wall collision rule, and termination results.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    """Simulation state."""
    BEFORE = "before"   # Not started, no physics
    DURING = "during"   # Active play
    DEAD = "dead"       # Frozen, awaiting restart


class Direction(Enum):
    """Vertical direction. Screen coordinates: height grows downward."""
    UP = "up"
    DOWN = "down"

    @property
    def unit(self) -> int:
        """Signed unit step (up = -1, down = +1)."""
        return -1 if self is Direction.UP else 1

    def flipped(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @staticmethod
    def parse(value: str) -> "Direction":
        return Direction(str(value).lower())


class Button(Enum):
    """
    Logical input buttons.

    The core only distinguishes the designated action signal; front-ends map
    their concrete keys onto these values.
    """
    ACTION = "action"
    OTHER = "other"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


def is_worm_collided(height: float, top: int, bottom: int) -> bool:
    """
    True if the worm's head at *height* hits the cave at its column.

    The top wall carries one block of margin; the bottom wall none.
    """
    return check_worm_termination(height, top, bottom).terminated


def check_worm_termination(height: float, top: int, bottom: int) -> TerminationResult:
    """Check the worm head against the walls at its column."""
    if height < top + 1.0:
        return TerminationResult.game_over("hit_top_wall")
    if height > float(bottom):
        return TerminationResult.game_over("hit_bottom_wall")
    return TerminationResult.none()
