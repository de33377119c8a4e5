"""
Scoring System
==============

Survival and prize scoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gravity_worm.worm_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    is_prize: bool

    def __repr__(self) -> str:
        if self.is_prize:
            return f"ScoreEvent(prize={self.points})"
        return f"ScoreEvent(survival={self.points})"


class ScoreTracker:
    """
    Tracks game score.

    - +1 for every tick the worm survives
    - +bonus (10 by default) for every prize collected

    Score never decreases; ``CoreGame.reset`` replaces the tracker.
    """

    SURVIVAL_POINTS = 1

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._prize_bonus = config.prizes.bonus
        self._score: int = 0
        self._ticks_survived: int = 0
        self._prizes_collected: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def ticks_survived(self) -> int:
        return self._ticks_survived

    @property
    def prizes_collected(self) -> int:
        return self._prizes_collected

    def apply_survival(self) -> ScoreEvent:
        """Score one surviving tick."""
        self._score += self.SURVIVAL_POINTS
        self._ticks_survived += 1
        return ScoreEvent(points=self.SURVIVAL_POINTS, is_prize=False)

    def apply_prize(self) -> ScoreEvent:
        """Score one collected prize."""
        self._score += self._prize_bonus
        self._prizes_collected += 1
        return ScoreEvent(points=self._prize_bonus, is_prize=True)
