"""
Shared Game
===========

Thread-safe wrapper for running rendering and simulation on separate
threads. Every mutating call and every snapshot goes through one lock,
so a renderer always sees the state between two complete calls.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from gravity_worm.worm_core.game import CoreGame, TickResult
from gravity_worm.worm_core.state_snapshot import GameSnapshot


class SharedGame:
    """Lock-guarded facade over a single ``CoreGame``."""

    def __init__(self, game: CoreGame):
        self._game = game
        self._lock = threading.Lock()

    @property
    def game(self) -> CoreGame:
        """Underlying game. Not synchronized; use from the owning thread only."""
        return self._game

    def advance(self, dt: float) -> Optional[TickResult]:
        with self._lock:
            return self._game.advance(dt)

    def press_btn(self, button: Any) -> None:
        with self._lock:
            self._game.press_btn(button)

    def release_btn(self, button: Any) -> None:
        with self._lock:
            self._game.release_btn(button)

    def reset(self) -> GameSnapshot:
        with self._lock:
            return self._game.reset()

    def snapshot(self) -> GameSnapshot:
        """Consistent copy of the full state."""
        with self._lock:
            return self._game.snapshot()

    def get_render_data(self) -> dict:
        with self._lock:
            return self._game.get_render_data()

    @property
    def score(self) -> int:
        with self._lock:
            return self._game.score
