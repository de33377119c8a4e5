"""
RNG - Prize Spawn Source
========================

Uniform random provider for prize spawning. The game only talks to the
two draws below, so tests can inject a scripted source with the same
methods and assert exact spawn outcomes.
"""

from __future__ import annotations

import random
from typing import Optional

from gravity_worm.worm_core.config_loader import GameConfig, get_config


class PrizeRng:
    """
    Seeded random source for prize spawning.

    Two draws per spawning tick:
    - ``should_spawn()``: Bernoulli draw, a random 32-bit word reduced
      modulo ``spawn_modulus`` compared against ``spawn_threshold``.
    - ``row_between(top, bottom)``: uniform row strictly inside the gap.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize prize RNG.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._modulus = config.prizes.spawn_modulus
        self._threshold = config.prizes.spawn_threshold
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def should_spawn(self) -> bool:
        """True if a prize spawns this tick."""
        return self._rng.getrandbits(32) % self._modulus > self._threshold

    def row_between(self, top: int, bottom: int) -> int:
        """Uniform integer row with ``top < row < bottom``."""
        return self._rng.randrange(top + 1, bottom)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the random sequence.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
