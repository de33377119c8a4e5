"""
Core Game
=========

Main game orchestrator combining cave, worm, prizes, scoring, and rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from gravity_worm.worm_core.cave import Cave
from gravity_worm.worm_core.config_loader import GameConfig, get_config
from gravity_worm.worm_core.prizes import Prize, PrizeField
from gravity_worm.worm_core.rng import PrizeRng
from gravity_worm.worm_core.rules import Button, Direction, Status, check_worm_termination
from gravity_worm.worm_core.scoring import ScoreTracker
from gravity_worm.worm_core.state_snapshot import GameSnapshot, SnapshotBuilder
from gravity_worm.worm_core.worm import Worm


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    ticked: bool
    died: bool = False
    delta_score: int = 0
    spawned: Optional[Prize] = None
    collected: List[Prize] = field(default_factory=list)
    termination_reason: str = ""

    @staticmethod
    def idle() -> "TickResult":
        return TickResult(ticked=False)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Cave walls (scroll + bounce)
    - Worm physics
    - Prize spawning and collection
    - Scoring
    - Before / During / Dead state machine
    - State snapshots

    Time is fed in through ``advance(dt)``; every ``tick_seconds`` of
    accumulated play time runs one discrete ``tick()``. At most one tick
    runs per ``advance`` call.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng=None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        on_game_over: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for prize spawning.
            rng: Prize random source (``should_spawn``, ``row_between``, ``reset``).
                Overrides *seed* when given.
            width: Viewport width override in pixels.
            height: Viewport height override in pixels.
            on_game_over: Called with the final score when the worm dies.
        """
        if config is None:
            config = get_config()

        self._config = config.with_size(width, height)
        self._rng = rng if rng is not None else PrizeRng(self._config, seed)
        self._on_game_over = on_game_over
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._tick_seconds = self._config.timing.tick_seconds

        self._init_state()

    def _init_state(self) -> None:
        self._cave = Cave(self._config)
        self._worm = Worm(self._config)
        self._prizes = PrizeField(self._config, self._rng)
        self._scorer = ScoreTracker(self._config)

        self._dt: float = 0.0
        self._ticks: int = 0
        self._status = Status.BEFORE
        self._termination_reason: str = ""

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def status(self) -> Status:
        return self._status

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def ticks(self) -> int:
        """Ticks simulated since the game started."""
        return self._ticks

    @property
    def is_over(self) -> bool:
        """True if the worm is dead."""
        return self._status is Status.DEAD

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def cave(self) -> Cave:
        return self._cave

    @property
    def worm(self) -> Worm:
        return self._worm

    @property
    def prizes(self) -> PrizeField:
        return self._prizes

    @property
    def block_width(self) -> int:
        return self._config.board.block_width

    @property
    def elapsed(self) -> float:
        """Time accumulated toward the next tick."""
        return self._dt

    def reset(self) -> GameSnapshot:
        """
        Reset game to the freshly constructed state.

        The prize RNG restarts from its original seed, so a seeded game
        replays the same prizes.

        Returns:
            Initial game snapshot.
        """
        self._rng.reset()
        self._init_state()
        return self.snapshot()

    def start(self) -> None:
        """Leave the Before state (same as releasing the action button)."""
        if self._status is Status.BEFORE:
            self._status = Status.DURING

    def advance(self, dt: float) -> Optional[TickResult]:
        """
        Accumulate elapsed time and run a tick once it exceeds the threshold.

        Args:
            dt: Seconds since the previous call.

        Returns:
            TickResult if a tick ran, None otherwise.
        """
        if self._status is not Status.DURING:
            return None

        self._dt += dt
        if self._dt > self._tick_seconds:
            self._dt = 0.0
            return self.tick()
        return None

    def tick(self) -> TickResult:
        """
        Run exactly one discrete simulation tick.

        Returns:
            TickResult with score change, prize events and death flag.
        """
        if self._status is not Status.DURING:
            return TickResult.idle()

        score_before = self._scorer.score

        thunk = self._cave.bounce()
        self._worm.integrate_velocity()
        self._cave.scroll(thunk)

        spawned = self._prizes.maybe_spawn(self._cave.top.last, self._cave.bottom.last)
        self._prizes.scroll()
        collected = self._prizes.collect(self._worm.column, self._worm.height)
        for _ in collected:
            self._scorer.apply_prize()

        self._worm.scroll()
        self._ticks += 1

        top, bottom = self._cave.gap_at(self._worm.head_index)
        term = check_worm_termination(self._worm.height, top, bottom)
        if term.terminated:
            self._status = Status.DEAD
            self._termination_reason = term.reason
            if self._on_game_over is not None:
                self._on_game_over(self._scorer.score)
        else:
            self._scorer.apply_survival()

        return TickResult(
            ticked=True,
            died=term.terminated,
            delta_score=self._scorer.score - score_before,
            spawned=spawned,
            collected=collected,
            termination_reason=term.reason
        )

    def press_btn(self, button: Any) -> None:
        """Action pressed during play: climb. Everything else is ignored."""
        if button is Button.ACTION and self._status is Status.DURING:
            self._worm.direction = Direction.UP

    def release_btn(self, button: Any) -> None:
        """
        Action released: start the game, fall, or restart after death.
        Other buttons are ignored.
        """
        if button is not Button.ACTION:
            return

        if self._status is Status.BEFORE:
            self._status = Status.DURING
        elif self._status is Status.DURING:
            self._worm.direction = Direction.DOWN
        else:
            self.reset()

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            cave=self._cave,
            worm=self._worm,
            prizes=self._prizes,
            status=self._status.value,
            score=self._scorer.score,
            ticks=self._ticks
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "ticks": self._ticks,
            "prizes_collected": self._scorer.prizes_collected,
            "status": self._status.value,
            "worm_velocity": self._worm.velocity,
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with wall boundaries, worm trail, prizes and colours.
        """
        colors = self._config.colors
        return {
            "board_width": self._config.board.width,
            "board_height": self._config.board.height,
            "block_width": self.block_width,
            "cave_top": self._cave.top.tolist(),
            "cave_bottom": self._cave.bottom.tolist(),
            "worm": [
                (height, tuple(color))
                for height, color in zip(self._worm.heights.tolist(), self._worm.colors.tolist())
            ],
            "prizes": [(p.column, p.row) for p in self._prizes],
            "score": self._scorer.score,
            "status": self._status.value,
            "background_color": colors.background,
            "wall_color": colors.wall,
            "prize_color": colors.prize,
            "text_color": colors.text,
        }

    def title(self, fps: Optional[float] = None) -> str:
        """Window title with score and an externally measured FPS."""
        base = self._config.window.title
        if fps is None:
            return f"{base} score {self._scorer.score}"
        return f"{base} FPS {fps:.0f} score {self._scorer.score}"
