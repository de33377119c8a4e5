"""
Tests for cave wall motion and worm physics.
"""

import pytest

from gravity_worm.worm_core.cave import Cave
from gravity_worm.worm_core.rules import Direction, is_worm_collided, check_worm_termination
from gravity_worm.worm_core.worm import Worm


@pytest.fixture
def cave(config):
    return Cave(config)


@pytest.fixture
def worm(config):
    return Worm(config)


class TestCave:
    """Test wall scrolling and bouncing."""

    def test_initial_state(self, cave):
        assert len(cave) == 128
        assert cave.top.tolist() == [16] * 128
        assert cave.bottom.tolist() == [112] * 128
        assert cave.direction is Direction.UP

    def test_scroll_moves_newest_column(self, cave):
        """Scrolling up appends a column one row higher on both walls."""
        cave.scroll()
        assert cave.top.last == 15
        assert cave.bottom.last == 111
        assert cave.top[-2] == 16
        assert len(cave.top) == len(cave.bottom) == 128

    def test_no_bounce_inside_grid(self, cave):
        assert cave.bounce() == 0
        assert cave.direction is Direction.UP

    def test_bounce_at_top_applies_thunk(self, cave):
        """Up -> down flip nudges only the bottom wall by -1 for one tick."""
        for _ in range(16):
            cave.scroll(cave.bounce())
        assert cave.top.last == 0
        assert cave.bottom.last == 96

        thunk = cave.bounce()
        assert thunk == -1
        assert cave.direction is Direction.DOWN

        cave.scroll(thunk)
        assert cave.top.last == 1
        assert cave.bottom.last == 96

        # Next tick is a plain scroll down
        cave.scroll(cave.bounce())
        assert cave.top.last == 2
        assert cave.bottom.last == 97

    def test_bounce_at_bottom_has_no_thunk(self, cave):
        """Down -> up flip leaves both walls in step."""
        cave.direction = Direction.DOWN
        for _ in range(15):
            cave.scroll(cave.bounce())
        assert cave.bottom.last == 127

        thunk = cave.bounce()
        assert thunk == 0
        assert cave.direction is Direction.UP

        cave.scroll(thunk)
        assert cave.top.last == 30
        assert cave.bottom.last == 126

    def test_thunk_never_closes_gap(self, cave):
        """At the minimum gap the bottom-wall nudge is skipped."""
        cave.top.push(0)
        cave.bottom.push(2)
        thunk = cave.bounce()
        assert thunk == -1
        cave.scroll(thunk)
        assert cave.top.last == 1
        assert cave.bottom.last == 3

    def test_gap_stays_open_over_long_run(self, cave):
        """top < bottom in every column across many bounces."""
        for _ in range(20000):
            cave.scroll(cave.bounce())
            assert cave.top.last < cave.bottom.last
        top = cave.top.to_array()
        bottom = cave.bottom.to_array()
        assert (top < bottom).all()
        assert len(top) == len(bottom) == 128


class TestWorm:
    """Test worm velocity, trail and colour ramp."""

    def test_initial_state(self, worm):
        assert len(worm) == 64
        assert worm.heights.tolist() == [64.0] * 64
        assert worm.velocity == -16
        assert worm.direction is Direction.DOWN
        assert worm.column == 64
        assert worm.head_index == 63

    def test_velocity_clamped(self, worm):
        """Velocity saturates at +/-16 in either direction."""
        for _ in range(100):
            worm.integrate_velocity()
            assert -16 <= worm.velocity <= 16
        assert worm.velocity == 16

        worm.direction = Direction.UP
        for _ in range(100):
            worm.integrate_velocity()
        assert worm.velocity == -16

    def test_scroll_integrates_height(self, worm):
        """Height moves by velocity / 8 blocks per tick."""
        worm.integrate_velocity()
        assert worm.velocity == -15
        height, _ = worm.scroll()
        assert height == pytest.approx(64.0 - 15 / 8)
        assert worm.height == height
        assert worm.heights[-2] == 64.0
        assert len(worm) == 64

    def test_color_ramp(self, worm, config):
        """Rising colour at -16, sinking colour at +16, midpoint at 0."""
        rising = config.worm.color_rising
        sinking = config.worm.color_sinking
        assert worm.color_for_velocity(-16) == rising
        assert worm.color_for_velocity(16) == sinking
        mid = tuple(int(round((a + b) / 2)) for a, b in zip(rising, sinking))
        assert worm.color_for_velocity(0) == mid

    def test_scroll_records_color(self, worm, config):
        worm.velocity = 16
        worm.scroll()
        assert tuple(worm.colors.last.tolist()) == config.worm.color_sinking


class TestCollisionRule:
    """Test the asymmetric wall margins."""

    def test_top_has_one_block_margin(self):
        assert is_worm_collided(16.5, 16, 112)
        assert not is_worm_collided(17.0, 16, 112)

    def test_bottom_has_no_margin(self):
        assert not is_worm_collided(112.0, 16, 112)
        assert is_worm_collided(112.25, 16, 112)

    def test_reasons(self):
        assert check_worm_termination(10.0, 16, 112).reason == "hit_top_wall"
        assert check_worm_termination(120.0, 16, 112).reason == "hit_bottom_wall"
        assert not check_worm_termination(64.0, 16, 112).terminated
