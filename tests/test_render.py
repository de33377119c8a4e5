"""
Tests for the renderers. Both read render data only.
"""

import numpy as np
import pytest

from gravity_worm.worm_core.game import CoreGame
from gravity_worm.worm_core.render_solid import SolidRenderer


@pytest.fixture
def render_data(config, never_spawn):
    game = CoreGame(config=config, rng=never_spawn)
    game.prizes.add(100, 50)
    return game.get_render_data()


class TestSolidRenderer:
    """Test numpy rendering."""

    def test_native_size(self, config, render_data):
        img = SolidRenderer(config).render(render_data)
        assert img.shape == (512, 512, 3)
        assert img.dtype == np.uint8

    def test_walls(self, config, render_data):
        """Top wall covers rows 0..(16+1)*4, bottom wall starts at 112*4."""
        img = SolidRenderer(config).render(render_data)
        wall = list(config.colors.wall)
        background = list(config.colors.background)
        assert img[67, 0].tolist() == wall
        assert img[68, 0].tolist() == background
        assert img[447, 0].tolist() == background
        assert img[448, 0].tolist() == wall
        assert img[511, 511].tolist() == wall

    def test_worm_and_prize(self, config, render_data):
        img = SolidRenderer(config).render(render_data)
        assert img[256, 0].tolist() == list(config.worm.color_rising)
        assert img[256, 255].tolist() == list(config.worm.color_rising)
        assert img[256, 256].tolist() == list(config.colors.background)
        assert img[200, 400].tolist() == list(config.colors.prize)

    def test_resample(self, config, render_data):
        img = SolidRenderer(config).render(render_data, 128, 96)
        assert img.shape == (96, 128, 3)
        assert img[0, 0].tolist() == list(config.colors.wall)


class TestPygameRenderer:
    """Test pygame rendering on a dummy video driver."""

    @pytest.fixture
    def renderer(self, config, monkeypatch):
        pytest.importorskip("pygame")
        monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
        from gravity_worm.worm_core.render_pygame import PygameRenderer

        renderer = PygameRenderer(config, show_text=False)
        yield renderer
        renderer.close()

    def test_matches_solid_renderer(self, config, renderer, render_data):
        """Without text both renderers draw identical pixels."""
        solid = SolidRenderer(config).render(render_data)
        drawn = renderer.render(render_data)
        assert drawn.shape == solid.shape
        assert np.array_equal(drawn, solid)

    def test_scaled_output(self, renderer, render_data):
        img = renderer.render(render_data, 64, 64)
        assert img.shape == (64, 64, 3)
