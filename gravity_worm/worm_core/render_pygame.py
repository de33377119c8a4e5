"""
Pygame Renderer
===============

Draws the game with pygame rectangles, either into the game window or
into an off-screen surface converted to an RGB array.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from gravity_worm.worm_core.config_loader import GameConfig, get_config


class PygameRenderer:
    """
    Renderer using pygame.

    Supports:
    - Wall, worm trail and prize rectangles scaled by block width
    - Start / death message overlay
    - Screen display for human mode
    - RGB array output for agents
    """

    def __init__(self, config: Optional[GameConfig] = None, show_text: bool = True):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
            show_text: Whether to draw the status message overlay.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._show_text = show_text

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        self._font: Optional[pygame.font.Font] = None
        if show_text:
            pygame.font.init()
            self._font = pygame.font.Font(None, 28)

    def render(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width. Board width if None.
            height: Output image height. Board height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        board_size = (int(render_data["board_width"]), int(render_data["board_height"]))
        surface = pygame.Surface(board_size)
        self.draw(surface, render_data)

        out_size = (width or board_size[0], height or board_size[1])
        if out_size != board_size:
            surface = pygame.transform.scale(surface, out_size)

        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, render_data: Dict[str, Any]) -> pygame.Surface:
        """
        Render to the pygame window, creating it if needed.

        Args:
            render_data: Data from CoreGame.get_render_data().
        """
        size = (int(render_data["board_width"]), int(render_data["board_height"]))
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption(self._config.window.title)

        self.draw(self._screen, render_data)
        pygame.display.flip()
        return self._screen

    def draw(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Draw game state onto a surface. Reads render data only."""
        w = int(render_data["block_width"])
        board_h = int(render_data["board_height"])

        surface.fill(render_data["background_color"])

        wall = render_data["wall_color"]
        for i, h in enumerate(render_data["cave_top"]):
            pygame.draw.rect(surface, wall, pygame.Rect(w * i, 0, w, w * h + w))
        for i, h in enumerate(render_data["cave_bottom"]):
            pygame.draw.rect(surface, wall, pygame.Rect(w * i, w * h, w, board_h - w * h))

        prize = render_data["prize_color"]
        for column, row in render_data["prizes"]:
            pygame.draw.rect(surface, prize, pygame.Rect(w * column, w * row, w, w))

        for i, (h, color) in enumerate(render_data["worm"]):
            pygame.draw.rect(surface, color, pygame.Rect(w * i, int(round(w * h)), w, w))

        if self._show_text:
            self._draw_message(surface, render_data)

    def _draw_message(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Centered status line for the Before and Dead states."""
        status = render_data["status"]
        if status == "before":
            text = "Tap space to begin. Hold to go up, release to fall."
        elif status == "dead":
            text = f"DEAD: score = {render_data['score']}. Tap space to restart."
        else:
            return

        label = self._font.render(text, True, render_data["text_color"], render_data["background_color"])
        x = (surface.get_width() - label.get_width()) // 2
        y = (surface.get_height() - label.get_height()) // 2
        surface.blit(label, (x, y))

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
            pygame.display.quit()
