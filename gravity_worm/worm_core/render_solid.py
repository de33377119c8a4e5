"""
Solid Renderer
==============

Fast numpy-based renderer that draws the cave, worm and prizes as
solid-colour blocks. Reads only the render data dict, never the game.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import numpy as np

from gravity_worm.worm_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the board to an RGB array without pygame.

    The board is drawn at native pixel size and then resampled
    (nearest neighbour) to the requested output size.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

    def render(
        self,
        render_data: Dict[str, Any],
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width. Board width if None.
            height: Output image height. Board height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        board_w = int(render_data["board_width"])
        board_h = int(render_data["board_height"])
        w = int(render_data["block_width"])

        img = np.empty((board_h, board_w, 3), dtype=np.uint8)
        img[:] = np.array(render_data["background_color"], dtype=np.uint8)

        wall = np.array(render_data["wall_color"], dtype=np.uint8)

        # Top wall spans from the screen top down to (top + 1) blocks
        for i, h in enumerate(render_data["cave_top"]):
            self._fill_rect(img, w * i, 0, w, w * h + w, wall)

        # Bottom wall spans from `bottom` blocks to the screen bottom
        for i, h in enumerate(render_data["cave_bottom"]):
            self._fill_rect(img, w * i, w * h, w, board_h - w * h, wall)

        prize = np.array(render_data["prize_color"], dtype=np.uint8)
        for column, row in render_data["prizes"]:
            self._fill_rect(img, w * column, w * row, w, w, prize)

        for i, (h, color) in enumerate(render_data["worm"]):
            self._fill_rect(img, w * i, int(round(w * h)), w, w, np.array(color, dtype=np.uint8))

        out_w = board_w if width is None else width
        out_h = board_h if height is None else height
        if (out_w, out_h) != (board_w, board_h):
            img = self._resample(img, out_w, out_h)
        return img

    @staticmethod
    def _fill_rect(
        img: np.ndarray,
        x: int,
        y: int,
        w: int,
        h: int,
        color: np.ndarray
    ) -> None:
        """Fill a rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x0 = max(0, x)
        y0 = max(0, y)
        x1 = min(width, x + w)
        y1 = min(height, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        img[y0:y1, x0:x1] = color

    @staticmethod
    def _resample(img: np.ndarray, width: int, height: int) -> np.ndarray:
        src_h, src_w = img.shape[:2]
        rows = (np.arange(height) * src_h // height).astype(np.intp)
        cols = (np.arange(width) * src_w // width).astype(np.intp)
        return img[rows][:, cols]

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """
        Render to screen (no-op for solid renderer).

        Use PygameRenderer for screen display.
        """
        pass

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
