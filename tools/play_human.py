"""
Human Play Mode
================

Play gravity worm in a pygame window.

Controls:
    - Space (tap): Start / restart
    - Space (hold): Climb
    - Space (release): Fall
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT] [--fps FPS]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from gravity_worm.worm_core.config_loader import load_config, GameConfig
from gravity_worm.worm_core.game import CoreGame
from gravity_worm.worm_core.rules import Button


def key_to_button(key: int) -> Button:
    """Map a pygame key to the game's logical button."""
    return Button.ACTION if key == pygame.K_SPACE else Button.OTHER


class HumanPlayer:
    """
    Human-playable gravity worm.

    The event loop owns the game: every frame it forwards key events,
    feeds the frame time into ``CoreGame.advance`` and redraws from the
    render data.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: Optional[int] = None,
        show_fps: bool = True
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._game = CoreGame(
            config=config,
            seed=seed,
            width=window_width,
            height=window_height,
            on_game_over=self._on_game_over
        )
        self._config = self._game.config
        self._target_fps = target_fps or self._config.timing.max_fps
        self._show_fps = show_fps

        from gravity_worm.worm_core.render_pygame import PygameRenderer

        pygame.init()
        self._renderer = PygameRenderer(self._config)
        self._clock = pygame.time.Clock()
        self._running = True

    def _on_game_over(self, score: int) -> None:
        print(f"DEAD: score = {score}")
        print("Tap space to restart...")

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        print("Tap space to begin.")
        print("Hold to go up.")
        print("Release to fall.")

        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()
            self._game.advance(dt)
            self._render()

        self._renderer.close()
        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE and self._config.window.exit_on_esc:
                    self._running = False
                else:
                    self._game.press_btn(key_to_button(event.key))

            elif event.type == pygame.KEYUP:
                self._game.release_btn(key_to_button(event.key))

    def _render(self) -> None:
        """Render the game and refresh the window title."""
        self._renderer.render_to_screen(self._game.get_render_data())

        fps = self._clock.get_fps() if self._show_fps else None
        pygame.display.set_caption(self._game.title(fps))


def main():
    parser = argparse.ArgumentParser(description="Play gravity worm interactively")
    parser.add_argument("--seed", type=int, default=None, help="Prize spawn seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS")
    parser.add_argument("--no-fps", action="store_true", help="Hide FPS in the window title")

    args = parser.parse_args()

    try:
        player = HumanPlayer(
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            show_fps=not args.no_fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
