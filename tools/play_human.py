"""
Human Play Mode
================

Play Snake interactively with the keyboard. The pygame clock pumps the
engine's tick driver; the renderer is a pure projection of engine state.

Controls:
    - WASD / Arrow keys: Steer
    - Space / Enter: Start or restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--cell-size PX] [--fps FPS]
                               [--store PATH] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from snake_arcade.snake_core.config_loader import load_config, GameConfig
from snake_arcade.snake_core.game import SnakeEngine
from snake_arcade.snake_core.grid import FoodType
from snake_arcade.snake_core.persistence import JsonFileStore


class SnakeRenderer:
    """
    Neon-style renderer for human play mode.
    Draws board, legend, score header, effect bars and overlays.
    """

    HEADER_HEIGHT = 96
    EFFECT_BAR_HEIGHT = 34
    MARGIN = 16

    def __init__(self, config: GameConfig, cell_size: int):
        """Initialize renderer with neon palette."""
        self._config = config
        self._cell = cell_size
        self._grid_size = config.board.grid_size
        self._board_px = self._grid_size * cell_size

        # Colors
        self._bg = (8, 10, 18)
        self._board_bg = (0, 0, 0)
        self._grid_line = (12, 40, 52)
        self._head = (207, 250, 254)
        self._body = (6, 182, 212)
        self._text = (103, 232, 249)
        self._text_muted = (14, 116, 144)
        self._game_over = (239, 68, 68)
        self._overlay = (0, 0, 0, 200)

        # Fonts
        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 36)
        self._font_medium = pygame.font.Font(None, 26)
        self._font_small = pygame.font.Font(None, 20)

        self._board_x = self.MARGIN
        self._board_y = self.MARGIN + self.HEADER_HEIGHT + self.EFFECT_BAR_HEIGHT

    @property
    def window_size(self):
        width = self._board_px + 2 * self.MARGIN
        height = self._board_y + self._board_px + self.MARGIN
        return (width, height)

    def render(self, screen: "pygame.Surface", data: Dict[str, Any]) -> None:
        """Render one frame from engine render data."""
        screen.fill(self._bg)
        self._draw_header(screen, data)
        self._draw_effects(screen, data)
        self._draw_board(screen, data)
        if not data["is_playing"] or data["game_over"]:
            self._draw_overlay(screen, data)

    def _draw_header(self, screen, data: Dict[str, Any]) -> None:
        title = self._font_large.render("NEON SNAKE", True, self._text)
        screen.blit(title, (self.MARGIN, self.MARGIN))

        # Legend
        x = self.MARGIN
        y = self.MARGIN + 40
        for food_type in FoodType:
            kind = self._config.get_food_kind(food_type)
            pygame.draw.rect(screen, kind.color, pygame.Rect(x, y + 4, 8, 8))
            label = self._font_small.render(kind.label, True, kind.color)
            screen.blit(label, (x + 14, y))
            x += 14 + label.get_width() + 18

        score = self._font_medium.render(f"SCORE: {data['score']:04d}", True, self._text)
        best = self._font_small.render(f"BEST: {data['high_score']:04d}", True, self._text_muted)
        right = self.window_size[0] - self.MARGIN
        screen.blit(score, (right - score.get_width(), self.MARGIN + 4))
        screen.blit(best, (right - best.get_width(), self.MARGIN + 32))

    def _draw_effects(self, screen, data: Dict[str, Any]) -> None:
        x = self.MARGIN
        y = self.MARGIN + self.HEADER_HEIGHT
        for effect in data["effects"]:
            label = self._font_small.render(effect["label"].upper(), True, effect["color"])
            screen.blit(label, (x, y))
            bar_x = x + label.get_width() + 8
            pygame.draw.rect(screen, (30, 30, 40), pygame.Rect(bar_x, y + 4, 48, 6))
            fill = int(48 * effect["progress"])
            pygame.draw.rect(screen, effect["color"], pygame.Rect(bar_x, y + 4, fill, 6))
            x = bar_x + 48 + 24

    def _cell_rect(self, x: int, y: int) -> "pygame.Rect":
        return pygame.Rect(
            self._board_x + x * self._cell,
            self._board_y + y * self._cell,
            self._cell,
            self._cell
        )

    def _draw_board(self, screen, data: Dict[str, Any]) -> None:
        board = pygame.Rect(self._board_x, self._board_y, self._board_px, self._board_px)
        pygame.draw.rect(screen, self._board_bg, board)
        for i in range(self._grid_size + 1):
            offset = i * self._cell
            pygame.draw.line(screen, self._grid_line,
                             (self._board_x + offset, self._board_y),
                             (self._board_x + offset, self._board_y + self._board_px))
            pygame.draw.line(screen, self._grid_line,
                             (self._board_x, self._board_y + offset),
                             (self._board_x + self._board_px, self._board_y + offset))

        food = data["food"]
        pygame.draw.rect(screen, food["color"], self._cell_rect(food["x"], food["y"]).inflate(-4, -4))

        for x, y in data["snake"][1:]:
            pygame.draw.rect(screen, self._body, self._cell_rect(x, y).inflate(-2, -2))
        hx, hy = data["head"]
        pygame.draw.rect(screen, self._head, self._cell_rect(hx, hy))

        pygame.draw.rect(screen, self._body, board, width=1)

    def _draw_overlay(self, screen, data: Dict[str, Any]) -> None:
        overlay = pygame.Surface((self._board_px, self._board_px), pygame.SRCALPHA)
        overlay.fill(self._overlay)
        screen.blit(overlay, (self._board_x, self._board_y))

        cx = self._board_x + self._board_px // 2
        cy = self._board_y + self._board_px // 2

        if data["game_over"]:
            text = "BOARD CLEARED" if data["won"] else "GAME OVER"
            title = self._font_huge.render(text, True, self._game_over)
            score = self._font_medium.render(f"SCORE: {data['score']}", True, self._text)
            prompt = self._font_small.render("SPACE TO REBOOT SYSTEM", True, self._text_muted)
        else:
            title = self._font_large.render("SYSTEM READY", True, self._text)
            score = self._font_small.render("W A S D  TO MOVE", True, self._text_muted)
            prompt = self._font_small.render("SPACE TO INITIATE", True, self._text_muted)

        screen.blit(title, title.get_rect(center=(cx, cy - 30)))
        screen.blit(score, score.get_rect(center=(cx, cy + 10)))
        screen.blit(prompt, prompt.get_rect(center=(cx, cy + 40)))


class HumanPlayer:
    """
    Human-playable snake game driven by the pygame clock.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        cell_size: int = 24,
        target_fps: int = 60,
        store_path: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        if store_path is None:
            store_path = config.persistence.high_score_path
        self._engine = SnakeEngine(config=config, store=JsonFileStore(store_path), seed=seed)

        pygame.init()
        self._renderer = SnakeRenderer(config, cell_size)
        self._screen = pygame.display.set_mode(self._renderer.window_size)
        pygame.display.set_caption("Neon Snake")
        self._clock = pygame.time.Clock()

        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the high score."""
        print("=== Snake ===")
        print("WASD or arrows to steer, Space to start")
        print("ESC to quit")
        print()

        while self._running:
            self._handle_events()
            self._engine.update(pygame.time.get_ticks())
            self._render()
            self._clock.tick(self._target_fps)

        self._engine.stop()
        pygame.quit()
        return self._engine.state.high_score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                    if not self._engine.state.is_playing:
                        self._engine.start(pygame.time.get_ticks())
                else:
                    # Key names from pygame match the latch bindings ("w", "up", ...)
                    self._engine.handle_key(pygame.key.name(event.key))

    def _render(self) -> None:
        self._renderer.render(self._screen, self._engine.get_render_data())
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Snake interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--cell-size", type=int, default=24, help="Cell size in pixels (default: 24)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--store", type=str, default=None, help="High score file (default from config)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            cell_size=args.cell_size,
            target_fps=args.fps,
            store_path=args.store
        )
        high_score = player.run()
        print(f"\nHigh Score: {high_score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
