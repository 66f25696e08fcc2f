from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from retro_tetris.game import TetrisGame


Color = Tuple[int, int, int]

BACKGROUND: Color = (38, 38, 38)
BORDER: Color = (178, 178, 178)
TEXT: Color = (255, 255, 255)
HIGHLIGHT: Color = (255, 255, 0)
GAME_OVER: Color = (255, 0, 0)

PANEL_WIDTH = 180
PANEL_GAP = 20
BORDER_THICKNESS = 3
PREVIEW_CELL = 18


def color_for_value(v: int) -> Color:
    palette = {
        0: (0, 0, 0),
        1: (0, 230, 230),  # I
        2: (0, 0, 230),    # O
        3: (153, 0, 230),  # T
        4: (0, 230, 0),    # S
        5: (230, 0, 0),    # Z
        6: (230, 128, 0),  # J
        7: (230, 230, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


def _shade(color: Color, factor: float) -> Color:
    return tuple(max(0, min(255, int(c * factor))) for c in color)  # type: ignore[return-value]


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._fonts: dict[int, pygame.font.Font] = {}

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        width = self.margin * 2 + game.grid.width * self.cell_size + PANEL_GAP + PANEL_WIDTH
        height = self.margin * 2 + game.grid.height * self.cell_size
        return width, height

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont(None, size)
        return self._fonts[size]

    def _draw_block(self, surf: pygame.Surface, px: int, py: int, size: int, value: int) -> None:
        color = color_for_value(value)
        rect = pygame.Rect(px, py, size - 1, size - 1)
        pygame.draw.rect(surf, color, rect)
        # Bevel: light top-left edges, dark bottom-right edges
        bevel = max(1, size // 8)
        pygame.draw.rect(surf, _shade(color, 1.35), (px, py, size - 1, bevel))
        pygame.draw.rect(surf, _shade(color, 1.35), (px, py, bevel, size - 1))
        pygame.draw.rect(surf, _shade(color, 0.55), (px, py + size - 1 - bevel, size - 1, bevel))
        pygame.draw.rect(surf, _shade(color, 0.55), (px + size - 1 - bevel, py, bevel, size - 1))

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(color_for_value(0))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v:
                    self._draw_block(surf, x * self.cell_size, y * self.cell_size, self.cell_size, v)
        return surf

    def _draw_panel(self, screen: pygame.Surface, x: int, y: int, height: int, title: str,
                    value: Optional[int] = None) -> None:
        pygame.draw.rect(screen, TEXT, pygame.Rect(x, y, PANEL_WIDTH, height), BORDER_THICKNESS)
        screen.blit(self._font(24).render(title, True, TEXT), (x + 10, y + 8))
        if value is not None:
            screen.blit(self._font(30).render(str(value), True, TEXT), (x + 20, y + 34))

    def _draw_next(self, screen: pygame.Surface, game: TetrisGame, x: int, y: int) -> None:
        self._draw_panel(screen, x, y, 110, "NEXT")
        shape = game.next_piece.shape
        origin_x = x + 60
        origin_y = y + 30
        for i in range(shape.shape[0]):
            for j in range(shape.shape[1]):
                if shape[i, j]:
                    self._draw_block(screen, origin_x + j * PREVIEW_CELL, origin_y + i * PREVIEW_CELL,
                                     PREVIEW_CELL, int(shape[i, j]))

    def _draw_overlay(self, screen: pygame.Surface, alpha: int, lines: list[tuple[str, int, Color]]) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, alpha))
        screen.blit(overlay, (0, 0))
        cx = screen.get_width() // 2
        cy = screen.get_height() // 2 - (len(lines) - 1) * 25
        for i, (text, size, color) in enumerate(lines):
            img = self._font(size).render(text, True, color)
            screen.blit(img, img.get_rect(center=(cx, cy + i * 50)))

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> None:
        screen.fill(BACKGROUND)

        board_w = game.grid.width * self.cell_size
        board_h = game.grid.height * self.cell_size
        screen.blit(self._grid_surface(game.get_state()), (self.margin, self.margin))
        border = pygame.Rect(self.margin - BORDER_THICKNESS, self.margin - BORDER_THICKNESS,
                             board_w + 2 * BORDER_THICKNESS, board_h + 2 * BORDER_THICKNESS)
        pygame.draw.rect(screen, BORDER, border, BORDER_THICKNESS)

        panel_x = self.margin + board_w + PANEL_GAP
        self._draw_next(screen, game, panel_x, self.margin)
        self._draw_panel(screen, panel_x, self.margin + 130, 80, "SCORE", game.get_score())
        self._draw_panel(screen, panel_x, self.margin + 230, 80, "LINES", game.get_lines())

        if not game.has_started():
            self._draw_overlay(screen, 204, [
                ("TETRIS", 72, TEXT),
                ("PRESS SPACE TO START", 30, HIGHLIGHT),
            ])
        elif game.is_paused():
            self._draw_overlay(screen, 178, [
                ("PAUSED", 48, HIGHLIGHT),
                ("PRESS SPACE TO RESUME", 30, (230, 230, 230)),
            ])
        elif game.is_game_over():
            self._draw_overlay(screen, 204, [
                ("GAME OVER", 48, GAME_OVER),
                (f"SCORE: {game.get_score()}", 34, TEXT),
                (f"LINES CLEARED: {game.get_lines()}", 34, TEXT),
                ("PRESS R TO RESTART", 30, HIGHLIGHT),
            ])

        pygame.display.flip()
