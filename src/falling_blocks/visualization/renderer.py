from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import Piece, Snapshot, color_rgb


BACKGROUND = (10, 10, 14)
EMPTY = (30, 30, 36)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY
    return color_rgb(abs(v))


def _flatten(cells: np.ndarray) -> np.ndarray:
    """Front view of a volume: the nearest occupied layer per (y, x)."""
    if cells.ndim == 2:
        return cells
    nearest = np.argmax(cells != 0, axis=0)
    return np.take_along_axis(cells, nearest[np.newaxis], axis=0)[0]


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board_shape: Tuple[int, ...]) -> Tuple[int, int]:
        h, w = board_shape[-2:]
        return (
            w * self.cell_size + self.margin * 3 + self.panel_width,
            h * self.cell_size + self.margin * 2,
        )

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _rect(self, x: int, y: int, ox: int = 0, oy: int = 0) -> pygame.Rect:
        return pygame.Rect(
            ox + x * self.cell_size,
            oy + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, cells: np.ndarray) -> pygame.Surface:
        h, w = cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(EMPTY)
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(cells[y, x])), self._rect(x, y))
        return surf

    def _draw_piece(self, surf: pygame.Surface, piece: Piece, outline: bool = False) -> None:
        color = color_rgb(piece.color_id)
        for coord in piece.cells():
            y, x = int(coord[-2]), int(coord[-1])
            if y < 0:
                continue
            pygame.draw.rect(surf, color, self._rect(x, y), 2 if outline else 0)

    def _draw_preview(self, screen: pygame.Surface, label: str, piece: Optional[Piece], ox: int, oy: int) -> None:
        font = self._font_obj()
        screen.blit(font.render(label, True, TEXT), (ox, oy))
        if piece is None:
            return
        shape = _flatten(piece.shape)
        h, w = shape.shape
        for y in range(h):
            for x in range(w):
                if shape[y, x]:
                    rect = self._rect(x, y, ox, oy + 30)
                    pygame.draw.rect(screen, color_rgb(piece.color_id), rect)

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        grid_surf = self._grid_surface(_flatten(snapshot.board))
        if snapshot.ghost is not None:
            self._draw_piece(grid_surf, snapshot.ghost, outline=True)
        if snapshot.active is not None:
            self._draw_piece(grid_surf, snapshot.active)

        screen.fill(BACKGROUND)
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        self._draw_preview(screen, "Next", snapshot.next_piece, panel_x, self.margin)
        self._draw_preview(screen, "Hold", snapshot.stored, panel_x, self.margin + 160)

        font = self._font_obj()
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared}",
            f"High Score: {snapshot.high_score}",
        ]
        for i, text in enumerate(lines):
            screen.blit(font.render(text, True, TEXT), (panel_x, self.margin + 320 + i * 30))

        if snapshot.game_over:
            text = font.render("Game Over - R to restart, ESC to quit", True, TEXT)
            screen.blit(text, text.get_rect(center=(screen.get_width() // 2, self.margin // 2 + 4)))
        pygame.display.flip()
