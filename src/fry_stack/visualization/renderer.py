from __future__ import annotations

from typing import List, Optional

import numpy as np
import pygame

from fry_stack.game import CellType, GameSnapshot, GameState, Piece
from .palette import CELL_GLYPHS, THEMES, Theme, color_for_value

PREVIEW_CELLS = 4


class Renderer:
    """Draws a `GameSnapshot`: board on the left, stats and next piece on the right."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_width: int = 220, theme: str = "dark") -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self.theme_name = theme
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def theme(self) -> Theme:
        return THEMES[self.theme_name]

    def toggle_theme(self) -> None:
        self.theme_name = "light" if self.theme_name == "dark" else "dark"

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        return (
            width * self.cell_size + self.panel_width + self.margin * 3,
            height * self.cell_size + self.margin * 2,
        )

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 48)
        return self._font, self._big_font

    def _draw_cell(self, surf: pygame.Surface, value: int, x: int, y: int, size: int) -> None:
        rect = pygame.Rect(x, y, size - 1, size - 1)
        pygame.draw.rect(surf, color_for_value(value, self.theme), rect)
        glyph = CELL_GLYPHS.get(CellType(value)) if value != CellType.EMPTY else None
        if glyph:
            font, _ = self._fonts()
            img = font.render(glyph, True, (20, 20, 20))
            surf.blit(img, img.get_rect(center=rect.center))

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(self.theme.board)
        for y in range(h):
            for x in range(w):
                self._draw_cell(surf, int(state[y, x]), x * self.cell_size, y * self.cell_size, self.cell_size)
        return surf

    def _preview_surface(self, piece: Optional[Piece]) -> pygame.Surface:
        size = self.cell_size * PREVIEW_CELLS
        surf = pygame.Surface((size, size))
        surf.fill(self.theme.board)
        grid = np.zeros((PREVIEW_CELLS, PREVIEW_CELLS), dtype=np.int8)
        if piece is not None:
            cells = piece.shape.cells
            h, w = cells.shape
            y0 = (PREVIEW_CELLS - h) // 2
            x0 = (PREVIEW_CELLS - w) // 2
            grid[y0 : y0 + h, x0 : x0 + w] = cells
        for y in range(PREVIEW_CELLS):
            for x in range(PREVIEW_CELLS):
                self._draw_cell(surf, int(grid[y, x]), x * self.cell_size, y * self.cell_size, self.cell_size)
        return surf

    def _panel_lines(self, snapshot: GameSnapshot) -> List[str]:
        return [
            f"SCORE  {snapshot.score}",
            f"HIGH   {snapshot.high_score}",
            f"LEVEL  {snapshot.level}",
            f"TIMER  {snapshot.level_countdown_seconds}",
            f"MODE   {snapshot.difficulty.name}",
            "",
            "Arrows: move / rotate / drop",
            "Space: hard drop   P: pause",
        ]

    def _overlay_text(self, snapshot: GameSnapshot) -> List[str]:
        if snapshot.state is GameState.IDLE:
            return ["Fry Stack", "1/2/3 difficulty", "Enter to start"]
        if snapshot.state is GameState.GAME_OVER:
            return ["Game Over", f"Score {snapshot.score}", "Enter to play again"]
        if snapshot.state is GameState.PAUSED:
            return ["Paused", "P to resume"]
        return []

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font, big_font = self._fonts()
        theme = self.theme
        screen.fill(theme.background)

        grid_surf = self._grid_surface(snapshot.board)
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        y = self.margin
        label = font.render("NEXT", True, theme.accent)
        screen.blit(label, (panel_x, y))
        y += label.get_height() + 6
        screen.blit(self._preview_surface(snapshot.next_piece), (panel_x, y))
        y += self.cell_size * PREVIEW_CELLS + 16
        for line in self._panel_lines(snapshot):
            img = font.render(line, True, theme.text)
            screen.blit(img, (panel_x, y))
            y += 24

        lines = self._overlay_text(snapshot)
        if lines:
            shade = pygame.Surface(grid_surf.get_size(), pygame.SRCALPHA)
            shade.fill((0, 0, 0, 140))
            screen.blit(shade, (self.margin, self.margin))
            cx = self.margin + grid_surf.get_width() // 2
            cy = self.margin + grid_surf.get_height() // 2 - 30 * (len(lines) - 1) // 2
            for i, line in enumerate(lines):
                f = big_font if i == 0 else font
                img = f.render(line, True, theme.accent if i == 0 else (255, 255, 255))
                screen.blit(img, img.get_rect(center=(cx, cy + i * 36)))

        pygame.display.flip()
