from __future__ import annotations

from typing import Optional

import pygame

from falling_blocks.game import GameStatus, Snapshot
from .palette import rgb_for_color


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_h: int = 40) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_h = panel_h
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 2,
            height * self.cell_size + self.margin * 2 + self.panel_h,
        )

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 22, bold=True)
        return self._font

    def _grid_surface(self, snapshot: Snapshot) -> pygame.Surface:
        h = len(snapshot.cells)
        w = len(snapshot.cells[0]) if h else 0
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((0, 0, 0))
        overlay = {(x, y): color for x, y, color in snapshot.active_piece_cells}
        for y, row in enumerate(snapshot.cells):
            for x, cell in enumerate(row):
                color = overlay.get((x, y), cell.color if cell.filled else None)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, rgb_for_color(color), rect)
        return surf

    def _banner(self, screen: pygame.Surface, text: str, color: tuple[int, int, int]) -> None:
        w = screen.get_width()
        h = screen.get_height() - self.panel_h
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 190))
        screen.blit(shade, (0, 0))
        img = self._font_obj().render(text, True, color)
        screen.blit(img, img.get_rect(center=(w // 2, h // 2)))

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        screen.fill((26, 26, 26))
        grid_surf = self._grid_surface(snapshot)
        screen.blit(grid_surf, (self.margin, self.margin))

        if snapshot.status is GameStatus.GAME_OVER:
            self._banner(screen, "GAME OVER", (255, 0, 0))
        elif snapshot.status is GameStatus.PAUSED:
            self._banner(screen, "PAUSED", (255, 255, 255))
        elif snapshot.status is GameStatus.IDLE:
            self._banner(screen, "ENTER TO START", (255, 255, 255))

        score = self._font_obj().render(f"SCORE: {snapshot.score:04d}", True, (255, 255, 255))
        screen.blit(score, (self.margin, screen.get_height() - self.panel_h + 8))
        pygame.display.flip()
