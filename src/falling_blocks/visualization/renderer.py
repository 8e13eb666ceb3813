from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from falling_blocks.game import BASE_SHAPES, FallingBlockGame, GameState

from .palette import BACKGROUND, TEXT, color_for_value


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, game: FallingBlockGame) -> tuple[int, int]:
        width = self.margin * 3 + (game.board.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + game.board.height * self.cell_size
        return width, height

    def _font_or_default(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 20)
        return self._font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((0, 60, 0))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        font = self._font_or_default()
        left = self.margin * 2 + game.board.width * self.cell_size
        top = self.margin
        lines = [f"Score: {game.score()}", f"Lines: {game.lines_cleared()}", "Next:"]
        for i, text in enumerate(lines):
            screen.blit(font.render(text, True, TEXT), (left, top + i * 26))

        next_type = game.next_piece()
        if next_type is not None:
            shape = BASE_SHAPES[next_type]
            preview_top = top + len(lines) * 26 + 6
            for dy in range(shape.shape[0]):
                for dx in range(shape.shape[1]):
                    if shape[dy, dx]:
                        rect = pygame.Rect(
                            left + dx * self.cell_size,
                            preview_top + dy * self.cell_size,
                            self.cell_size - 1,
                            self.cell_size - 1,
                        )
                        pygame.draw.rect(screen, color_for_value(int(shape[dy, dx])), rect)

        status = {GameState.READY: "Press Enter", GameState.PAUSED: "Paused",
                  GameState.GAME_OVER: "Game Over - R"}.get(game.game_state())
        if status:
            bottom = self.margin + game.board.height * self.cell_size - 26
            screen.blit(font.render(status, True, (255, 0, 0)), (left, bottom))

    def draw(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(game.get_state()), (self.margin, self.margin))
        self._draw_panel(screen, game)
        pygame.display.flip()
