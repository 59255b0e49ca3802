from __future__ import annotations

from typing import Optional, Tuple

import pygame

from complex_tetris.complexlib import ComplexFunction, function_label
from complex_tetris.game import PIECE_COLORS, SHAPES, GameState, ShapeType
from complex_tetris.game.grid import piece_cells


BACKGROUND = (10, 10, 14)
BOARD_BACKGROUND = (0, 0, 0)
GRID_LINE = (51, 51, 51)
TEXT = (230, 230, 230)


def color_for_value(v: int) -> pygame.Color:
    """Colour of a board marker; negative values are the falling piece."""
    if v == 0:
        return pygame.Color(BOARD_BACKGROUND)
    try:
        return pygame.Color(PIECE_COLORS[ShapeType(abs(v))])
    except ValueError:
        return pygame.Color(200, 200, 200)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 200) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.panel_width + self.margin * 3,
            height * self.cell_size + self.margin * 2,
        )

    def _cell_rect(self, x: int, y: int, origin: Tuple[int, int]) -> pygame.Rect:
        ox, oy = origin
        return pygame.Rect(
            ox + x * self.cell_size + 1,
            oy + y * self.cell_size + 1,
            self.cell_size - 2,
            self.cell_size - 2,
        )

    def _board_surface(self, state: GameState) -> pygame.Surface:
        h, w = state.board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BOARD_BACKGROUND)
        for y in range(h + 1):
            pygame.draw.line(surf, GRID_LINE, (0, y * self.cell_size), (w * self.cell_size, y * self.cell_size))
        for x in range(w + 1):
            pygame.draw.line(surf, GRID_LINE, (x * self.cell_size, 0), (x * self.cell_size, h * self.cell_size))

        for y in range(h):
            for x in range(w):
                v = int(state.board[y, x])
                if v:
                    rect = self._cell_rect(x, y, (0, 0))
                    pygame.draw.rect(surf, color_for_value(v), rect)
                    pygame.draw.rect(surf, BOARD_BACKGROUND, rect, 1)

        if not state.game_over:
            color = pygame.Color(PIECE_COLORS[state.piece_type])
            for x, y in piece_cells(state.piece, state.position):
                # Rows above the board are part of the piece but not drawn
                if 0 <= y < h and 0 <= x < w:
                    rect = self._cell_rect(x, y, (0, 0))
                    pygame.draw.rect(surf, color, rect)
                    pygame.draw.rect(surf, (255, 255, 255), rect, 2)
        return surf

    def _draw_next(self, screen: pygame.Surface, kind: ShapeType, origin: Tuple[int, int]) -> None:
        size = self.cell_size // 2
        ox, oy = origin
        color = pygame.Color(PIECE_COLORS[kind])
        for pos in SHAPES[kind]:
            rect = pygame.Rect(ox + (int(pos.re) + 1) * size, oy + int(pos.im) * size, size - 1, size - 1)
            pygame.draw.rect(screen, color, rect)

    def _draw_panel(
        self,
        screen: pygame.Surface,
        state: GameState,
        origin: Tuple[int, int],
        transform_kind: Optional[ComplexFunction],
    ) -> None:
        x, y = origin
        lines = [
            f"Score  {state.score}",
            f"Level  {state.level}",
            f"Lines  {state.lines}",
        ]
        if transform_kind is not None:
            lines.append(function_label(transform_kind))
        for text in lines:
            screen.blit(self.font.render(text, True, TEXT), (x, y))
            y += 28
        y += 8
        screen.blit(self.font.render("Next", True, TEXT), (x, y))
        self._draw_next(screen, state.next_type, (x, y + 28))
        y += 80
        if state.game_over:
            status = "Game Over - R to restart"
        elif state.is_paused:
            status = "Paused - P to resume"
        else:
            status = ""
        if status:
            screen.blit(self.font.render(status, True, (255, 120, 120)), (x, y))

    def draw(
        self,
        screen: pygame.Surface,
        state: GameState,
        transform_kind: Optional[ComplexFunction] = None,
    ) -> None:
        board_surf = self._board_surface(state)
        screen.fill(BACKGROUND)
        screen.blit(board_surf, (self.margin, self.margin))
        panel_x = self.margin * 2 + board_surf.get_width()
        self._draw_panel(screen, state, (panel_x, self.margin), transform_kind)
