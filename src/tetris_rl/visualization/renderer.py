from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from tetris_rl.game import PieceShapes, TetrisGame


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (240, 240, 0),  # O
        5: (0, 240, 0),    # S
        6: (160, 0, 240),  # T
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Draws the visible board, ghost, previews, hold box and stats."""

    def __init__(self, cell_size: int = 28, margin: int = 20, preview_cell: int = 16) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cell = preview_cell
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        cfg = game.config
        board_w = cfg.width * self.cell_size
        board_h = cfg.visible_height * self.cell_size
        side_panel = 6 * self.preview_cell + self.margin * 2
        return board_w + side_panel + self.margin * 2, board_h + self.margin * 2

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x: int, y: int, size: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(ox + x * size, oy + y * size, size - 1, size - 1)

    def _draw_grid(self, screen: pygame.Surface, state: np.ndarray) -> None:
        h, w = state.shape
        for y in range(h):
            for x in range(w):
                color = _color_for_value(int(state[y, x]))
                pygame.draw.rect(screen, color, self._cell_rect(x, y, self.cell_size, self.margin, self.margin))

    def _draw_ghost(self, screen: pygame.Surface, game: TetrisGame) -> None:
        board = game.board
        hidden = game.config.hidden_rows
        ghost_y = board.ghost_y()
        shape = board.active.shape()
        ys, xs = np.nonzero(shape)
        for dy, dx in zip(ys, xs):
            gy = ghost_y + int(dy) - hidden
            if gy < 0:
                continue
            rect = self._cell_rect(board.active.x + int(dx), gy, self.cell_size, self.margin, self.margin)
            pygame.draw.rect(screen, (90, 90, 100), rect, width=2)

    def _draw_shape(self, screen: pygame.Surface, shape: Optional[np.ndarray], ox: int, oy: int) -> None:
        if shape is None:
            return
        ys, xs = np.nonzero(shape)
        for dy, dx in zip(ys, xs):
            color = _color_for_value(int(shape[dy, dx]))
            pygame.draw.rect(screen, color, self._cell_rect(int(dx), int(dy), self.preview_cell, ox, oy))

    def draw(self, screen: pygame.Surface, game: TetrisGame, high_score: int = 0, paused: bool = False) -> None:
        hidden = game.config.hidden_rows
        screen.fill((10, 10, 14))
        self._draw_grid(screen, game.get_state()[hidden:])
        if not game.game_over:
            self._draw_ghost(screen, game)

        font = self._font_obj()
        panel_x = self.margin * 2 + game.config.width * self.cell_size
        y = self.margin
        screen.blit(font.render("NEXT", True, (230, 230, 230)), (panel_x, y))
        y += 20
        view = game.view()
        previews = [view.next_brick_data(),
                    game.board.get_second_next_brick_data(),
                    game.board.get_third_next_brick_data()]
        for shape in previews:
            self._draw_shape(screen, shape, panel_x, y)
            y += 4 * self.preview_cell + 4

        screen.blit(font.render("HOLD", True, (230, 230, 230)), (panel_x, y))
        y += 20
        slot = game.hold_slot
        held = PieceShapes.get_shape(slot.piece, slot.rotation) if slot.piece is not None else None
        self._draw_shape(screen, held, panel_x, y)
        y += 4 * self.preview_cell + 10

        for label in (f"Score {game.score}", f"Best {max(high_score, game.score)}",
                      f"Level {game.level}", f"Lines {game.total_lines}"):
            screen.blit(font.render(label, True, (230, 230, 230)), (panel_x, y))
            y += 22

        banner = "GAME OVER - N: new game" if game.game_over else ("PAUSED" if paused else None)
        if banner:
            text = font.render(banner, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(self.margin + game.config.width * self.cell_size // 2,
                                                    screen.get_height() // 2)))
        pygame.display.flip()
