from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .config import GameConfig
from .controller import ActivePiece
from .grid import ClearResult, Grid, check_removing, empty_grid, landing_y, merge
from .pieces import PieceShapes, Shape, TetrominoType
from .rules import Score, ScoringRules
from .supply import BagRandomizer


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ViewData:
    """What a renderer needs for the falling piece and the next preview."""

    brick: Shape = field(repr=False)
    x: int
    y: int
    next_brick: Shape = field(repr=False)

    def brick_data(self) -> Shape:
        return self.brick.copy()

    def next_brick_data(self) -> Shape:
        return self.next_brick.copy()


class Board:
    """Owns the grid, the active piece and the piece supply.

    Commands return plain booleans: False from a move means it was blocked,
    True from ``create_new_brick``/``set_brick`` means the spawn pose already
    collides, which the caller treats as game over.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 supply: Optional[BagRandomizer] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.width = self.config.width
        self.height = self.config.height
        self.supply = supply or BagRandomizer(random.Random(self.config.random_seed),
                                              depth=self.config.preview_depth)
        self._grid = empty_grid(self.width, self.height)
        self.active = ActivePiece(lambda: self._grid, self.config.spawn_x, self.config.spawn_y)
        self.score = Score()

    def move_brick_down(self) -> bool:
        return self.active.move_down()

    def move_brick_left(self) -> bool:
        return self.active.move_left()

    def move_brick_right(self) -> bool:
        return self.active.move_right()

    def rotate_left_brick(self) -> bool:
        return self.active.rotate()

    def create_new_brick(self) -> bool:
        piece = self.supply.get_brick()
        collided = self.active.spawn(piece)
        logger.debug("spawned %s at %s (collided=%s)", piece.name, self.active.offset, collided)
        return collided

    def set_brick(self, piece: TetrominoType, rotation: int) -> bool:
        return self.active.set_piece(piece, rotation)

    def merge_brick_to_background(self) -> None:
        self._grid = merge(self._grid, self.active.shape(), self.active.x, self.active.y)

    def clear_rows(self) -> ClearResult:
        result = check_removing(self._grid, self.rules.score_for_lines)
        self._grid = result.new_grid()
        if result.lines_removed:
            logger.debug("cleared rows %s, bonus %d", list(result.cleared_rows), result.score_bonus)
        return result

    def new_game(self) -> bool:
        self._grid = empty_grid(self.width, self.height)
        self.score.reset()
        return self.create_new_brick()

    def get_board_matrix(self) -> Grid:
        return self._grid.copy()

    def set_board_matrix(self, matrix: Grid) -> None:
        """Replace the locked cells, e.g. to start from a prepared position."""
        matrix = np.asarray(matrix)
        if matrix.shape != (self.height, self.width):
            raise ValueError(f"expected a {self.height}x{self.width} matrix, got {matrix.shape}")
        if matrix.min() < 0 or matrix.max() > len(TetrominoType):
            raise ValueError("cell values must be in 0..7")
        self._grid = matrix.astype(self._grid.dtype, copy=True)

    def reseed(self, seed: Optional[int]) -> None:
        self.supply = BagRandomizer(random.Random(seed), depth=self.config.preview_depth)

    def visible_matrix(self) -> Grid:
        return self._grid[self.config.hidden_rows:].copy()

    def get_view_data(self) -> ViewData:
        return ViewData(
            brick=self.active.shape(),
            x=self.active.x,
            y=self.active.y,
            next_brick=PieceShapes.get_shape(self.supply.get_next_brick(), 0),
        )

    def get_second_next_brick_data(self) -> Shape:
        return PieceShapes.get_shape(self.supply.get_second_next_brick(), 0)

    def get_third_next_brick_data(self) -> Shape:
        return PieceShapes.get_shape(self.supply.get_third_next_brick(), 0)

    def ghost_y(self) -> int:
        """Row the active piece would lock at if dropped now. Never mutates state."""
        return landing_y(self._grid, self.active.shape(), self.active.x, self.active.y)

    def overlay(self) -> np.ndarray:
        # Falling piece shown as negative ids over a copy of the grid
        state = self._grid.copy()
        if self.active.has_piece:
            for x, y in self.active.cells():
                if 0 <= y < self.height and 0 <= x < self.width:
                    state[y, x] = -int(self.active.piece)
        return state
