from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .grid import Grid, intersect
from .pieces import NUM_ROTATIONS, PieceShapes, Shape, TetrominoType, cells_at


class ActivePiece:
    """The falling piece: type, rotation index and offset within the full grid.

    The grid is read through ``grid_source`` on every check so the controller
    always tests against the board's current state. Every request either
    applies completely and returns True, or leaves the state as it was.
    """

    def __init__(self, grid_source: Callable[[], Grid], spawn_x: int = 4, spawn_y: int = 2) -> None:
        self._grid_source = grid_source
        self.spawn_x = spawn_x
        self.spawn_y = spawn_y
        self._piece: Optional[TetrominoType] = None
        self._rotation = 0
        self.x = spawn_x
        self.y = spawn_y

    @property
    def piece(self) -> TetrominoType:
        if self._piece is None:
            raise RuntimeError("no active piece has been spawned")
        return self._piece

    @property
    def rotation(self) -> int:
        return self._rotation

    @property
    def offset(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def has_piece(self) -> bool:
        return self._piece is not None

    def shape(self) -> Shape:
        return PieceShapes.get_shape(self.piece, self._rotation)

    def cells(self) -> List[Tuple[int, int]]:
        return cells_at(self.shape(), self.x, self.y)

    def _collides(self, shape: Shape, x: int, y: int) -> bool:
        return intersect(self._grid_source(), shape, x, y)

    def spawn(self, piece: TetrominoType) -> bool:
        """Place ``piece`` at rotation 0 on the spawn anchor. Returns True on collision."""
        return self.set_piece(piece, 0)

    def set_piece(self, piece: TetrominoType, rotation: int) -> bool:
        if not 0 <= rotation < NUM_ROTATIONS:
            raise ValueError(f"rotation must be in 0..{NUM_ROTATIONS - 1}, got {rotation}")
        self._piece = TetrominoType(piece)
        self._rotation = rotation
        self.x, self.y = self.spawn_x, self.spawn_y
        return self._collides(self.shape(), self.x, self.y)

    def _shift(self, dx: int, dy: int) -> bool:
        new_x = self.x + dx
        new_y = self.y + dy
        if self._collides(self.shape(), new_x, new_y):
            return False
        self.x, self.y = new_x, new_y
        return True

    def move_down(self) -> bool:
        return self._shift(0, 1)

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def next_rotation(self) -> Tuple[Shape, int]:
        position = (self._rotation + 1) % NUM_ROTATIONS
        return PieceShapes.get_shape(self.piece, position), position

    def rotate(self) -> bool:
        # No kicks: the next state must fit at the current offset.
        shape, position = self.next_rotation()
        if self._collides(shape, self.x, self.y):
            return False
        self._rotation = position
        return True
