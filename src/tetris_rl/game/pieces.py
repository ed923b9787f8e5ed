from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    """The seven canonical pieces. The value doubles as the cell color id."""

    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray

NUM_ROTATIONS = 4


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Four rotation states per piece, indexed 0..3. Rotation advances at a fixed
# anchor, so the states are laid out inside a 4x4 box rather than derived by
# rotating a minimal bounding box.
_ROTATIONS: Dict[TetrominoType, Tuple[Shape, ...]] = {
    TetrominoType.I: (
        _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]]),
        _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]]),
    ),
    TetrominoType.J: (
        _frozen([[0, 0, 0, 0], [2, 2, 2, 0], [0, 0, 2, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 2, 2, 0], [0, 2, 0, 0], [0, 2, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 2, 0, 0], [0, 2, 2, 2], [0, 0, 0, 0]]),
        _frozen([[0, 0, 2, 0], [0, 0, 2, 0], [0, 2, 2, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.L: (
        _frozen([[0, 0, 0, 0], [0, 3, 3, 3], [0, 3, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 3, 3, 0], [0, 0, 3, 0], [0, 0, 3, 0]]),
        _frozen([[0, 0, 0, 0], [0, 0, 3, 0], [3, 3, 3, 0], [0, 0, 0, 0]]),
        _frozen([[0, 3, 0, 0], [0, 3, 0, 0], [0, 3, 3, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.O: (
        _frozen([[0, 0, 0, 0], [0, 4, 4, 0], [0, 4, 4, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 4, 4, 0], [0, 4, 4, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 4, 4, 0], [0, 4, 4, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 4, 4, 0], [0, 4, 4, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.S: (
        _frozen([[0, 0, 0, 0], [0, 5, 5, 0], [5, 5, 0, 0], [0, 0, 0, 0]]),
        _frozen([[5, 0, 0, 0], [5, 5, 0, 0], [0, 5, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [0, 5, 5, 0], [5, 5, 0, 0], [0, 0, 0, 0]]),
        _frozen([[5, 0, 0, 0], [5, 5, 0, 0], [0, 5, 0, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.T: (
        _frozen([[0, 0, 0, 0], [6, 6, 6, 0], [0, 6, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 6, 0, 0], [0, 6, 6, 0], [0, 6, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 6, 0, 0], [6, 6, 6, 0], [0, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 6, 0, 0], [6, 6, 0, 0], [0, 6, 0, 0], [0, 0, 0, 0]]),
    ),
    TetrominoType.Z: (
        _frozen([[0, 0, 0, 0], [7, 7, 0, 0], [0, 7, 7, 0], [0, 0, 0, 0]]),
        _frozen([[0, 7, 0, 0], [7, 7, 0, 0], [7, 0, 0, 0], [0, 0, 0, 0]]),
        _frozen([[0, 0, 0, 0], [7, 7, 0, 0], [0, 7, 7, 0], [0, 0, 0, 0]]),
        _frozen([[0, 7, 0, 0], [7, 7, 0, 0], [7, 0, 0, 0], [0, 0, 0, 0]]),
    ),
}


class PieceShapes:
    """Static rotation tables for every piece type."""

    @classmethod
    def get_shape(cls, piece_type: TetrominoType, rotation: int = 0) -> Shape:
        """Return a writable copy of ``piece_type`` at ``rotation``."""
        if not 0 <= rotation < NUM_ROTATIONS:
            raise ValueError(f"rotation must be in 0..{NUM_ROTATIONS - 1}, got {rotation}")
        return _ROTATIONS[TetrominoType(piece_type)][rotation].copy()

    @classmethod
    def get_all_rotations(cls, piece_type: TetrominoType) -> List[Shape]:
        return [cls.get_shape(piece_type, r) for r in range(NUM_ROTATIONS)]

    @classmethod
    def lowest_row(cls, piece_type: TetrominoType, rotation: int = 0) -> int:
        """Index of the bottom-most occupied row of the shape matrix."""
        rows = np.flatnonzero(np.any(_ROTATIONS[TetrominoType(piece_type)][rotation] != 0, axis=1))
        return int(rows[-1])


def cells_at(shape: Shape, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
    """Absolute (x, y) of every occupied cell when ``shape`` sits at the origin."""
    ys, xs = np.nonzero(shape)
    return [(origin_x + int(dx), origin_y + int(dy)) for dy, dx in zip(ys, xs)]
