import numpy as np
import pytest

from tetris_rl.game.pieces import NUM_ROTATIONS, PieceShapes, TetrominoType, cells_at


def test_seven_piece_types():
    assert [t.name for t in TetrominoType] == ["I", "J", "L", "O", "S", "T", "Z"]


@pytest.mark.parametrize("piece", list(TetrominoType))
def test_each_piece_has_four_tetromino_rotations(piece):
    rotations = PieceShapes.get_all_rotations(piece)
    assert len(rotations) == NUM_ROTATIONS
    for shape in rotations:
        assert shape.shape == (4, 4)
        assert int(np.count_nonzero(shape)) == 4
        # Cells carry the piece's color id
        assert set(np.unique(shape)) == {0, int(piece)}


def test_o_piece_rotations_are_identical():
    first, *rest = PieceShapes.get_all_rotations(TetrominoType.O)
    for shape in rest:
        assert np.array_equal(first, shape)


def test_get_shape_returns_independent_copy():
    shape = PieceShapes.get_shape(TetrominoType.T, 0)
    shape[:] = 9
    fresh = PieceShapes.get_shape(TetrominoType.T, 0)
    assert fresh.max() == int(TetrominoType.T)


def test_get_shape_rejects_bad_rotation():
    with pytest.raises(ValueError):
        PieceShapes.get_shape(TetrominoType.L, 4)


def test_lowest_row():
    assert PieceShapes.lowest_row(TetrominoType.I, 0) == 1
    assert PieceShapes.lowest_row(TetrominoType.I, 1) == 3
    assert PieceShapes.lowest_row(TetrominoType.O, 0) == 2


def test_cells_at_offsets_occupied_cells():
    shape = PieceShapes.get_shape(TetrominoType.O, 0)
    assert sorted(cells_at(shape, 4, 2)) == [(5, 3), (5, 4), (6, 3), (6, 4)]
