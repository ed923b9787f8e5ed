import numpy as np
import pytest

from tetris_rl.game.controller import ActivePiece
from tetris_rl.game.grid import empty_grid
from tetris_rl.game.pieces import PieceShapes, TetrominoType


def _controller(grid=None):
    grid = empty_grid(10, 25) if grid is None else grid
    return ActivePiece(lambda: grid, spawn_x=4, spawn_y=2), grid


@pytest.mark.parametrize("piece", list(TetrominoType))
def test_spawn_on_empty_board_does_not_collide(piece):
    ctl, _ = _controller()
    assert ctl.spawn(piece) is False
    assert ctl.offset == (4, 2)
    assert ctl.rotation == 0


@pytest.mark.parametrize("piece", list(TetrominoType))
def test_four_rotations_return_to_start(piece):
    ctl, _ = _controller()
    ctl.spawn(piece)
    original = ctl.shape()
    for _ in range(4):
        assert ctl.rotate() is True
    assert ctl.rotation == 0
    assert np.array_equal(ctl.shape(), original)
    assert ctl.offset == (4, 2)


def test_rotation_blocked_at_wall_leaves_state_unchanged():
    ctl, _ = _controller()
    ctl.set_piece(TetrominoType.I, 1)
    while ctl.move_left():
        pass
    assert ctl.offset == (-1, 2)
    assert ctl.rotate() is False
    assert ctl.rotation == 1
    assert ctl.offset == (-1, 2)


def test_move_blocked_by_locked_cell():
    grid = empty_grid(10, 25)
    ctl, _ = _controller(grid)
    ctl.spawn(TetrominoType.O)
    # O occupies columns 5-6, rows 3-4
    grid[3, 7] = 1
    assert ctl.move_right() is False
    assert ctl.offset == (4, 2)
    assert ctl.move_left() is True
    assert ctl.offset == (3, 2)


def test_spawn_reports_collision():
    grid = empty_grid(10, 25)
    grid[3, :] = 1
    ctl, _ = _controller(grid)
    assert ctl.spawn(TetrominoType.T) is True


def test_set_piece_keeps_rotation_and_resets_offset():
    ctl, _ = _controller()
    ctl.spawn(TetrominoType.J)
    ctl.move_down()
    ctl.move_right()
    assert ctl.set_piece(TetrominoType.L, 3) is False
    assert ctl.piece is TetrominoType.L
    assert ctl.rotation == 3
    assert ctl.offset == (4, 2)
    assert np.array_equal(ctl.shape(), PieceShapes.get_shape(TetrominoType.L, 3))


def test_set_piece_rejects_bad_rotation():
    ctl, _ = _controller()
    with pytest.raises(ValueError):
        ctl.set_piece(TetrominoType.S, 5)


def test_piece_before_spawn_is_an_error():
    ctl, _ = _controller()
    with pytest.raises(RuntimeError):
        ctl.shape()


def test_shape_accessor_is_a_copy():
    ctl, _ = _controller()
    ctl.spawn(TetrominoType.Z)
    ctl.shape()[:] = 0
    assert ctl.shape().any()


def test_rotation_into_row_above_grid_is_blocked():
    # Anchored one row above the grid, T spawns on rows 0-1 but its
    # next rotation reaches row -1.
    grid = empty_grid(10, 25)
    ctl = ActivePiece(lambda: grid, spawn_x=4, spawn_y=-1)
    assert ctl.spawn(TetrominoType.T) is False
    before = ctl.shape()
    assert ctl.rotate() is False
    assert ctl.rotation == 0
    assert ctl.offset == (4, -1)
    assert np.array_equal(ctl.shape(), before)
