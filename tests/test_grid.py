import numpy as np
import pytest

from tetris_rl.game.grid import (
    bumpiness,
    check_removing,
    column_heights,
    count_holes,
    empty_grid,
    intersect,
    landing_y,
    merge,
)
from tetris_rl.game.pieces import PieceShapes, TetrominoType


def _dot():
    return np.array([[1]], dtype=np.int8)


def test_empty_grid_is_height_by_width():
    grid = empty_grid(10, 25)
    assert grid.shape == (25, 10)
    assert not grid.any()


@pytest.mark.parametrize("x,y", [(-1, 5), (10, 5), (3, 25)])
def test_intersect_out_of_bounds(x, y):
    assert intersect(empty_grid(10, 25), _dot(), x, y)


def test_intersect_occupied_cell():
    grid = empty_grid(10, 25)
    grid[7, 3] = 5
    assert intersect(grid, _dot(), 3, 7)
    assert not intersect(grid, _dot(), 4, 7)


def test_intersect_ignores_empty_shape_cells_outside_grid():
    # I piece vertical lives in column 1 of its box; column 0 may hang off the left edge
    shape = PieceShapes.get_shape(TetrominoType.I, 1)
    assert not intersect(empty_grid(10, 25), shape, -1, 0)
    assert intersect(empty_grid(10, 25), shape, -2, 0)


def test_intersect_negative_row_is_a_collision():
    grid = empty_grid(10, 25)
    vertical = PieceShapes.get_shape(TetrominoType.I, 1)
    horizontal = PieceShapes.get_shape(TetrominoType.I, 0)
    assert intersect(grid, vertical, 4, -1)
    # Row 0 of the horizontal box is empty, so only row 1 -> grid row 0 is used
    assert not intersect(grid, horizontal, 4, -1)


def test_merge_returns_new_grid():
    grid = empty_grid(10, 25)
    shape = PieceShapes.get_shape(TetrominoType.O, 0)
    merged = merge(grid, shape, 4, 10)
    assert not grid.any()
    assert merged[11, 5] == merged[11, 6] == merged[12, 5] == merged[12, 6] == int(TetrominoType.O)
    assert int(np.count_nonzero(merged)) == 4


def test_check_removing_without_full_rows_is_a_noop():
    grid = empty_grid(10, 25)
    grid[24, :9] = 3
    result = check_removing(grid)
    assert result.lines_removed == 0
    assert result.score_bonus == 0
    assert np.array_equal(result.grid, grid)
    assert result.grid is not grid


@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_check_removing_bonus_is_quadratic(k):
    grid = empty_grid(10, 25)
    grid[25 - k:, :] = 2
    result = check_removing(grid)
    assert result.lines_removed == k
    assert result.score_bonus == 50 * k * k
    assert not result.grid.any()


def test_check_removing_shifts_survivors_down_in_order():
    grid = empty_grid(4, 6)
    grid[1] = [1, 0, 0, 0]
    grid[2] = [7, 7, 7, 7]
    grid[3] = [0, 2, 0, 0]
    grid[4] = [5, 5, 5, 5]
    grid[5] = [0, 0, 3, 0]
    before = grid.copy()
    result = check_removing(grid)
    assert result.lines_removed == 2
    assert result.cleared_rows == (2, 4)
    expected = np.array([
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [1, 0, 0, 0],
        [0, 2, 0, 0],
        [0, 0, 3, 0],
    ], dtype=np.int8)
    assert np.array_equal(result.grid, expected)
    assert np.array_equal(grid, before)


def test_landing_y_stops_above_stack():
    grid = empty_grid(10, 25)
    grid[20, :] = 1
    shape = PieceShapes.get_shape(TetrominoType.O, 0)
    # O occupies rows 1-2 of its box
    assert landing_y(grid, shape, 4, 2) == 17


def test_board_features():
    grid = empty_grid(3, 4)
    grid[1, 0] = 1
    grid[3, 2] = 1
    assert column_heights(grid) == [3, 0, 1]
    assert count_holes(grid) == 2
    assert bumpiness(grid) == 4


def test_check_removing_uses_given_bonus_function():
    calls = []

    def bonus(lines):
        calls.append(lines)
        return 7 * lines

    grid = empty_grid(10, 25)
    grid[23:, :] = 4
    result = check_removing(grid, bonus)
    assert result.score_bonus == 14
    assert calls == [2]

    calls.clear()
    assert check_removing(empty_grid(10, 25), bonus).score_bonus == 0
    assert calls == []
