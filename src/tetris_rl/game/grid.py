from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

import numpy as np

from .pieces import Shape


Grid = np.ndarray

CELL_DTYPE = np.int8


@dataclass(frozen=True, eq=False)
class ClearResult:
    lines_removed: int
    grid: Grid = field(repr=False)
    score_bonus: int
    cleared_rows: tuple = ()

    def new_grid(self) -> Grid:
        return self.grid.copy()


def empty_grid(width: int, height: int) -> Grid:
    return np.zeros((height, width), dtype=CELL_DTYPE)


def intersect(grid: Grid, shape: Shape, x: int, y: int) -> bool:
    """True if any occupied cell of ``shape`` at offset (x, y) is out of bounds
    or lands on a locked cell.

    All four edges are checked, so a shape row that would fall above row 0 is
    treated as a collision rather than wrapping around.
    """
    height, width = grid.shape
    ys, xs = np.nonzero(shape)
    for dy, dx in zip(ys, xs):
        gx = x + int(dx)
        gy = y + int(dy)
        if gx < 0 or gx >= width or gy < 0 or gy >= height:
            return True
        if grid[gy, gx] != 0:
            return True
    return False


def merge(grid: Grid, shape: Shape, x: int, y: int) -> Grid:
    """Return a copy of ``grid`` with every occupied cell of ``shape`` written in."""
    merged = grid.copy()
    height, width = merged.shape
    ys, xs = np.nonzero(shape)
    for dy, dx in zip(ys, xs):
        gx = x + int(dx)
        gy = y + int(dy)
        if 0 <= gx < width and 0 <= gy < height:
            merged[gy, gx] = shape[dy, dx]
    return merged


def full_rows(grid: Grid) -> List[int]:
    return [int(r) for r in np.flatnonzero(np.all(grid != 0, axis=1))]


def clear_bonus(lines: int, factor: int = 50) -> int:
    return factor * lines * lines


def check_removing(grid: Grid, score_for_lines: Callable[[int], int] = clear_bonus) -> ClearResult:
    """Remove every full row and shift the survivors down.

    Survivors keep their relative order and empty rows are inserted at the top.
    The input grid is left untouched. ``score_for_lines`` maps the number of
    removed rows to the bonus; it is not called when nothing was removed.
    """
    rows = full_rows(grid)
    if not rows:
        return ClearResult(lines_removed=0, grid=grid.copy(), score_bonus=0)
    width = grid.shape[1]
    survivors = np.delete(grid, rows, axis=0)
    new_rows = np.zeros((len(rows), width), dtype=grid.dtype)
    cleared = np.vstack((new_rows, survivors))
    return ClearResult(
        lines_removed=len(rows),
        grid=cleared,
        score_bonus=score_for_lines(len(rows)),
        cleared_rows=tuple(rows),
    )


def landing_y(grid: Grid, shape: Shape, x: int, y: int) -> int:
    """Lowest y reachable from (x, y) by repeated single-row drops."""
    height = grid.shape[0]
    while y + 1 < height and not intersect(grid, shape, x, y + 1):
        y += 1
    return y


def column_heights(grid: Grid) -> List[int]:
    height = grid.shape[0]
    filled = grid != 0
    heights: List[int] = []
    for col in range(grid.shape[1]):
        occupied = np.flatnonzero(filled[:, col])
        heights.append(height - int(occupied[0]) if occupied.size else 0)
    return heights


def get_max_height(grid: Grid) -> int:
    # y=0 is top; find first non-empty from top
    non_empty_rows = np.where(np.any(grid != 0, axis=1))[0]
    if non_empty_rows.size == 0:
        return 0
    return grid.shape[0] - int(non_empty_rows[0])


def count_holes(grid: Grid) -> int:
    holes = 0
    for x in range(grid.shape[1]):
        seen_block = False
        for cell in grid[:, x]:
            if cell != 0:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes


def bumpiness(grid: Grid) -> int:
    heights = column_heights(grid)
    return sum(abs(heights[i] - heights[i + 1]) for i in range(len(heights) - 1))
