import numpy as np


def row_with_gap(width, gap, value=1):
    row = np.full((width,), value, dtype=np.int8)
    row[gap] = 0
    return row


def matrix_with_bottom_rows(height, width, rows):
    """Empty matrix whose last len(rows) rows are replaced by ``rows``."""
    grid = np.zeros((height, width), dtype=np.int8)
    for i, row in enumerate(rows):
        grid[height - len(rows) + i] = row
    return grid
