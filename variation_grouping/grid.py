"""Helpers for reading cells out of a row-major grid.

A grid is a list of rows, each row a list of scalar cells.  Rows may be
ragged or ``None``; reads outside a row behave like blank cells.
"""


def get_cell(grid, row, col):
    """Return the raw cell at (*row*, *col*) or ``None`` when absent."""
    if row < 0 or row >= len(grid):
        return None
    cells = grid[row]
    if cells is None or col < 0 or col >= len(cells):
        return None
    return cells[col]


def cell_text(value):
    """Trimmed text of a cell value; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value).strip()


def row_reaches(grid, row, col):
    """True when *row* exists and is long enough to hold column *col*."""
    return 0 <= row < len(grid) and grid[row] is not None and col < len(grid[row])


def grid_width(grid):
    return max((len(r) for r in grid if r is not None), default=0)


def copy_grid(grid):
    """Shallow-copy every row so the result can be extended freely."""
    return [list(r) if r is not None else [] for r in grid]
