"""Grid — the fixed-size field of optional crop cells.

The grid is a tuple of row tuples so that a ``FarmState`` snapshot can
be shared freely.  Helpers return new grids instead of mutating.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from smartfarm.farm.cell import CropCell

Grid = tuple[tuple[Optional[CropCell], ...], ...]

DEFAULT_ROWS = 6
DEFAULT_COLS = 6


def empty_grid(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> Grid:
    """Return a ``rows`` x ``cols`` grid with every cell empty."""
    return tuple(tuple(None for _ in range(cols)) for _ in range(rows))


def grid_shape(grid: Grid) -> tuple[int, int]:
    """Return ``(rows, cols)`` for a grid."""
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def _check_bounds(grid: Grid, row: int, col: int) -> None:
    rows, cols = grid_shape(grid)
    if not (0 <= row < rows and 0 <= col < cols):
        msg = f"({row}, {col}) out of bounds for {rows}x{cols}"
        raise IndexError(msg)


def cell_at(grid: Grid, row: int, col: int) -> CropCell | None:
    """Return the cell at ``(row, col)``.

    Raises:
        IndexError: If coordinates are out of bounds.
    """
    _check_bounds(grid, row, col)
    return grid[row][col]


def with_cell(grid: Grid, row: int, col: int, cell: CropCell | None) -> Grid:
    """Return a copy of ``grid`` with ``(row, col)`` replaced by ``cell``.

    Raises:
        IndexError: If coordinates are out of bounds.
    """
    _check_bounds(grid, row, col)
    new_row = grid[row][:col] + (cell,) + grid[row][col + 1 :]
    return grid[:row] + (new_row,) + grid[row + 1 :]


def occupied(grid: Grid) -> Iterator[tuple[int, int, CropCell]]:
    """Yield ``(row, col, cell)`` for every planted cell, row-major."""
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is not None:
                yield r, c, cell


def ready_count(grid: Grid) -> int:
    """Number of cells holding a crop that is ready to harvest."""
    return sum(1 for _, _, cell in occupied(grid) if cell.ready)
