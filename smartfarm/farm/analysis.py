"""Farm analysis — aggregate figures derived from a grid snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from smartfarm.farm.grid import Grid, grid_shape, occupied


@dataclass(frozen=True)
class FarmSummary:
    """Headline numbers for the current field.

    Attributes:
        planted_count: Occupied cells.
        ready_count: Cells ready to harvest.
        diversity: Distinct crop kinds planted.
        available_plots: Empty cells.
        potential_income: Sum of value x yield over ready cells.
    """

    planted_count: int
    ready_count: int
    diversity: int
    available_plots: int
    potential_income: float


def analyze_farm(grid: Grid) -> FarmSummary:
    """Summarise a grid snapshot."""
    rows, cols = grid_shape(grid)
    cells = [cell for _, _, cell in occupied(grid)]
    ready = [cell for cell in cells if cell.ready]
    return FarmSummary(
        planted_count=len(cells),
        ready_count=len(ready),
        diversity=len({cell.kind for cell in cells}),
        available_plots=rows * cols - len(cells),
        potential_income=sum(cell.crop.value * cell.yield_value for cell in ready),
    )
