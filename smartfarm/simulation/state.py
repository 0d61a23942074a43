"""FarmState — an immutable snapshot of the whole simulation.

Transitions take a snapshot and return a new one, so any snapshot can be
handed to a background advisory request without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from smartfarm.farm.grid import Grid, empty_grid
from smartfarm.world.weather import Weather


@dataclass(frozen=True)
class FarmState:
    """Simulation state plus the crop grid.

    Attributes:
        day: Day counter, starting at 1.
        money: Money balance in whole currency units.
        loans: Outstanding loan balance.
        weather: Current weather.
        temperature: Current temperature (°F).
        moisture: Current soil moisture percentage.
        temp_bonus: Multiplier applied to the temperature yield factor.
        moisture_bonus: Multiplier applied to the moisture yield factor.
        grid: Rows of optional crop cells.
    """

    day: int = 1
    money: int = 1000
    loans: int = 0
    weather: Weather = Weather.SUNNY
    temperature: int = 75
    moisture: int = 60
    temp_bonus: float = 1.0
    moisture_bonus: float = 1.0
    grid: Grid = field(default_factory=empty_grid, repr=False)
