"""Pure state transitions: plant, harvest, advance day, loans.

Every function takes a ``FarmState`` and returns a new one.  Guard
failures raise a ``FarmError`` before anything is built, so a failed
transition never yields a partially-updated state.

``advance_day`` runs the canonical daily order:

1. Accrue loan interest
2. Roll weather and temperature
3. Recompute moisture from the new weather
4. Grow every unready crop under the new conditions
5. Increment the day counter
6. Report how many crops are ready
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from smartfarm.farm.cell import CropCell
from smartfarm.farm.grid import cell_at, occupied, ready_count, with_cell
from smartfarm.farm.growth import grow_cell
from smartfarm.simulation.errors import InsufficientFunds, InvalidSelection
from smartfarm.world.weather import Weather, next_moisture, roll_weather

if TYPE_CHECKING:
    from numpy.random import Generator

    from smartfarm.crops.catalog import CropDefinition
    from smartfarm.simulation.state import FarmState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarvestResult:
    """Outcome of a harvest attempt.

    Attributes:
        state: State after the attempt (unchanged on a no-op).
        payout: Money credited, 0 when nothing was harvested.
        crop_kind: Kind harvested, or None on a no-op.
    """

    state: FarmState
    payout: int = 0
    crop_kind: str | None = None

    @property
    def harvested(self) -> bool:
        return self.crop_kind is not None


@dataclass(frozen=True)
class DayReport:
    """Everything that happened during one ``advance_day``.

    Attributes:
        state: State at the start of the new day.
        interest: Loan interest charged (0 without a loan).
        ready_count: Cells ready to harvest after growth.
        growing_count: Cells still growing after growth.
        newly_ready: Kinds of the cells that became ready today, one
            entry per cell in row-major order.
    """

    state: FarmState
    interest: int
    ready_count: int
    growing_count: int
    newly_ready: tuple[str, ...] = ()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return int(math.floor(value + 0.5))


def plant_crop(
    state: FarmState,
    row: int,
    col: int,
    crop: CropDefinition | None,
) -> FarmState:
    """Plant ``crop`` at ``(row, col)`` and pay for it.

    Planting on an occupied cell replaces the existing crop.

    Raises:
        InvalidSelection: If no crop was chosen.
        InsufficientFunds: If money is below the crop's cost.
        IndexError: If the coordinates are off the grid.
    """
    if crop is None:
        raise InvalidSelection("Select a crop first!")
    if state.money < crop.cost:
        raise InsufficientFunds(crop.cost, state.money)

    grid = with_cell(state.grid, row, col, CropCell(crop=crop))
    logger.debug("Planted %s at (%d, %d)", crop.kind, row, col)
    return replace(state, grid=grid, money=state.money - crop.cost)


def harvest_crop(state: FarmState, row: int, col: int) -> HarvestResult:
    """Harvest the crop at ``(row, col)`` if it is ready.

    Empty or unready cells are a no-op.

    Raises:
        IndexError: If the coordinates are off the grid.
    """
    cell = cell_at(state.grid, row, col)
    if cell is None or not cell.ready:
        return HarvestResult(state=state)

    payout = round_half_up(cell.crop.value * cell.yield_value)
    logger.debug(
        "Harvested %s at (%d, %d) for %d (yield %.2f)",
        cell.kind,
        row,
        col,
        payout,
        cell.yield_value,
    )
    new_state = replace(
        state,
        grid=with_cell(state.grid, row, col, None),
        money=state.money + payout,
    )
    return HarvestResult(state=new_state, payout=payout, crop_kind=cell.kind)


def accrue_interest(loans: int, rate: float = 0.01) -> int:
    """Return the simple interest owed on ``loans`` for one day."""
    if loans <= 0:
        return 0
    return round_half_up(loans * rate)


def apply_day(
    state: FarmState,
    weather: Weather,
    temperature: int,
    *,
    interest_rate: float = 0.01,
) -> DayReport:
    """Advance one day under an already-rolled weather and temperature.

    This is ``advance_day`` minus the randomness.

    Args:
        state: State at the end of the current day.
        weather: Weather rolled for the new day.
        temperature: Temperature rolled for the new day.
        interest_rate: Daily simple interest rate on loans.

    Returns:
        A DayReport holding the new state.
    """
    interest = accrue_interest(state.loans, interest_rate)
    moisture = next_moisture(state.moisture, weather)

    grid = state.grid
    newly_ready: list[str] = []
    for r, c, cell in list(occupied(grid)):
        if cell.ready:
            continue
        grown = grow_cell(
            cell,
            weather,
            temperature,
            moisture,
            state.temp_bonus,
            state.moisture_bonus,
        )
        if grown.ready:
            newly_ready.append(grown.kind)
        grid = with_cell(grid, r, c, grown)

    new_state = replace(
        state,
        loans=state.loans + interest,
        weather=weather,
        temperature=temperature,
        moisture=moisture,
        grid=grid,
        day=state.day + 1,
    )
    ready = ready_count(grid)
    growing = sum(1 for _ in occupied(grid)) - ready
    logger.debug(
        "Day %d: %s, %d°F, moisture %d%%, %d ready, %d growing",
        new_state.day,
        weather.value,
        temperature,
        moisture,
        ready,
        growing,
    )
    return DayReport(
        state=new_state,
        interest=interest,
        ready_count=ready,
        growing_count=growing,
        newly_ready=tuple(newly_ready),
    )


def advance_day(
    state: FarmState,
    rng: Generator,
    *,
    interest_rate: float = 0.01,
    temperature_min: int = 55,
    temperature_max: int = 95,
) -> DayReport:
    """Roll the weather and advance the simulation by one day.

    Args:
        state: Current state.
        rng: Seeded random generator.
        interest_rate: Daily simple interest rate on loans.
        temperature_min: Inclusive lower temperature bound (°F).
        temperature_max: Exclusive upper temperature bound (°F).
    """
    weather, temperature = roll_weather(rng, temperature_min, temperature_max)
    return apply_day(state, weather, temperature, interest_rate=interest_rate)


def take_loan(state: FarmState, amount: int) -> FarmState:
    """Borrow ``amount``, crediting money and the loan balance.

    Raises:
        ValueError: If ``amount`` is not positive.
    """
    if amount <= 0:
        msg = f"loan amount must be positive, got {amount}"
        raise ValueError(msg)
    return replace(state, money=state.money + amount, loans=state.loans + amount)


def repay_loan(state: FarmState, amount: int) -> tuple[FarmState, int]:
    """Repay up to ``amount`` of the outstanding loan.

    Returns:
        ``(new_state, repaid)`` where ``repaid`` is capped at the balance.

    Raises:
        ValueError: If ``amount`` is not positive.
        InsufficientFunds: If money is below the amount being repaid.
    """
    if amount <= 0:
        msg = f"repayment must be positive, got {amount}"
        raise ValueError(msg)
    repaid = min(amount, state.loans)
    if state.money < repaid:
        raise InsufficientFunds(repaid, state.money)
    return (
        replace(state, money=state.money - repaid, loans=state.loans - repaid),
        repaid,
    )
