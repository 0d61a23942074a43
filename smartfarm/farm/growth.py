"""Growth — daily crop development and the yield multiplier.

The yield multiplier is recomputed every day a crop grows, from that
day's conditions.  The last value computed before the crop became ready
is the one paid out at harvest.
"""

from __future__ import annotations

from dataclasses import replace

from smartfarm.crops.catalog import CropDefinition
from smartfarm.farm.cell import CropCell
from smartfarm.world.weather import Weather

# Temperature factors
COLD_FACTOR = 0.5
HOT_FACTOR = 0.7
COMFORTABLE_TEMP_FACTOR = 1.2

# Moisture factors
WATERLOGGED_FACTOR = 0.8
PARCHED_FACTOR = 0.7
COMFORTABLE_MOISTURE_FACTOR = 1.1


def calculate_yield(
    crop: CropDefinition,
    weather: Weather,
    temperature: int,
    moisture: int,
    temp_bonus: float = 1.0,
    moisture_bonus: float = 1.0,
) -> float:
    """Compute the yield multiplier for one day of conditions.

    The temperature factor and the moisture factor multiply.  Rain on an
    already-wet crop and sun on a dry one are penalised; every other
    moisture combination gets the comfortable factor.

    Args:
        crop: Definition of the growing crop.
        weather: Weather for the day.
        temperature: Temperature for the day (°F).
        moisture: Moisture percentage for the day.
        temp_bonus: Gameplay modifier applied to the temperature factor.
        moisture_bonus: Gameplay modifier applied to the moisture factor.

    Returns:
        The multiplier, roughly in ``[0.35, 1.45]`` with neutral bonuses.
    """
    yield_value = 1.0

    if temperature < crop.temp_min:
        yield_value *= COLD_FACTOR * temp_bonus
    elif temperature > crop.temp_max:
        yield_value *= HOT_FACTOR * temp_bonus
    else:
        yield_value *= COMFORTABLE_TEMP_FACTOR * temp_bonus

    if weather is Weather.RAINY and moisture > crop.water_needs:
        yield_value *= WATERLOGGED_FACTOR * moisture_bonus
    elif weather is Weather.SUNNY and moisture < crop.water_needs:
        yield_value *= PARCHED_FACTOR * moisture_bonus
    else:
        yield_value *= COMFORTABLE_MOISTURE_FACTOR * moisture_bonus

    return yield_value


def grow_cell(
    cell: CropCell,
    weather: Weather,
    temperature: int,
    moisture: int,
    temp_bonus: float = 1.0,
    moisture_bonus: float = 1.0,
) -> CropCell:
    """Advance a cell by one day.

    Ready cells are returned unchanged; they only leave the grid by
    harvest.
    """
    if cell.ready:
        return cell
    return replace(
        cell,
        growth_stage=cell.growth_stage + 1,
        yield_value=calculate_yield(
            cell.crop,
            weather,
            temperature,
            moisture,
            temp_bonus,
            moisture_bonus,
        ),
    )
