"""Weather — daily weather roll and the moisture model.

Weather and temperature are random; moisture is a pure function of the
previous moisture level and the newly rolled weather.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator


class Weather(Enum):
    """Daily weather conditions."""

    SUNNY = "sunny"
    RAINY = "rainy"
    WINDY = "windy"


RAINY_MOISTURE = 80
WINDY_DRYING = 20
WINDY_FLOOR = 20
SUNNY_DRYING = 10
SUNNY_FLOOR = 30


def roll_weather(
    rng: Generator,
    temperature_min: int = 55,
    temperature_max: int = 95,
) -> tuple[Weather, int]:
    """Draw the next day's weather and temperature.

    Weather is uniform over :class:`Weather`; temperature is a uniform
    integer in ``[temperature_min, temperature_max)``.

    Args:
        rng: Seeded random generator.
        temperature_min: Inclusive lower temperature bound (°F).
        temperature_max: Exclusive upper temperature bound (°F).

    Returns:
        ``(weather, temperature)`` for the new day.
    """
    options = list(Weather)
    weather = options[int(rng.integers(0, len(options)))]
    temperature = int(rng.integers(temperature_min, temperature_max))
    return weather, temperature


def next_moisture(moisture: int, weather: Weather) -> int:
    """Return the moisture level after a day of ``weather``.

    Rain saturates to a fixed level; wind and sun dry the soil down to
    their respective floors.
    """
    if weather is Weather.RAINY:
        return RAINY_MOISTURE
    if weather is Weather.WINDY:
        return max(moisture - WINDY_DRYING, WINDY_FLOOR)
    return max(moisture - SUNNY_DRYING, SUNNY_FLOOR)
