"""Crop catalog — static definitions for every plantable crop kind.

Definitions are immutable and loaded once.  The engine and transitions
look crops up by their upper-case kind name (``"CORN"``, ``"WHEAT"``...).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CropDefinition:
    """Static description of one crop kind.

    Attributes:
        kind: Catalog key, e.g. ``"CORN"``.
        growth_time: Day-advances needed before the crop is ready.
        value: Base sale value before the yield multiplier.
        cost: Purchase cost deducted at planting.
        water_needs: Moisture percentage the crop is comfortable at.
        temp_min: Lowest comfortable temperature (°F).
        temp_max: Highest comfortable temperature (°F).
        description: Short player-facing blurb.
        icon: Display glyph for front-ends.
    """

    kind: str
    growth_time: int
    value: int
    cost: int
    water_needs: int
    temp_min: int
    temp_max: int
    description: str = ""
    icon: str = ""

    @classmethod
    def from_mapping(cls, kind: str, data: Mapping[str, Any]) -> CropDefinition:
        """Build a definition from a YAML-style mapping.

        Args:
            kind: Catalog key for the crop.
            data: Mapping with ``growth_time``, ``value``, ``cost``,
                ``water_needs`` and a ``temp_range`` of ``min``/``max``.

        Raises:
            KeyError: If a required field is missing.
        """
        temp_range = data["temp_range"]
        return cls(
            kind=kind.upper(),
            growth_time=int(data["growth_time"]),
            value=int(data["value"]),
            cost=int(data["cost"]),
            water_needs=int(data["water_needs"]),
            temp_min=int(temp_range["min"]),
            temp_max=int(temp_range["max"]),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
        )


CORN = CropDefinition(
    kind="CORN",
    growth_time=3,
    value=100,
    cost=25,
    water_needs=60,
    temp_min=60,
    temp_max=85,
    description="Hardy crop, moderate water needs",
    icon="🌽",
)

WHEAT = CropDefinition(
    kind="WHEAT",
    growth_time=2,
    value=75,
    cost=15,
    water_needs=40,
    temp_min=55,
    temp_max=75,
    description="Fast-growing, drought-resistant",
    icon="🌾",
)

TOMATO = CropDefinition(
    kind="TOMATO",
    growth_time=4,
    value=150,
    cost=35,
    water_needs=75,
    temp_min=65,
    temp_max=90,
    description="High value, needs lots of water",
    icon="🍅",
)

DEFAULT_CATALOG: dict[str, CropDefinition] = {
    crop.kind: crop for crop in (CORN, WHEAT, TOMATO)
}


def catalog_from_mapping(data: Mapping[str, Mapping[str, Any]]) -> dict[str, CropDefinition]:
    """Parse a ``crops:`` YAML section into a catalog keyed by kind."""
    return {
        kind.upper(): CropDefinition.from_mapping(kind, entry)
        for kind, entry in data.items()
    }
