"""CropCell — one planted crop occupying a grid position.

Cells are immutable snapshots; growth produces a new cell rather than
mutating the old one.  Empty grid positions are ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass

from smartfarm.crops.catalog import CropDefinition


@dataclass(frozen=True)
class CropCell:
    """A crop growing in a single grid cell.

    Attributes:
        crop: Catalog definition of the planted kind.
        growth_stage: Day-advances experienced since planting.
        yield_value: Multiplier applied to the base value at harvest.
    """

    crop: CropDefinition
    growth_stage: int = 0
    yield_value: float = 1.0

    @property
    def kind(self) -> str:
        """Catalog key of the planted crop."""
        return self.crop.kind

    @property
    def ready(self) -> bool:
        """Return True once the crop has grown for its full duration."""
        return self.growth_stage >= self.crop.growth_time

    @property
    def progress(self) -> float:
        """Growth progress in ``[0, 1]`` for progress bars."""
        if self.crop.growth_time <= 0:
            return 1.0
        return min(self.growth_stage / self.crop.growth_time, 1.0)
