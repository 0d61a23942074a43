"""Tests for smartfarm.crops, smartfarm.farm.cell and smartfarm.farm.grid."""

import pytest

from smartfarm.crops.catalog import (
    CORN,
    DEFAULT_CATALOG,
    TOMATO,
    WHEAT,
    CropDefinition,
    catalog_from_mapping,
)
from smartfarm.farm.analysis import analyze_farm
from smartfarm.farm.cell import CropCell
from smartfarm.farm.grid import cell_at, empty_grid, occupied, ready_count, with_cell


class TestCatalog:
    """Tests for the static crop catalog."""

    def test_default_kinds(self) -> None:
        assert set(DEFAULT_CATALOG) == {"CORN", "WHEAT", "TOMATO"}

    def test_constants(self) -> None:
        assert (CORN.growth_time, CORN.value, CORN.cost) == (3, 100, 25)
        assert (WHEAT.growth_time, WHEAT.value, WHEAT.cost) == (2, 75, 15)
        assert (TOMATO.growth_time, TOMATO.value, TOMATO.cost) == (4, 150, 35)
        assert (TOMATO.temp_min, TOMATO.temp_max, TOMATO.water_needs) == (65, 90, 75)

    def test_definitions_are_frozen(self) -> None:
        with pytest.raises(AttributeError):
            CORN.cost = 1  # type: ignore[misc]

    def test_from_mapping(self) -> None:
        catalog = catalog_from_mapping(
            {
                "pumpkin": {
                    "growth_time": 5,
                    "value": 200,
                    "cost": 50,
                    "water_needs": 55,
                    "temp_range": {"min": 50, "max": 80},
                },
            },
        )
        pumpkin = catalog["PUMPKIN"]
        assert isinstance(pumpkin, CropDefinition)
        assert pumpkin.kind == "PUMPKIN"
        assert pumpkin.temp_min == 50
        assert pumpkin.description == ""

    def test_from_mapping_missing_field(self) -> None:
        with pytest.raises(KeyError):
            CropDefinition.from_mapping("x", {"growth_time": 1})


class TestCropCell:
    """Tests for the CropCell dataclass."""

    def test_default_values(self) -> None:
        cell = CropCell(crop=CORN)
        assert cell.growth_stage == 0
        assert cell.yield_value == 1.0
        assert cell.ready is False
        assert cell.kind == "CORN"

    def test_ready_at_growth_time(self) -> None:
        assert CropCell(crop=WHEAT, growth_stage=1).ready is False
        assert CropCell(crop=WHEAT, growth_stage=2).ready is True

    def test_progress(self) -> None:
        assert CropCell(crop=TOMATO, growth_stage=2).progress == 0.5


class TestGrid:
    """Tests for the immutable grid helpers."""

    def test_dimensions(self) -> None:
        grid = empty_grid()
        assert len(grid) == 6
        assert all(len(row) == 6 for row in grid)
        assert all(cell is None for row in grid for cell in row)

    def test_with_cell_returns_new_grid(self) -> None:
        grid = empty_grid()
        planted = with_cell(grid, 2, 3, CropCell(crop=CORN))
        assert cell_at(grid, 2, 3) is None
        assert cell_at(planted, 2, 3).kind == "CORN"

    def test_out_of_bounds(self) -> None:
        grid = empty_grid()
        with pytest.raises(IndexError):
            cell_at(grid, 6, 0)
        with pytest.raises(IndexError):
            with_cell(grid, 0, -1, None)

    def test_occupied_and_ready(self) -> None:
        grid = with_cell(empty_grid(), 0, 0, CropCell(crop=WHEAT, growth_stage=2))
        grid = with_cell(grid, 5, 5, CropCell(crop=CORN))
        assert [(r, c) for r, c, _ in occupied(grid)] == [(0, 0), (5, 5)]
        assert ready_count(grid) == 1


class TestAnalysis:
    """Tests for the farm summary."""

    def test_empty_farm(self) -> None:
        summary = analyze_farm(empty_grid())
        assert summary.planted_count == 0
        assert summary.available_plots == 36
        assert summary.potential_income == 0

    def test_mixed_farm(self) -> None:
        grid = with_cell(
            empty_grid(),
            0,
            0,
            CropCell(crop=CORN, growth_stage=3, yield_value=1.2),
        )
        grid = with_cell(grid, 0, 1, CropCell(crop=CORN))
        grid = with_cell(grid, 0, 2, CropCell(crop=WHEAT))
        summary = analyze_farm(grid)
        assert summary.planted_count == 3
        assert summary.ready_count == 1
        assert summary.diversity == 2
        assert summary.available_plots == 33
        assert summary.potential_income == pytest.approx(120.0)
