"""Tests for smartfarm.simulation.transitions — the pure state changes."""

from dataclasses import replace

import pytest
from numpy.random import Generator

from smartfarm.crops.catalog import CORN, DEFAULT_CATALOG, TOMATO, WHEAT
from smartfarm.farm.cell import CropCell
from smartfarm.farm.grid import cell_at, occupied, with_cell
from smartfarm.simulation.errors import InsufficientFunds, InvalidSelection
from smartfarm.simulation.state import FarmState
from smartfarm.simulation.transitions import (
    accrue_interest,
    advance_day,
    apply_day,
    harvest_crop,
    plant_crop,
    repay_loan,
    round_half_up,
    take_loan,
)
from smartfarm.world.weather import Weather


class TestPlant:
    """Tests for plant_crop."""

    @pytest.mark.parametrize("crop", list(DEFAULT_CATALOG.values()))
    def test_plant_deducts_cost(self, fresh_state: FarmState, crop) -> None:
        state = plant_crop(fresh_state, 1, 2, crop)
        assert state.money == fresh_state.money - crop.cost
        cell = cell_at(state.grid, 1, 2)
        assert cell.kind == crop.kind
        assert cell.growth_stage == 0
        assert cell.yield_value == 1.0
        assert cell.ready is False

    def test_no_selection(self, fresh_state: FarmState) -> None:
        with pytest.raises(InvalidSelection):
            plant_crop(fresh_state, 0, 0, None)

    def test_insufficient_funds(self) -> None:
        poor = FarmState(money=CORN.cost - 1)
        with pytest.raises(InsufficientFunds) as excinfo:
            plant_crop(poor, 0, 0, CORN)
        assert excinfo.value.needed == CORN.cost
        assert poor.money == CORN.cost - 1
        assert list(occupied(poor.grid)) == []

    def test_exact_funds(self) -> None:
        state = plant_crop(FarmState(money=CORN.cost), 0, 0, CORN)
        assert state.money == 0

    def test_replanting_replaces(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, CORN)
        state = plant_crop(state, 0, 0, WHEAT)
        assert cell_at(state.grid, 0, 0).kind == "WHEAT"
        assert state.money == fresh_state.money - CORN.cost - WHEAT.cost

    def test_original_state_untouched(self, fresh_state: FarmState) -> None:
        plant_crop(fresh_state, 0, 0, CORN)
        assert fresh_state.money == 1000
        assert cell_at(fresh_state.grid, 0, 0) is None


class TestHarvest:
    """Tests for harvest_crop."""

    def test_ready_crop_pays_out(self, fresh_state: FarmState) -> None:
        crop = replace(CORN, value=100)
        cell = CropCell(crop=crop, growth_stage=crop.growth_time, yield_value=1.2)
        state = replace(fresh_state, grid=with_cell(fresh_state.grid, 3, 3, cell))
        result = harvest_crop(state, 3, 3)
        assert result.harvested
        assert result.payout == 120
        assert result.state.money == fresh_state.money + 120
        assert cell_at(result.state.grid, 3, 3) is None

    def test_unready_crop_is_noop(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, TOMATO)
        result = harvest_crop(state, 0, 0)
        assert not result.harvested
        assert result.state is state

    def test_empty_cell_is_noop(self, fresh_state: FarmState) -> None:
        result = harvest_crop(fresh_state, 4, 4)
        assert result.payout == 0
        assert result.state is fresh_state

    def test_payout_rounds_half_up(self, fresh_state: FarmState) -> None:
        cell = CropCell(crop=WHEAT, growth_stage=2, yield_value=0.5)
        state = replace(fresh_state, grid=with_cell(fresh_state.grid, 0, 0, cell))
        # 75 * 0.5 = 37.5
        assert harvest_crop(state, 0, 0).payout == 38


class TestAdvanceDay:
    """Tests for the daily tick."""

    def test_rain_sets_moisture(self, fresh_state: FarmState) -> None:
        report = apply_day(fresh_state, Weather.RAINY, 70)
        assert report.state.moisture == 80
        assert report.state.weather is Weather.RAINY
        assert report.state.temperature == 70

    def test_wind_dries(self, fresh_state: FarmState) -> None:
        assert apply_day(fresh_state, Weather.WINDY, 70).state.moisture == 40

    def test_day_increments(self, fresh_state: FarmState) -> None:
        assert apply_day(fresh_state, Weather.SUNNY, 70).state.day == 2

    def test_wheat_ready_after_two_days(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, WHEAT)
        first = apply_day(state, Weather.SUNNY, 70)
        assert cell_at(first.state.grid, 0, 0).ready is False
        assert first.ready_count == 0
        assert first.growing_count == 1
        second = apply_day(first.state, Weather.SUNNY, 70)
        assert cell_at(second.state.grid, 0, 0).ready is True
        assert second.ready_count == 1

    def test_newly_ready_reported_once(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, WHEAT)
        state = plant_crop(state, 1, 1, CORN)
        first = apply_day(state, Weather.SUNNY, 70)
        assert first.newly_ready == ()
        second = apply_day(first.state, Weather.SUNNY, 70)
        assert second.newly_ready == ("WHEAT",)
        third = apply_day(second.state, Weather.SUNNY, 70)
        assert third.newly_ready == ("CORN",)
        assert third.ready_count == 2

    def test_ready_crop_stops_growing(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, WHEAT)
        for weather in (Weather.WINDY, Weather.WINDY):
            state = apply_day(state, weather, 70).state
        ready = cell_at(state.grid, 0, 0)
        state = apply_day(state, Weather.SUNNY, 40).state
        cell = cell_at(state.grid, 0, 0)
        assert cell.growth_stage == WHEAT.growth_time
        assert cell.yield_value == ready.yield_value

    def test_yield_uses_new_conditions(self, fresh_state: FarmState) -> None:
        state = plant_crop(fresh_state, 0, 0, CORN)
        # new day: cold (50 < 60), sunny dries 60 -> 50, below water need 60
        state = apply_day(state, Weather.SUNNY, 50).state
        assert cell_at(state.grid, 0, 0).yield_value == pytest.approx(0.35)

    def test_loan_interest(self) -> None:
        report = apply_day(FarmState(loans=1000), Weather.SUNNY, 70)
        assert report.interest == 10
        assert report.state.loans == 1010

    def test_no_interest_without_loan(self, fresh_state: FarmState) -> None:
        report = apply_day(fresh_state, Weather.SUNNY, 70)
        assert report.interest == 0
        assert report.state.loans == 0

    def test_random_roll_within_bounds(
        self,
        fresh_state: FarmState,
        rng: Generator,
    ) -> None:
        state = fresh_state
        for _ in range(50):
            state = advance_day(state, rng).state
            assert 55 <= state.temperature < 95
            assert 20 <= state.moisture <= 100
        assert state.day == 51


class TestMoney:
    """Tests for rounding, interest and loans."""

    def test_round_half_up(self) -> None:
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

    def test_accrue_interest(self) -> None:
        assert accrue_interest(1000) == 10
        assert accrue_interest(150) == 2
        assert accrue_interest(0) == 0

    def test_take_loan(self, fresh_state: FarmState) -> None:
        state = take_loan(fresh_state, 500)
        assert state.money == 1500
        assert state.loans == 500

    def test_take_loan_rejects_non_positive(self, fresh_state: FarmState) -> None:
        with pytest.raises(ValueError):
            take_loan(fresh_state, 0)

    def test_repay_capped_at_balance(self) -> None:
        state, repaid = repay_loan(FarmState(money=1000, loans=300), 500)
        assert repaid == 300
        assert state.loans == 0
        assert state.money == 700

    def test_repay_insufficient_funds(self) -> None:
        broke = FarmState(money=10, loans=300)
        with pytest.raises(InsufficientFunds):
            repay_loan(broke, 100)
