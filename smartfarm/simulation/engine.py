"""SimulationEngine — the top-level game controller.

Owns the current ``FarmState`` snapshot, the seeded RNG, the selected
crop and the notification queue.  Every player action is delegated to a
pure transition; the engine swaps in the returned state and turns the
outcome (or the ``FarmError`` raised) into a toast.

Actions run to completion one at a time on the caller's thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from smartfarm.crops.catalog import CropDefinition
from smartfarm.farm.analysis import FarmSummary, analyze_farm
from smartfarm.farm.grid import cell_at, empty_grid
from smartfarm.simulation import transitions
from smartfarm.simulation.config import SimulationConfig
from smartfarm.simulation.errors import FarmError, InvalidSelection
from smartfarm.simulation.state import FarmState
from smartfarm.ui.notifications import NotificationQueue

logger = logging.getLogger(__name__)


def _toast_text(exc: FarmError) -> str:
    icon = "❌" if exc.level == "error" else "🌱"
    return f"{icon} {exc}"


@dataclass
class SimulationEngine:
    """Drives the farm forward one player action at a time.

    Attributes:
        config: Loaded game configuration.
        state: Current immutable snapshot.
        notifications: Toasts produced by player actions.
        selected_crop: Crop kind the next planting will use.
        rng: Master seeded random generator.
    """

    config: SimulationConfig
    state: FarmState = field(init=False)
    notifications: NotificationQueue = field(init=False)
    selected_crop: str | None = field(init=False, default=None)
    rng: Generator = field(init=False)

    def __post_init__(self) -> None:
        """Build the day-1 state, RNG and toast queue from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.notifications = NotificationQueue(ttl=self.config.notification_ttl)
        self.reset()

    @property
    def catalog(self) -> dict[str, CropDefinition]:
        return self.config.crops

    def reset(self) -> None:
        """Start a fresh game on day 1."""
        self.state = FarmState(
            money=self.config.starting_money,
            weather=self.config.starting_weather,
            temperature=self.config.starting_temperature,
            moisture=self.config.starting_moisture,
            grid=empty_grid(self.config.grid_rows, self.config.grid_cols),
        )
        self.selected_crop = None
        self.notifications.clear()

    def snapshot(self) -> FarmState:
        """Return the current state; safe to hand to other threads."""
        return self.state

    def summary(self) -> FarmSummary:
        return analyze_farm(self.state.grid)

    def select_crop(self, kind: str | None) -> None:
        """Choose the crop kind used by the next planting.

        Args:
            kind: Catalog key (case-insensitive), or None to deselect.

        Raises:
            InvalidSelection: If ``kind`` is not in the catalog.
        """
        if kind is None:
            self.selected_crop = None
            return
        key = kind.upper()
        if key not in self.catalog:
            msg = f"Unknown crop {kind!r}"
            raise InvalidSelection(msg)
        self.selected_crop = key

    def plant(self, row: int, col: int) -> bool:
        """Plant the selected crop at ``(row, col)``.

        Returns:
            True if the crop was planted; False if a guard failed (a
            toast explains why and state is unchanged).
        """
        crop = self.catalog.get(self.selected_crop) if self.selected_crop else None
        previous = cell_at(self.state.grid, row, col)
        try:
            self.state = transitions.plant_crop(self.state, row, col, crop)
        except FarmError as exc:
            logger.info("Planting at (%d, %d) refused: %s", row, col, exc)
            self.notifications.push(_toast_text(exc), exc.level)
            return False

        if previous is not None:
            logger.warning(
                "Replanted (%d, %d): discarded %s at stage %d",
                row,
                col,
                previous.kind,
                previous.growth_stage,
            )
            self.notifications.push(
                f"Replaced {previous.kind} with {crop.kind}",
                "warning",
            )
        self.notifications.push(f"🌱 Planted {crop.kind}!", "success")
        return True

    def harvest(self, row: int, col: int) -> int:
        """Harvest ``(row, col)`` if ready.

        Returns:
            The payout credited, 0 when nothing was ready.
        """
        result = transitions.harvest_crop(self.state, row, col)
        if not result.harvested:
            return 0
        self.state = result.state
        self.notifications.push(
            f"💰 Harvested {result.crop_kind} for ${result.payout}!",
            "success",
        )
        return result.payout

    def click(self, row: int, col: int) -> None:
        """Grid click: harvest a ready cell, otherwise plant."""
        cell = cell_at(self.state.grid, row, col)
        if cell is not None and cell.ready:
            self.harvest(row, col)
        else:
            self.plant(row, col)

    def advance_day(self) -> transitions.DayReport:
        """Advance one day and post the day's toasts."""
        report = transitions.advance_day(
            self.state,
            self.rng,
            interest_rate=self.config.interest_rate,
            temperature_min=self.config.temperature_min,
            temperature_max=self.config.temperature_max,
        )
        self.state = report.state

        if report.interest:
            self.notifications.push(f"💸 Loan interest: ${report.interest}", "warning")
        if report.state.temperature > self.config.heat_alert_threshold:
            self.notifications.push(
                "🌡️ High temperature alert! Consider drought-resistant crops.",
                "warning",
            )
            if report.growing_count:
                self.notifications.push(
                    "💧 Water needs have increased for all crops.",
                    "info",
                )
        for kind in report.newly_ready:
            self.notifications.push(f"🌟 {kind} is ready to harvest!", "success")
        if report.ready_count:
            self.notifications.push(
                f"✨ You have {report.ready_count} crops ready to harvest!",
                "success",
            )
        logger.info(
            "Advanced to day %d (%s, %d°F)",
            self.state.day,
            self.state.weather.value,
            self.state.temperature,
        )
        return report

    def run(self, days: int) -> None:
        """Advance a fixed number of days.

        Args:
            days: Number of days to advance.
        """
        for _ in range(days):
            self.advance_day()

    def take_loan(self, amount: int) -> None:
        """Borrow ``amount``; interest accrues from the next day.

        Raises:
            ValueError: If ``amount`` is not positive.  A bad amount is a
                caller bug rather than a game error, so it is not toasted;
                ``repay_loan`` behaves the same way.
        """
        self.state = transitions.take_loan(self.state, amount)
        self.notifications.push(f"🏦 Borrowed ${amount}", "info")

    def repay_loan(self, amount: int) -> int:
        """Repay up to ``amount`` of the loan.

        Returns:
            Amount actually repaid, 0 if money was short.
        """
        try:
            self.state, repaid = transitions.repay_loan(self.state, amount)
        except FarmError as exc:
            logger.info("Repayment of %d refused: %s", amount, exc)
            self.notifications.push(_toast_text(exc), exc.level)
            return 0
        if repaid:
            self.notifications.push(f"🏦 Repaid ${repaid}", "success")
        return repaid
