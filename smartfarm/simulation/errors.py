"""Game-level errors.

Each error carries the toast level it is shown with.  None of them are
fatal: the engine reports them and leaves state untouched.
"""

from __future__ import annotations


class FarmError(Exception):
    """Base class for recoverable game errors."""

    level = "error"


class InvalidSelection(FarmError):
    """No crop kind (or an unknown one) was chosen before planting."""

    level = "warning"


class InsufficientFunds(FarmError):
    """Money balance is below the amount an action requires."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"Not enough money! Need ${needed}")
        self.needed = needed
        self.available = available


class AdvisoryUnavailable(FarmError):
    """The advice service could not be reached or answered unexpectedly."""

    level = "warning"
