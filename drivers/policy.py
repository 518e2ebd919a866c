"""
Purpose: Central configuration for Driver Selection and Delivery creation.
What it does:

Stores all tunable thresholds for deciding who is free and what a delivery looks like:

BUSY_WINDOW_SECONDS = 3600
MIN_DISTANCE = 0.0
MAX_DISTANCE = 20.0

Rule: No logic here—just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class DriverPolicy:
    """
    Central configuration for driver availability and delivery distance.
    """

    # --- Availability window ---
    # A driver is busy for a requested time if one of their deliveries is
    # strictly closer than this. Exactly this far apart counts as free.
    busy_window_seconds: int = 3600

    # --- Placeholder distance ---
    # Deliveries get a uniformly random distance in [min_distance, max_distance)
    # until real routing is plugged in.
    min_distance: float = 0.0
    max_distance: float = 20.0

    @property
    def busy_window(self) -> timedelta:
        return timedelta(seconds=self.busy_window_seconds)

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.busy_window_seconds <= 0:
            raise ValueError("busy_window_seconds must be > 0")

        if self.min_distance < 0:
            raise ValueError("min_distance must be >= 0")

        if self.max_distance <= self.min_distance:
            raise ValueError("max_distance must be greater than min_distance")


def default_driver_policy() -> DriverPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DriverPolicy()
    p.validate()
    return p
