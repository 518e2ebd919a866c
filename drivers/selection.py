"""
Purpose: Business rules for choosing the driver to carry an order.
What it does:
Accepts a pool of drivers plus their delivery history, filters out drivers who
are busy around the requested time, and orders the remaining ones least busy first.

No store access here: callers fetch history and pass it in.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from orders.models import Delivery
from .models import Driver
from .policy import DriverPolicy, default_driver_policy


def is_driver_free(
    deliveries: Iterable[Delivery],
    requested_time: datetime,
    policy: Optional[DriverPolicy] = None,
) -> bool:
    """
    A driver is free unless one of their deliveries lies strictly inside the
    busy window around the requested time. Exactly one window apart is free.
    """
    policy = policy or default_driver_policy()
    window = policy.busy_window

    for delivery in deliveries:
        if abs(delivery.delivery_time - requested_time) < window:
            return False

    return True


def filter_free_drivers(
    drivers: Sequence[Driver],
    deliveries_by_driver: Mapping[int, Sequence[Delivery]],
    requested_time: datetime,
    policy: Optional[DriverPolicy] = None,
) -> List[Driver]:
    """
    Returns only drivers with no delivery inside the busy window.
    Drivers missing from `deliveries_by_driver` have no history and are free.
    """
    policy = policy or default_driver_policy()
    free = []

    for driver in drivers:
        history = deliveries_by_driver.get(driver.id, ())
        if not is_driver_free(history, requested_time, policy):
            continue

        free.append(driver)

    return free


def least_busy_key(driver: Driver, delivery_counts: Mapping[int, int]) -> Tuple[int, int]:
    # fewest deliveries first, then lowest id so ties are deterministic
    return (delivery_counts.get(driver.id, 0), driver.id if driver.id is not None else -1)


def order_by_least_busy(drivers: Sequence[Driver], delivery_counts: Mapping[int, int]) -> List[Driver]:
    return sorted(drivers, key=lambda driver: least_busy_key(driver, delivery_counts))


def least_busy_driver(drivers: Sequence[Driver], delivery_counts: Dict[int, int]) -> Optional[Driver]:
    """
    The driver with the fewest total deliveries, or None for an empty pool.
    """
    if not drivers:
        return None

    if len(drivers) == 1:
        return drivers[0]

    return min(drivers, key=lambda driver: least_busy_key(driver, delivery_counts))
