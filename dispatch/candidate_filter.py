#Purpose: Hard eligibility filtering (rule gates).
#Builds the base candidate set before scoring.
#Responsibilities:
#city membership (only drivers registered in the customer's city)
#time availability (no delivery within the busy window of the requested time)
#
#Output: "rule-qualified drivers" (still not ranked).
#Each gate raises when nothing survives it.
#
#Availability costs one history lookup per candidate. A store index keyed by
#(driver, hour bucket) would avoid the full scan for large fleets.

import logging
from datetime import datetime
from typing import List, Optional

from drivers.models import Driver
from drivers.policy import DriverPolicy, default_driver_policy
from drivers.selection import filter_free_drivers
from orders.models import City
from storage.base import DispatchStore

from .errors import NoDriversInCityError, NoFreeDriversError

logger = logging.getLogger(__name__)


def build_base_candidates(store: DispatchStore, city: City) -> List[Driver]:
    """
    Every driver registered in `city`. Order is not significant.
    """
    drivers = store.find_drivers_by_city(city)
    if not drivers:
        raise NoDriversInCityError()

    logger.debug(f"{len(drivers)} drivers registered in {city.name}")
    return drivers


def filter_available_candidates(
    store: DispatchStore,
    drivers: List[Driver],
    requested_time: datetime,
    policy: Optional[DriverPolicy] = None,
) -> List[Driver]:
    """
    Drivers with no delivery inside the busy window around `requested_time`.
    """
    policy = policy or default_driver_policy()

    history = {driver.id: store.find_deliveries_by_driver(driver) for driver in drivers}
    free = filter_free_drivers(drivers, history, requested_time, policy)

    if not free:
        raise NoFreeDriversError()

    logger.debug(f"{len(free)} of {len(drivers)} drivers free at {requested_time.isoformat()}")
    return free
