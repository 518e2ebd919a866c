#Purpose: Ranking/selection model (the "who is best" layer).
#Takes candidates (already eligible) and ranks them by workload:
#fewest total deliveries ever first, regardless of city or time.
#Tie-breaking rule (deterministic): lowest driver id.
#Output: ranked drivers, or just the least-busy one.

from typing import Dict, List

from drivers.models import Driver
from drivers.selection import least_busy_driver, order_by_least_busy
from storage.base import DispatchStore

from .errors import NoCandidatesError


def delivery_counts(store: DispatchStore, drivers: List[Driver]) -> Dict[int, int]:
    return {driver.id: store.count_deliveries_by_driver(driver) for driver in drivers}


def rank_candidates(store: DispatchStore, drivers: List[Driver]) -> List[Driver]:
    return order_by_least_busy(drivers, delivery_counts(store, drivers))


def select_least_busy(store: DispatchStore, drivers: List[Driver]) -> Driver:
    if not drivers:
        raise NoCandidatesError()

    # one candidate: no need to count anything
    if len(drivers) == 1:
        return drivers[0]

    return least_busy_driver(drivers, delivery_counts(store, drivers))
