"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Accepts an order (customer, restaurant, delivery time), validates it, narrows the
drivers of the city down to the free ones, picks the least busy and records the
delivery. Also serves the driver rank reports.

request -> validation -> city candidates -> availability gate -> least-busy pick -> delivery saved
"""

import logging
import random
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from drivers.models import Driver
from drivers.policy import DriverPolicy, default_driver_policy
from orders.models import City, Customer, Delivery, DriverDistance, Restaurant
from storage.base import DispatchStore

from .candidate_filter import build_base_candidates, filter_available_candidates
from .errors import DispatchError, InvalidInputError
from .scoring import select_least_busy
from .validation import validate_order

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CityLockManager:
    """
    Hands out one lock per key. The dispatcher holds a city's lock for the whole
    check-then-assign sequence so two orders in the same city cannot both see
    the same driver as free.
    """
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    @contextmanager
    def lock(self, key: str):
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            yield


class Dispatcher:
    """
    Assigns drivers to orders and reports driver workload.
    """
    def __init__(
        self,
        store: DispatchStore,
        policy: Optional[DriverPolicy] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        lock_manager: Optional[CityLockManager] = None,
    ):
        self.store = store
        self.policy = policy or default_driver_policy()
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.lock_manager = lock_manager or CityLockManager()

    def create_order_and_assign_driver(
        self,
        customer: Customer,
        restaurant: Restaurant,
        delivery_time: datetime,
    ) -> Delivery:
        """
        Returns the saved Delivery, or raises a DispatchError subclass naming
        why the order was rejected.
        """
        with self.lock_manager.lock(self._lock_key(customer)):
            try:
                # The customer upsert inside validation commits on its own,
                # a later rejection does not undo it.
                stored = validate_order(self.store, customer, restaurant, delivery_time, self.clock())

                with self.store.atomic():
                    # drivers come from the city this order names
                    drivers = build_base_candidates(self.store, customer.city)
                    free_drivers = filter_available_candidates(self.store, drivers, delivery_time, self.policy)
                    driver = select_least_busy(self.store, free_drivers)

                    delivery = self._create_delivery(driver, restaurant, stored, delivery_time)
            except DispatchError as e:
                logger.warning(f"Order rejected ({e.code}): {e.message}")
                raise

        logger.info(
            f"Delivery {delivery.id} assigned to driver {driver.name} (id={driver.id}) "
            f"for {customer.name} from {restaurant.name} at {delivery_time.isoformat()}, "
            f"distance {delivery.distance:.2f}"
        )
        return delivery

    def get_driver_rank_report(self) -> List[DriverDistance]:
        return self.store.driver_total_distances()

    def get_driver_rank_report_by_city(self, city: City) -> List[DriverDistance]:
        if city is None:
            raise InvalidInputError("City is required for a city report.")
        return self.store.driver_total_distances(city=city)

    # --- internals ---

    def _create_delivery(
        self,
        driver: Driver,
        restaurant: Restaurant,
        customer: Customer,
        delivery_time: datetime,
    ) -> Delivery:
        low, high = self.policy.min_distance, self.policy.max_distance
        # stand-in for a routed distance, uniform in [low, high)
        distance = low + (high - low) * self.rng.random()

        delivery = Delivery(
            driver=driver,
            restaurant=restaurant,
            customer=customer,
            delivery_time=delivery_time,
            distance=distance,
        )
        return self.store.save_delivery(delivery)

    @staticmethod
    def _lock_key(customer: Optional[Customer]) -> str:
        if customer is None or customer.city is None:
            return "city_unknown"
        city = customer.city
        return f"city_{city.id if city.id is not None else city.name}"
