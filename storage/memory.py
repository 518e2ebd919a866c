"""
Purpose: In-memory implementation of the dispatch store.
What it does:
- Owns dicts of cities, customers, restaurants, drivers and deliveries keyed by id
- Assigns incrementing ids on save (like a database sequence)
- Answers the lookups dispatch needs (customer by name, drivers by city,
  deliveries by driver) and the driver distance aggregation

Used by the simulation script and the test-suite. The Django backend ships the
database-backed equivalent.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from drivers.models import Driver
from orders.models import City, Customer, Delivery, DriverDistance, Restaurant


@dataclass
class InMemoryDispatchStore:
    """
    Dict-backed store. Records are frozen dataclasses, so every save returns
    the stored copy carrying its id.
    """
    _cities: Dict[int, City] = field(default_factory=dict)
    _customers: Dict[int, Customer] = field(default_factory=dict)
    _restaurants: Dict[int, Restaurant] = field(default_factory=dict)
    _drivers: Dict[int, Driver] = field(default_factory=dict)
    _deliveries: Dict[int, Delivery] = field(default_factory=dict)

    # one id sequence per record type
    _sequences: Dict[str, Iterator[int]] = field(
        default_factory=lambda: {
            name: itertools.count(1)
            for name in ("city", "customer", "restaurant", "driver", "delivery")
        }
    )
    _lock: threading.RLock = field(default_factory=threading.RLock)

    def _next_id(self, kind: str) -> int:
        return next(self._sequences[kind])

    # --- Setup helpers (cities, restaurants and drivers are provisioned externally) ---

    def save_city(self, city: City) -> City:
        with self._lock:
            if city.id is None:
                city = replace(city, id=self._next_id("city"))
            self._cities[city.id] = city
            return city

    def find_city_by_name(self, name: str) -> Optional[City]:
        for city in self._cities.values():
            if city.name == name:
                return city
        return None

    def cities(self) -> List[City]:
        return list(self._cities.values())

    def save_restaurant(self, restaurant: Restaurant) -> Restaurant:
        with self._lock:
            if restaurant.id is None:
                restaurant = replace(restaurant, id=self._next_id("restaurant"))
            self._restaurants[restaurant.id] = restaurant
            return restaurant

    def find_restaurant_by_name(self, name: str) -> Optional[Restaurant]:
        for restaurant in self._restaurants.values():
            if restaurant.name == name:
                return restaurant
        return None

    def save_driver(self, driver: Driver) -> Driver:
        with self._lock:
            if driver.id is None:
                driver = driver.with_id(self._next_id("driver"))
            self._drivers[driver.id] = driver
            return driver

    def drivers(self) -> List[Driver]:
        return list(self._drivers.values())

    def customers(self) -> List[Customer]:
        return list(self._customers.values())

    def deliveries(self) -> List[Delivery]:
        return list(self._deliveries.values())

    # --- Store protocol ---

    def find_customer_by_name(self, name: str) -> Optional[Customer]:
        for customer in self._customers.values():
            if customer.name == name:
                return customer
        return None

    def save_customer(self, customer: Customer) -> Customer:
        with self._lock:
            if customer.id is None:
                customer = customer.with_id(self._next_id("customer"))
            self._customers[customer.id] = customer
            return customer

    def find_drivers_by_city(self, city: City) -> List[Driver]:
        return [driver for driver in self._drivers.values() if driver.city.same_as(city)]

    def find_deliveries_by_driver(self, driver: Driver) -> List[Delivery]:
        return [
            delivery for delivery in self._deliveries.values()
            if delivery.driver.id == driver.id
        ]

    def count_deliveries_by_driver(self, driver: Driver) -> int:
        return len(self.find_deliveries_by_driver(driver))

    def save_delivery(self, delivery: Delivery) -> Delivery:
        with self._lock:
            if delivery.id is not None and delivery.id in self._deliveries:
                raise ValueError(f"Delivery {delivery.id} already exists and cannot be changed")
            if delivery.id is None:
                delivery = delivery.with_id(self._next_id("delivery"))
            self._deliveries[delivery.id] = delivery
            return delivery

    def driver_total_distances(self, city: Optional[City] = None) -> List[DriverDistance]:
        # imported here: dispatch imports storage at package load
        from dispatch.reports import rank_driver_distances

        return rank_driver_distances(self.deliveries(), city=city)

    @contextmanager
    def atomic(self):
        with self._lock:
            yield
