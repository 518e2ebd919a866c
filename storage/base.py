"""
Purpose: The data-access capability set dispatch depends on.
What it does:
Declares the find/save operations (and the two distance aggregations) that any
backing store must offer. Dispatch only talks to this protocol, so the
in-memory store and the Django ORM store are interchangeable.

Rule: no business rules here, no storage technology either.
"""

from __future__ import annotations

from typing import ContextManager, List, Optional, Protocol

from drivers.models import Driver
from orders.models import City, Customer, Delivery, DriverDistance


class DispatchStore(Protocol):

    def find_customer_by_name(self, name: str) -> Optional[Customer]:
        ...

    def save_customer(self, customer: Customer) -> Customer:
        ...

    def find_drivers_by_city(self, city: City) -> List[Driver]:
        ...

    def find_deliveries_by_driver(self, driver: Driver) -> List[Delivery]:
        ...

    def count_deliveries_by_driver(self, driver: Driver) -> int:
        ...

    def save_delivery(self, delivery: Delivery) -> Delivery:
        ...

    def driver_total_distances(self, city: Optional[City] = None) -> List[DriverDistance]:
        """
        Drivers with at least one delivery paired with their summed distance,
        highest total first, ties broken by lowest driver id.
        """
        ...

    def atomic(self) -> ContextManager[None]:
        """
        Context in which a read-check-write sequence is committed as a unit.
        """
        ...
