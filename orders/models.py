"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- City (id, name)
- Customer (id, name, city, address) - name is the lookup key
- Restaurant (id, name, city, address)
- Delivery (id, driver, restaurant, customer, delivery_time, distance)
- DriverDistance (driver, total_distance) - report row, never persisted

Rule: No store calls, no assignment logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from drivers.models import Driver


@dataclass(frozen=True)
class City:
    """
    Geographic grouping. Customers, drivers and restaurants each belong to one.
    """
    name: str
    id: Optional[int] = None

    def same_as(self, other: Optional[City]) -> bool:
        # Cities are compared by identity once stored, by name before that
        if other is None:
            return False
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return self.name == other.name


@dataclass(frozen=True)
class Customer:
    name: str
    city: City
    address: str = ""
    id: Optional[int] = None

    def with_id(self, customer_id: int) -> Customer:
        return replace(self, id=customer_id)


@dataclass(frozen=True)
class Restaurant:
    name: str
    city: City
    # free-text description ("All meat restaurant")
    address: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class Delivery:
    """
    One driver assigned to carry one order from a restaurant to a customer.
    Immutable once created: there is no update or cancel path.
    """
    driver: Driver
    restaurant: Restaurant
    customer: Customer
    delivery_time: datetime

    # Placeholder for a real routing distance, drawn at creation time
    distance: float
    id: Optional[int] = None

    def with_id(self, delivery_id: int) -> Delivery:
        return replace(self, id=delivery_id)


@dataclass(frozen=True)
class DriverDistance:
    """
    Rank report row: a driver and the sum of the distances of all their deliveries.
    """
    driver: Driver
    total_distance: float
