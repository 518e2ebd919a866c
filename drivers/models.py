"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a Driver without relying on Django ORM constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from orders.models import City


@dataclass(frozen=True)
class Driver:
    """
    A purely stateless representation of a Driver registered in one city.
    Drivers are provisioned by external setup; dispatch never creates them.
    """
    name: str
    city: City
    id: Optional[int] = None

    def with_id(self, driver_id: int) -> Driver:
        return replace(self, id=driver_id)

    @classmethod
    def new(cls, name: str, city: City, driver_id: Optional[int] = None) -> Driver:
        if not name:
            raise ValueError("Driver name must not be empty")
        return cls(name=name, city=city, id=driver_id)
