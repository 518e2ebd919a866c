"""
Purpose: Package entry + stable exports.
What it does:

Marks orders as a Python package.

Re-exports the domain models so other modules can do:

from orders import City, Customer, Restaurant, Delivery

Should not contain business logic.

Public API:
- Domain models: City, Customer, Restaurant, Delivery, DriverDistance
"""
from .models import City, Customer, Restaurant, Delivery, DriverDistance

__all__ = ["City",
           "Customer",
             "Restaurant",
               "Delivery",
               "DriverDistance",
               ]
