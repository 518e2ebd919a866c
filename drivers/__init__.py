"""
Drivers domain package.

Public API:
- Domain model: Driver
- Tunables: DriverPolicy, default_driver_policy
- Selection rules: is_driver_free, filter_free_drivers, least_busy_driver
"""
from .models import Driver
from .policy import DriverPolicy, default_driver_policy
from .selection import is_driver_free, filter_free_drivers, least_busy_driver, order_by_least_busy

__all__ = ["Driver",
           "DriverPolicy",
             "default_driver_policy",
               "is_driver_free",
               "filter_free_drivers",
               "least_busy_driver",
               "order_by_least_busy",
               ]
