#Expose the high-level pipeline pieces:
#Order validation (input gates + customer upsert)
#Candidate filtering (hard rules)
#Scoring / least-busy selection
#Rank reports
#Dispatcher orchestrator (the "one call" entry point)

from .errors import (
    DispatchError,
    InvalidInputError,
    CityMismatchError,
    PastDeliveryTimeError,
    NoDriversInCityError,
    NoFreeDriversError,
    NoCandidatesError,
)
from .validation import ensure_customer, validate_order
from .candidate_filter import build_base_candidates, filter_available_candidates
from .scoring import rank_candidates, select_least_busy
from .reports import rank_driver_distances
from .dispatcher import Dispatcher, CityLockManager #the main class to call to dispatch an order to a driver

__all__ = [
    "DispatchError",
    "InvalidInputError",
    "CityMismatchError",
    "PastDeliveryTimeError",
    "NoDriversInCityError",
    "NoFreeDriversError",
    "NoCandidatesError",
    "ensure_customer",
    "validate_order",
    "build_base_candidates",
    "filter_available_candidates",
    "rank_candidates",
    "select_least_busy",
    "rank_driver_distances",
    "Dispatcher",
    "CityLockManager",
]
