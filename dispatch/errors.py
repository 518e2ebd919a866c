"""
Purpose: The failure kinds of order placement and reporting.
What it does:
Every rejection is synchronous and final (an invalid request or no capacity right
now), so nothing here is retried. Each kind is its own class with a stable `code`
so callers branch on type, never on message text.
"""


class DispatchError(Exception):
    """Base class for every dispatch rejection."""

    code = "dispatch_error"
    default_message = "Order could not be dispatched."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class InvalidInputError(DispatchError):
    """Raised when a required parameter is missing."""

    code = "invalid_input"
    default_message = "Invalid parameter. One or more are null."


class CityMismatchError(DispatchError):
    """Raised when the customer and the restaurant are in different cities."""

    code = "city_mismatch"
    default_message = (
        "Restaurant does not exist in the same city as you, "
        "please choose a restaurant from your city"
    )


class PastDeliveryTimeError(DispatchError):
    """Raised when the requested delivery time is not in the future."""

    code = "past_delivery_time"
    default_message = "Invalid Delivery Time, please choose a valid time."


class NoDriversInCityError(DispatchError):
    code = "no_drivers_in_city"
    default_message = "Sorry! No available drivers in your city"


class NoFreeDriversError(DispatchError):
    code = "no_free_drivers"
    default_message = "Sorry! No drivers are currently free in your city, try again later"


class NoCandidatesError(DispatchError):
    """Raised when least-busy selection runs on an empty pool. Should not happen
    once the availability gate has passed."""

    code = "no_candidates"
    default_message = "No candidate drivers to choose from."
