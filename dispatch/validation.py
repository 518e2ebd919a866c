"""
Purpose: Order validation (the gate before any driver is looked at).
What it does:
1. Rejects missing parameters.
2. Makes sure the customer is known, upserting by name. This is a side effect
   of its own: it stays even if a later check rejects the order.
3. Rejects orders where the customer and the restaurant are in different cities.
4. Rejects delivery times that are not strictly in the future.
"""

import logging
from datetime import datetime

from orders.models import Customer, Restaurant
from storage.base import DispatchStore

from .errors import CityMismatchError, InvalidInputError, PastDeliveryTimeError

logger = logging.getLogger(__name__)


def ensure_customer(store: DispatchStore, customer: Customer) -> Customer:
    """
    Idempotent upsert by name. An existing record wins over the incoming one.
    """
    known = store.find_customer_by_name(customer.name)
    if known is not None:
        return known

    saved = store.save_customer(customer)
    logger.info(f"Registered new customer {saved.name!r} (id={saved.id}) in {saved.city.name}")
    return saved


def validate_order(
    store: DispatchStore,
    customer: Customer,
    restaurant: Restaurant,
    delivery_time: datetime,
    now: datetime,
) -> Customer:
    """
    Returns the stored customer the order belongs to. The city check uses the
    city the order names, not the one on an older record with the same name.
    """
    if customer is None or restaurant is None or delivery_time is None:
        raise InvalidInputError()

    if customer.city is None or restaurant.city is None:
        raise InvalidInputError("Customer and restaurant must both have a city.")

    if delivery_time.tzinfo is None:
        raise InvalidInputError("Delivery time must be timezone-aware.")

    stored = ensure_customer(store, customer)

    if not customer.city.same_as(restaurant.city):
        raise CityMismatchError()

    if delivery_time <= now:
        raise PastDeliveryTimeError()

    return stored
