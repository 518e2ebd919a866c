import random
from datetime import datetime, timedelta, timezone

import pytest

from dispatch import Dispatcher
from drivers.models import Driver
from orders.models import City, Customer, Delivery, Restaurant
from storage import InMemoryDispatchStore
from storage.demo import seed_demo_store


@pytest.fixture
def now():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    # Jerusalem, Tel-Aviv, Beer-Sheva, Haifa with their drivers, customers and restaurants
    return seed_demo_store()


@pytest.fixture
def dispatcher(store, now):
    return Dispatcher(store, rng=random.Random(1234), clock=lambda: now)


@pytest.fixture
def in_an_hour(now):
    return now + timedelta(hours=1)


def make_delivery(driver: Driver, when: datetime, distance: float = 1.0) -> Delivery:
    """
    A delivery record for `driver`, outside the dispatcher (history setup).
    """
    city = driver.city
    return Delivery(
        driver=driver,
        restaurant=Restaurant(name="history", city=city, id=999),
        customer=Customer(name="history", city=city, id=999),
        delivery_time=when,
        distance=distance,
    )


@pytest.fixture
def two_driver_city():
    """
    A store with one city and exactly two drivers, Mary (id 1) and Patricia (id 2).
    """
    store = InMemoryDispatchStore()
    tlv = store.save_city(City(name="Tel-Aviv"))
    mary = store.save_driver(Driver.new("Mary", tlv))
    patricia = store.save_driver(Driver.new("Patricia", tlv))
    customer = store.save_customer(Customer(name="Beethoven", city=tlv))
    restaurant = store.save_restaurant(Restaurant(name="vegan", city=tlv, address="Only vegan"))
    return store, mary, patricia, customer, restaurant
