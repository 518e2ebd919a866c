"""
Purpose: The demo city/driver/customer/restaurant set.
What it does:
Holds the reference data as plain tuples (so the Django `loaddemo` command can
reuse it) and seeds an in-memory store with it.
"""

from typing import Dict, List, Tuple

from drivers.models import Driver
from orders.models import City, Customer, Restaurant

from .memory import InMemoryDispatchStore

DEMO_CITIES: List[str] = ["Jerusalem", "Tel-Aviv", "Beer-Sheva", "Haifa"]

# (name, city)
DEMO_DRIVERS: List[Tuple[str, str]] = [
    ("Mary", "Tel-Aviv"),
    ("Patricia", "Tel-Aviv"),
    ("Jennifer", "Haifa"),
    ("James", "Beer-Sheva"),
    ("John", "Beer-Sheva"),
    ("Robert", "Jerusalem"),
    ("David", "Jerusalem"),
    ("Daniel", "Tel-Aviv"),
    ("Noa", "Haifa"),
    ("Ofri", "Haifa"),
    ("Neta", "Jerusalem"),
]

# (name, city, address)
DEMO_CUSTOMERS: List[Tuple[str, str, str]] = [
    ("Beethoven", "Tel-Aviv", "Ludwig van Beethoven"),
    ("Mozart", "Jerusalem", "Wolfgang Amadeus Mozart"),
    ("Chopin", "Haifa", "Frédéric François Chopin"),
    ("Rachmaninoff", "Tel-Aviv", "Sergei Rachmaninoff"),
    ("Bach", "Tel-Aviv", "Sebastian Bach. Johann"),
    ("cust", "Beer-Sheva", "Sebastian Bach. Johann"),
]

# (name, city, description)
DEMO_RESTAURANTS: List[Tuple[str, str, str]] = [
    ("meat", "Jerusalem", "All meat restaurant"),
    ("vegan", "Tel-Aviv", "Only vegan"),
    ("cafe", "Tel-Aviv", "Coffee shop"),
    ("chinese", "Tel-Aviv", "chinese restaurant"),
    ("restaurant", "Tel-Aviv", "mexican restaurant "),
    ("indian", "Beer-Sheva", "indian restaurant "),
]


def seed_demo_store(store: InMemoryDispatchStore = None) -> InMemoryDispatchStore:
    store = store or InMemoryDispatchStore()

    cities: Dict[str, City] = {}
    for name in DEMO_CITIES:
        cities[name] = store.save_city(City(name=name))

    for name, city in DEMO_DRIVERS:
        store.save_driver(Driver.new(name, cities[city]))

    for name, city, address in DEMO_CUSTOMERS:
        store.save_customer(Customer(name=name, city=cities[city], address=address))

    for name, city, description in DEMO_RESTAURANTS:
        store.save_restaurant(Restaurant(name=name, city=cities[city], address=description))

    return store
