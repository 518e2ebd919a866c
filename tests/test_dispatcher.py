import random
import threading
from datetime import timedelta

import pytest

from dispatch import (
    CityLockManager,
    CityMismatchError,
    Dispatcher,
    InvalidInputError,
    NoDriversInCityError,
    NoFreeDriversError,
    PastDeliveryTimeError,
)
from drivers.policy import DriverPolicy
from orders.models import City, Customer, Restaurant


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__()
        self.value = value

    def random(self):
        return self.value


def test_tel_aviv_order_goes_to_lowest_id_of_equally_idle_drivers(two_driver_city, now):
    store, mary, patricia, customer, restaurant = two_driver_city
    dispatcher = Dispatcher(store, clock=lambda: now)

    delivery = dispatcher.create_order_and_assign_driver(customer, restaurant, now + timedelta(minutes=30))

    assert delivery.driver in (mary, patricia)
    assert delivery.driver == mary
    assert 0 <= delivery.distance < 20
    assert delivery.id is not None
    assert store.deliveries() == [delivery]


def test_delivery_is_from_customer_city(store, dispatcher, in_an_hour):
    customer = store.find_customer_by_name("Mozart")
    restaurant = store.find_restaurant_by_name("meat")

    delivery = dispatcher.create_order_and_assign_driver(customer, restaurant, in_an_hour)

    assert delivery.driver.city.name == "Jerusalem"
    assert delivery.customer == customer
    assert delivery.restaurant == restaurant
    assert delivery.delivery_time == in_an_hour


def test_distance_comes_from_injected_randomness(two_driver_city, now):
    store, _, _, customer, restaurant = two_driver_city
    dispatcher = Dispatcher(store, rng=FixedRandom(0.5), clock=lambda: now)

    delivery = dispatcher.create_order_and_assign_driver(customer, restaurant, now + timedelta(hours=2))

    assert delivery.distance == 10.0


def test_distance_range_follows_policy(two_driver_city, now):
    store, _, _, customer, restaurant = two_driver_city
    policy = DriverPolicy(min_distance=2.0, max_distance=4.0)
    dispatcher = Dispatcher(store, policy=policy, rng=FixedRandom(0.25), clock=lambda: now)

    delivery = dispatcher.create_order_and_assign_driver(customer, restaurant, now + timedelta(hours=2))

    assert delivery.distance == 2.5


def test_city_mismatch_persists_nothing(store, dispatcher, in_an_hour):
    customer = store.find_customer_by_name("Beethoven")
    restaurant = store.find_restaurant_by_name("meat")

    with pytest.raises(CityMismatchError):
        dispatcher.create_order_and_assign_driver(customer, restaurant, in_an_hour)

    assert store.deliveries() == []


def test_past_delivery_time(store, dispatcher, now):
    customer = store.find_customer_by_name("Beethoven")
    restaurant = store.find_restaurant_by_name("vegan")

    with pytest.raises(PastDeliveryTimeError):
        dispatcher.create_order_and_assign_driver(customer, restaurant, now - timedelta(hours=1))


def test_same_invalid_input_fails_the_same_way_twice(store, dispatcher, in_an_hour):
    restaurant = store.find_restaurant_by_name("vegan")

    for _ in range(2):
        with pytest.raises(InvalidInputError):
            dispatcher.create_order_and_assign_driver(None, restaurant, in_an_hour)


def test_new_customer_is_registered_with_the_order(store, dispatcher, in_an_hour):
    jerusalem = store.find_city_by_name("Jerusalem")
    customer = Customer(name="Beethoven 22", city=jerusalem, address="Ludwig van Beethoven")

    delivery = dispatcher.create_order_and_assign_driver(customer, store.find_restaurant_by_name("meat"), in_an_hour)

    assert len(store.customers()) == 7
    assert delivery.customer == store.find_customer_by_name("Beethoven 22")


def test_new_customer_stays_registered_when_no_drivers(store, dispatcher, in_an_hour):
    eilat = store.save_city(City(name="Eilat"))
    restaurant = store.save_restaurant(Restaurant(name="restauranttt", city=eilat))
    customer = Customer(name="Bach2", city=eilat)

    with pytest.raises(NoDriversInCityError):
        dispatcher.create_order_and_assign_driver(customer, restaurant, in_an_hour)

    assert store.find_customer_by_name("Bach2") is not None
    assert len(store.customers()) == 7


def test_city_runs_out_of_free_drivers(store, dispatcher, now):
    # Tel-Aviv has three drivers; four orders within half an hour of each other
    customer = store.find_customer_by_name("Beethoven")
    restaurant = store.find_restaurant_by_name("vegan")
    first = now + timedelta(minutes=5)
    second = now + timedelta(minutes=35)

    for when in (first, second, first):
        dispatcher.create_order_and_assign_driver(customer, restaurant, when)

    with pytest.raises(NoFreeDriversError):
        dispatcher.create_order_and_assign_driver(customer, restaurant, second)

    assert len(store.deliveries()) == 3
    assert len({delivery.driver.id for delivery in store.deliveries()}) == 3


def test_least_busy_driver_is_picked(store, dispatcher, now):
    customer = store.find_customer_by_name("Beethoven")
    restaurant = store.find_restaurant_by_name("vegan")
    first = now + timedelta(minutes=5)
    an_hour_later = first + timedelta(hours=1)

    dl1 = dispatcher.create_order_and_assign_driver(customer, restaurant, first)
    dl2 = dispatcher.create_order_and_assign_driver(customer, restaurant, first)
    dl3 = dispatcher.create_order_and_assign_driver(customer, restaurant, an_hour_later)

    # everyone is free an hour later, the one driver without a delivery wins
    idle = [
        driver for driver in store.find_drivers_by_city(customer.city)
        if driver.id not in (dl1.driver.id, dl2.driver.id)
    ]
    assert len(idle) == 1
    assert dl3.driver == idle[0]


def test_rank_reports(store, dispatcher, in_an_hour):
    tlv_delivery = dispatcher.create_order_and_assign_driver(
        store.find_customer_by_name("Beethoven"), store.find_restaurant_by_name("vegan"), in_an_hour
    )
    jer_1 = dispatcher.create_order_and_assign_driver(
        store.find_customer_by_name("Mozart"), store.find_restaurant_by_name("meat"), in_an_hour
    )
    jer_2 = dispatcher.create_order_and_assign_driver(
        store.find_customer_by_name("Mozart"), store.find_restaurant_by_name("meat"), in_an_hour
    )

    report = dispatcher.get_driver_rank_report()
    assert len(report) == 3
    assert report[0].total_distance == max(d.distance for d in (tlv_delivery, jer_1, jer_2))
    assert [row.total_distance for row in report] == sorted((row.total_distance for row in report), reverse=True)

    jerusalem = store.find_city_by_name("Jerusalem")
    city_report = dispatcher.get_driver_rank_report_by_city(jerusalem)
    assert len(city_report) == 2
    assert all(row.driver.city == jerusalem for row in city_report)
    expected_top = jer_1.driver if jer_1.distance > jer_2.distance else jer_2.driver
    assert city_report[0].driver == expected_top


def test_city_report_needs_a_city(dispatcher):
    with pytest.raises(InvalidInputError):
        dispatcher.get_driver_rank_report_by_city(None)


def test_concurrent_orders_do_not_share_a_driver(now):
    # one driver, many simultaneous orders for the same slot: exactly one wins
    from storage import InMemoryDispatchStore
    from drivers.models import Driver

    store = InMemoryDispatchStore()
    haifa = store.save_city(City(name="Haifa"))
    store.save_driver(Driver.new("Noa", haifa))
    restaurant = store.save_restaurant(Restaurant(name="falafel", city=haifa))
    dispatcher = Dispatcher(store, clock=lambda: now)
    when = now + timedelta(hours=1)

    results = []

    def place(index):
        customer = Customer(name=f"customer {index}", city=haifa)
        try:
            results.append(dispatcher.create_order_and_assign_driver(customer, restaurant, when))
        except NoFreeDriversError as e:
            results.append(e)

    threads = [threading.Thread(target=place, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert len(store.deliveries()) == 1
    assert sum(isinstance(result, NoFreeDriversError) for result in results) == 7


def test_known_customer_ordering_in_another_city_gets_a_driver_there(store, dispatcher, in_an_hour):
    # Beethoven is stored in Tel-Aviv, this order is for Jerusalem
    jerusalem = store.find_city_by_name("Jerusalem")

    delivery = dispatcher.create_order_and_assign_driver(
        Customer(name="Beethoven", city=jerusalem), store.find_restaurant_by_name("meat"), in_an_hour
    )

    assert delivery.driver.city == jerusalem
    assert delivery.customer == store.find_customer_by_name("Beethoven")
    assert len(store.customers()) == 6


def test_customer_without_city_is_invalid_input(store, dispatcher, in_an_hour):
    with pytest.raises(InvalidInputError):
        dispatcher.create_order_and_assign_driver(
            Customer(name="Nomad", city=None), store.find_restaurant_by_name("meat"), in_an_hour
        )

    assert store.find_customer_by_name("Nomad") is None


def test_orders_are_locked_on_the_customer_city(store, now, in_an_hour):
    class RecordingLocks(CityLockManager):
        def __init__(self):
            super().__init__()
            self.keys = []

        def lock(self, key):
            self.keys.append(key)
            return super().lock(key)

    locks = RecordingLocks()
    dispatcher = Dispatcher(store, clock=lambda: now, lock_manager=locks)
    jerusalem = store.find_city_by_name("Jerusalem")

    dispatcher.create_order_and_assign_driver(
        Customer(name="Beethoven", city=jerusalem), store.find_restaurant_by_name("meat"), in_an_hour
    )

    assert locks.keys == [f"city_{jerusalem.id}"]
