import csv
import logging
import os
import random
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import List

from dispatch import Dispatcher, DispatchError
from dispatch.config import configure_logging, policy_from_env
from dispatch.reports import report_to_frame
from drivers.models import Driver
from orders.models import Customer
from storage import InMemoryDispatchStore
from storage.demo import seed_demo_store

logger = logging.getLogger("scripts.run_dispatch_simulation")


def load_drivers(store: InMemoryDispatchStore, filepath="sampledata/drivers.csv") -> List[Driver]:
    """
    Adds the drivers from a generate_mock_drivers.py CSV, if one exists.
    Rows naming an unknown city are skipped.
    """
    drivers = []

    # Resolve the correct path depending on where the user runs the script from.
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    absolute_path = os.path.join(base_dir, filepath)
    if not os.path.exists(absolute_path):
        return drivers

    with open(absolute_path, 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            city = store.find_city_by_name(row['city'])
            if city is None:
                logger.warning(f"Skipping driver {row['name']!r}: unknown city {row['city']!r}")
                continue
            drivers.append(store.save_driver(Driver.new(row['name'], city)))
    return drivers


def run_simulation(num_orders=60, seed=None):
    configure_logging()
    print("=== STARTING END-TO-END DISPATCH SIMULATION ===")

    # 1. Load Data
    store = seed_demo_store()
    extra_drivers = load_drivers(store)
    print(f"Loaded {len(store.cities())} Cities, {len(store.drivers())} Drivers "
          f"({len(extra_drivers)} from CSV) and {len(store.customers())} Customers.\n")

    # 2. Configure System
    rng = random.Random(seed)
    dispatcher = Dispatcher(store, policy=policy_from_env(), rng=rng)
    restaurants = [store.find_restaurant_by_name(name) for name in ("meat", "vegan", "cafe", "chinese", "restaurant", "indian")]
    start = datetime.now(timezone.utc)

    # 3. Place orders: random customer, random restaurant, within the next 4 hours.
    #    Some pairs are in different cities on purpose, and every tenth customer is new.
    outcomes = Counter()
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    output_path = os.path.join(base_dir, "dispatch_results.csv")

    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["order", "customer", "restaurant", "delivery_time", "driver", "distance", "outcome"])

        for order_index in range(num_orders):
            if order_index % 10 == 9:
                city = rng.choice(store.cities())
                customer = Customer(name=f"Guest {order_index}", city=city, address="walk-in")
            else:
                customer = rng.choice(store.customers())

            restaurant = rng.choice(restaurants)
            delivery_time = start + timedelta(minutes=rng.randint(1, 240))

            try:
                delivery = dispatcher.create_order_and_assign_driver(customer, restaurant, delivery_time)
            except DispatchError as e:
                outcomes[e.code] += 1
                writer.writerow([order_index, customer.name, restaurant.name, delivery_time.isoformat(), "", "", e.code])
                continue

            outcomes["assigned"] += 1
            writer.writerow([
                order_index,
                customer.name,
                restaurant.name,
                delivery_time.isoformat(),
                delivery.driver.name,
                round(delivery.distance, 2),
                "assigned",
            ])

    # 4. Reports
    print("\n--- Outcomes ---")
    for outcome, count in outcomes.most_common():
        print(f"  {outcome}: {count}")

    print("\n--- Driver Rank Report (all cities) ---")
    print(report_to_frame(dispatcher.get_driver_rank_report()).to_string(index=False))

    for city in store.cities():
        report = dispatcher.get_driver_rank_report_by_city(city)
        if not report:
            continue
        print(f"\n--- Driver Rank Report ({city.name}) ---")
        print(report_to_frame(report).to_string(index=False))

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Orders Assigned: {outcomes['assigned']} / {num_orders}")
    print(f"Results written to '{output_path}'.")

if __name__ == "__main__":
    run_simulation()
