import csv
import os
import random

from storage.demo import DEMO_CITIES

FIRST_NAMES = [
    "Avi", "Dana", "Yossi", "Noa", "Omer", "Tamar", "Itai", "Maya",
    "Eitan", "Shira", "Gal", "Lior", "Roni", "Yael", "Amit", "Hila",
]


def generate_mock_drivers(filename="sampledata/drivers.csv", count=40):
    # Drivers are spread over the demo cities with a bias towards Tel-Aviv,
    # so some cities run out of free drivers sooner than others in the simulation.
    os.makedirs(os.path.dirname(filename) or ".", exist_ok=True)

    weights = [3 if city == "Tel-Aviv" else 1 for city in DEMO_CITIES]

    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["name", "city"])

        for i in range(count):
            name = f"{random.choice(FIRST_NAMES)} {i+1}"
            city = random.choices(DEMO_CITIES, weights=weights)[0]

            writer.writerow([name, city])

    print(f"Successfully generated {count} mock drivers into '{filename}'.")

if __name__ == "__main__":
    generate_mock_drivers()
