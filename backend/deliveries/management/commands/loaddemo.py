from django.core.management.base import BaseCommand
from django.db import transaction

from storage.demo import DEMO_CITIES, DEMO_DRIVERS, DEMO_CUSTOMERS, DEMO_RESTAURANTS
from deliveries.models import City, Customer, Restaurant, Driver


class Command(BaseCommand):
    help = "Load the demo cities, drivers, customers and restaurants"

    @transaction.atomic
    def handle(self, *args, **kwargs):
        cities = {}
        for name in DEMO_CITIES:
            cities[name], _ = City.objects.get_or_create(name=name)

        for name, city in DEMO_DRIVERS:
            Driver.objects.get_or_create(name=name, city=cities[city])

        for name, city, address in DEMO_CUSTOMERS:
            Customer.objects.get_or_create(name=name, defaults={'city': cities[city], 'address': address})

        for name, city, description in DEMO_RESTAURANTS:
            Restaurant.objects.get_or_create(name=name, defaults={'city': cities[city], 'address': description})

        self.stdout.write(self.style.SUCCESS(
            f"Loaded demo data: {len(DEMO_CITIES)} cities, {len(DEMO_DRIVERS)} drivers, "
            f"{len(DEMO_CUSTOMERS)} customers, {len(DEMO_RESTAURANTS)} restaurants."
        ))
