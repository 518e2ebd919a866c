"""
Database-backed DispatchStore.

Translates between the ORM rows in `deliveries.models` and the frozen domain
dataclasses the dispatcher works with. The driver distance report is a single
GROUP BY query (SUM of delivery distance per driver).
"""
from typing import List, Optional

from django.db import transaction
from django.db.models import Sum

from drivers.models import Driver
from orders.models import City, Customer, Delivery, DriverDistance, Restaurant

from . import models


def to_city(row: models.City) -> City:
    return City(name=row.name, id=row.id)


def to_customer(row: models.Customer) -> Customer:
    return Customer(name=row.name, city=to_city(row.city), address=row.address, id=row.id)


def to_restaurant(row: models.Restaurant) -> Restaurant:
    return Restaurant(name=row.name, city=to_city(row.city), address=row.address, id=row.id)


def to_driver(row: models.Driver) -> Driver:
    return Driver(name=row.name, city=to_city(row.city), id=row.id)


def to_delivery(row: models.Delivery) -> Delivery:
    return Delivery(
        driver=to_driver(row.driver),
        restaurant=to_restaurant(row.restaurant),
        customer=to_customer(row.customer),
        delivery_time=row.delivery_time,
        distance=row.distance,
        id=row.id,
    )


def city_row(city: City) -> models.City:
    # unsaved cities are matched by their unique name
    if city.id is not None:
        return models.City.objects.get(pk=city.id)
    return models.City.objects.get(name=city.name)


class DjangoDispatchStore:

    def find_customer_by_name(self, name: str) -> Optional[Customer]:
        row = models.Customer.objects.select_related('city').filter(name=name).first()
        return to_customer(row) if row else None

    def save_customer(self, customer: Customer) -> Customer:
        row, _ = models.Customer.objects.get_or_create(
            name=customer.name,
            defaults={'city': city_row(customer.city), 'address': customer.address},
        )
        return to_customer(row)

    def find_drivers_by_city(self, city: City) -> List[Driver]:
        rows = models.Driver.objects.select_related('city')
        if city.id is not None:
            rows = rows.filter(city_id=city.id)
        else:
            rows = rows.filter(city__name=city.name)
        return [to_driver(row) for row in rows]

    def find_deliveries_by_driver(self, driver: Driver) -> List[Delivery]:
        rows = (
            models.Delivery.objects
            .filter(driver_id=driver.id)
            .select_related('driver__city', 'restaurant__city', 'customer__city')
        )
        return [to_delivery(row) for row in rows]

    def count_deliveries_by_driver(self, driver: Driver) -> int:
        return models.Delivery.objects.filter(driver_id=driver.id).count()

    def save_delivery(self, delivery: Delivery) -> Delivery:
        if delivery.id is not None:
            raise ValueError(f"Delivery {delivery.id} already exists and cannot be changed")

        row = models.Delivery.objects.create(
            driver_id=delivery.driver.id,
            restaurant_id=delivery.restaurant.id,
            customer_id=delivery.customer.id,
            delivery_time=delivery.delivery_time,
            distance=delivery.distance,
        )
        return delivery.with_id(row.id)

    def driver_total_distances(self, city: Optional[City] = None) -> List[DriverDistance]:
        rows = models.Driver.objects.select_related('city')
        if city is not None:
            rows = rows.filter(city_id=city.id) if city.id is not None else rows.filter(city__name=city.name)

        rows = (
            rows.annotate(total_distance=Sum('deliveries__distance'))
            .filter(total_distance__isnull=False)
            .order_by('-total_distance', 'id')
        )
        return [DriverDistance(driver=to_driver(row), total_distance=row.total_distance) for row in rows]

    def atomic(self):
        return transaction.atomic()

    # --- lookups used by the API layer ---

    def find_city_by_name(self, name: str) -> Optional[City]:
        row = models.City.objects.filter(name=name).first()
        return to_city(row) if row else None

    def find_restaurant_by_name(self, name: str) -> Optional[Restaurant]:
        row = models.Restaurant.objects.select_related('city').filter(name=name).first()
        return to_restaurant(row) if row else None
