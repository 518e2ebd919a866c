from django.db import models


class City(models.Model):
    """
    Geographic grouping. Decides which drivers can serve a customer.
    """
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        verbose_name_plural = "cities"

    def __str__(self):
        return self.name


class Customer(models.Model):
    """
    Ordering customer. Looked up (and upserted) by name when an order is placed.
    """
    name = models.CharField(max_length=255, unique=True)
    city = models.ForeignKey(City, on_delete=models.PROTECT, related_name='customers')
    address = models.TextField(blank=True)

    def __str__(self):
        return self.name


class Restaurant(models.Model):
    name = models.CharField(max_length=255, unique=True)
    city = models.ForeignKey(City, on_delete=models.PROTECT, related_name='restaurants')
    # Free-text description
    address = models.TextField(blank=True)

    def __str__(self):
        return self.name


class Driver(models.Model):
    """
    Delivery driver registered in one city. Provisioned by admins, never by dispatch.
    """
    name = models.CharField(max_length=255)
    city = models.ForeignKey(City, on_delete=models.PROTECT, related_name='drivers')

    def __str__(self):
        return f"{self.name} ({self.city})"


class Delivery(models.Model):
    """
    A driver carrying one order from a restaurant to a customer.
    Rows are written once by the dispatcher and never updated.
    """
    driver = models.ForeignKey(Driver, on_delete=models.PROTECT, related_name='deliveries')
    restaurant = models.ForeignKey(Restaurant, on_delete=models.PROTECT, related_name='deliveries')
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='deliveries')

    delivery_time = models.DateTimeField()
    # Random placeholder until real routing exists
    distance = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "deliveries"
        # availability checks look up a driver's deliveries around a time
        indexes = [models.Index(fields=['driver', 'delivery_time'], name='delivery_driver_time_idx')]

    def __str__(self):
        return f"Delivery #{self.id} - {self.driver.name} at {self.delivery_time:%Y-%m-%d %H:%M}"
