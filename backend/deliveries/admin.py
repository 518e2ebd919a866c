from django.contrib import admin
from .models import City, Customer, Restaurant, Driver, Delivery


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ("id", "name")


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "city", "address")
    list_filter = ("city",)


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "city", "address")
    list_filter = ("city",)


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "city")
    list_filter = ("city",)


@admin.register(Delivery)
class DeliveryAdmin(admin.ModelAdmin):
    list_display = ("id", "driver", "restaurant", "customer", "delivery_time", "distance")
    list_filter = ("driver__city",)

    # deliveries are written by the dispatcher only
    def has_change_permission(self, request, obj=None):
        return False
