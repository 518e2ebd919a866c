from rest_framework import serializers
from .models import City, Driver, Restaurant, Delivery


class CitySerializer(serializers.ModelSerializer):
    class Meta:
        model = City
        fields = ['id', 'name']


class DriverSerializer(serializers.ModelSerializer):
    city = serializers.CharField(source='city.name', read_only=True)

    class Meta:
        model = Driver
        fields = ['id', 'name', 'city']


class RestaurantSerializer(serializers.ModelSerializer):
    city = serializers.CharField(source='city.name', read_only=True)

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'city', 'address']


class DeliverySerializer(serializers.ModelSerializer):
    driver = DriverSerializer(read_only=True)
    restaurant = serializers.CharField(source='restaurant.name', read_only=True)
    customer = serializers.CharField(source='customer.name', read_only=True)

    class Meta:
        model = Delivery
        fields = ['id', 'driver', 'restaurant', 'customer', 'delivery_time', 'distance', 'created_at']
        read_only_fields = fields


class OrderRequestSerializer(serializers.Serializer):
    """
    Incoming order. Cities and restaurants are referenced by name; the customer
    is upserted by name when the order is placed.
    """
    customer_name = serializers.CharField(max_length=255)
    customer_city = serializers.CharField(max_length=255)
    customer_address = serializers.CharField(required=False, allow_blank=True, default="")
    restaurant = serializers.CharField(max_length=255)
    delivery_time = serializers.DateTimeField()

    def validate_customer_city(self, value):
        if not City.objects.filter(name=value).exists():
            raise serializers.ValidationError(f"Unknown city {value!r}")
        return value

    def validate_restaurant(self, value):
        if not Restaurant.objects.filter(name=value).exists():
            raise serializers.ValidationError(f"Unknown restaurant {value!r}")
        return value


class DriverDistanceSerializer(serializers.Serializer):
    """
    Rank report row (orders.models.DriverDistance).
    """
    driver_id = serializers.IntegerField(source='driver.id')
    driver = serializers.CharField(source='driver.name')
    city = serializers.CharField(source='driver.city.name')
    total_distance = serializers.FloatField()
