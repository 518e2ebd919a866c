import threading

from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.views import APIView

from dispatch import (
    Dispatcher,
    DispatchError,
    InvalidInputError,
    CityMismatchError,
    PastDeliveryTimeError,
    NoDriversInCityError,
    NoFreeDriversError,
)
from dispatch.config import policy_from_env
from orders.models import Customer

from .models import City, Driver, Restaurant, Delivery
from .serializers import (
    CitySerializer,
    DriverSerializer,
    RestaurantSerializer,
    DeliverySerializer,
    OrderRequestSerializer,
    DriverDistanceSerializer,
)
from .store import DjangoDispatchStore, to_city, to_restaurant

# Rejections caused by the request itself vs. by current driver capacity
ERROR_STATUS = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    CityMismatchError: status.HTTP_400_BAD_REQUEST,
    PastDeliveryTimeError: status.HTTP_400_BAD_REQUEST,
    NoDriversInCityError: status.HTTP_409_CONFLICT,
    NoFreeDriversError: status.HTTP_409_CONFLICT,
}

_dispatcher = None
_dispatcher_guard = threading.Lock()


def get_dispatcher() -> Dispatcher:
    """
    One dispatcher per process so every request shares the same city locks.
    """
    global _dispatcher
    with _dispatcher_guard:
        if _dispatcher is None:
            _dispatcher = Dispatcher(DjangoDispatchStore(), policy=policy_from_env())
        return _dispatcher


def error_response(error: DispatchError) -> Response:
    http_status = ERROR_STATUS.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"error": error.code, "detail": error.message}, status=http_status)


class CityViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = City.objects.order_by('name')
    serializer_class = CitySerializer


class DriverViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Driver.objects.select_related('city').order_by('id')
    serializer_class = DriverSerializer


class RestaurantViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Restaurant.objects.select_related('city').order_by('name')
    serializer_class = RestaurantSerializer


class DeliveryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Lists deliveries and places new orders.
    - GET: list / retrieve
    - POST: validate the order, assign the least busy free driver, save the delivery
    Deliveries are immutable, there is no update or delete.
    """
    queryset = Delivery.objects.select_related('driver__city', 'restaurant', 'customer').order_by('-id')
    serializer_class = DeliverySerializer

    def create(self, request, *args, **kwargs):
        order = OrderRequestSerializer(data=request.data)
        order.is_valid(raise_exception=True)
        data = order.validated_data

        city = to_city(City.objects.get(name=data['customer_city']))
        restaurant = to_restaurant(Restaurant.objects.select_related('city').get(name=data['restaurant']))
        customer = Customer(name=data['customer_name'], city=city, address=data['customer_address'])

        try:
            delivery = get_dispatcher().create_order_and_assign_driver(customer, restaurant, data['delivery_time'])
        except DispatchError as e:
            return error_response(e)

        row = self.get_queryset().get(pk=delivery.id)
        return Response(DeliverySerializer(row).data, status=status.HTTP_201_CREATED)


class DriverRankReportView(APIView):
    """
    Drivers ranked by total distance driven, highest first.
    Optional `?city=<name>` restricts the report to one city's drivers.
    """
    def get(self, request):
        dispatcher = get_dispatcher()
        city_name = request.query_params.get('city')

        if city_name:
            city = to_city(get_object_or_404(City, name=city_name))
            report = dispatcher.get_driver_rank_report_by_city(city)
        else:
            report = dispatcher.get_driver_rank_report()

        return Response(DriverDistanceSerializer(report, many=True).data)
