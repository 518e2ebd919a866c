from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from deliveries.views import CityViewSet, DriverViewSet, RestaurantViewSet, DeliveryViewSet, DriverRankReportView

router = DefaultRouter()
router.register(r'cities', CityViewSet)
router.register(r'drivers', DriverViewSet)
router.register(r'restaurants', RestaurantViewSet)
router.register(r'deliveries', DeliveryViewSet)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include(router.urls)),
    path('api/v1/reports/drivers/', DriverRankReportView.as_view(), name='driver-rank-report'),
]
