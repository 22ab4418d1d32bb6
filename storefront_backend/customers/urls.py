# customers/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from customers.views import CustomerAddressViewSet

router = DefaultRouter()
router.register(r"addresses", CustomerAddressViewSet, basename="customer-addresses")

urlpatterns = [
    path("", include(router.urls)),
]
