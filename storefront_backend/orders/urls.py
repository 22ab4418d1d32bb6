# orders/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from orders.views import MyOrdersView, OrderAdminViewSet, OrderTrackView

router = DefaultRouter()
router.register("orders", OrderAdminViewSet, basename="admin-order")

urlpatterns = [
    path("track/", OrderTrackView.as_view(), name="order-track"),
    path("mine/", MyOrdersView.as_view(), name="order-mine"),
    path("admin/", include(router.urls)),
]
