# coupons/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from coupons.views import CouponAdminViewSet, CouponValidateView

router = DefaultRouter()
router.register("coupons", CouponAdminViewSet, basename="admin-coupon")

urlpatterns = [
    path("validate/", CouponValidateView.as_view(), name="coupon-validate"),
    path("admin/", include(router.urls)),
]
