from .admin_coupons import CouponAdminViewSet
from .validate import CouponValidateView

__all__ = [
    "CouponAdminViewSet",
    "CouponValidateView",
]
