# coupons/models/__init__.py

from .coupon import Coupon
from .coupon_usage import CouponUsage

__all__ = [
    "Coupon",
    "CouponUsage",
]
