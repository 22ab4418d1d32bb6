from .coupon import CouponSerializer
from .validate import (
    CouponSnapshotSerializer,
    CouponValidateRequestSerializer,
    CouponValidateResponseSerializer,
)

__all__ = [
    "CouponSerializer",
    "CouponSnapshotSerializer",
    "CouponValidateRequestSerializer",
    "CouponValidateResponseSerializer",
]
