# coupons/services/coupon_redemption.py

"""
COUPON REDEMPTION (CONSUME ONCE PER ORDER)

GUARANTEES:
- Idempotent per order: a second call for the same order returns the
  existing CouponUsage and does NOT increment used_count again.
- used_count never exceeds usage_limit under concurrency
  (coupon row lock + conditional increment inside one transaction).
- Runs inside the caller's transaction when there is one (checkout).
"""

from __future__ import annotations

import logging

from django.db import transaction

from core.money import money
from coupons.models import CouponUsage
from coupons.services.coupon_engine import (
    CouponNotFoundError,
    CouponUsageLimitReachedError,
)
from coupons.services.coupon_store import find_coupon_by_id, increment_usage

logger = logging.getLogger(__name__)


@transaction.atomic
def redeem_coupon(*, coupon_id, order, customer=None, discount_amount=0) -> CouponUsage:
    """
    Record one redemption of `coupon_id` for `order`.

    Raises:
    - CouponNotFoundError
    - CouponUsageLimitReachedError
    """
    existing = CouponUsage.objects.filter(order=order).first()
    if existing is not None:
        return existing

    coupon = find_coupon_by_id(coupon_id, for_update=True)
    if coupon is None:
        raise CouponNotFoundError()

    if not increment_usage(coupon.pk):
        raise CouponUsageLimitReachedError()

    usage = CouponUsage.objects.create(
        coupon=coupon,
        coupon_code=coupon.code,
        order=order,
        customer=customer,
        discount_amount=money(discount_amount),
    )

    logger.info(
        "Coupon redeemed",
        extra={
            "coupon_code": coupon.code,
            "order_id": str(order.pk),
            "discount": str(usage.discount_amount),
        },
    )
    return usage
