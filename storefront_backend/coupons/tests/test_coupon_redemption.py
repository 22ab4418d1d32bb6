# coupons/tests/test_coupon_redemption.py

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase

from coupons.models import CouponUsage
from coupons.services.coupon_engine import (
    CouponNotFoundError,
    CouponUsageLimitReachedError,
)
from coupons.services.coupon_redemption import redeem_coupon
from coupons.services.coupon_store import increment_usage
from coupons.tests.factories import make_coupon
from orders.models import Order


def _order(number: str) -> Order:
    return Order.objects.create(
        order_number=number,
        customer_name="Asha",
        customer_email="asha@example.com",
        shipping_address="12 Lake Road",
        shipping_city="Colombo",
        subtotal=Decimal("1000.00"),
        total_amount=Decimal("1000.00"),
    )


class CouponRedemptionTests(TestCase):
    """
    GUARANTEES:
    - One CouponUsage per order; repeat calls do not increment again
    - used_count never passes usage_limit
    """

    def test_redeem_records_usage_and_increments(self):
        coupon = make_coupon(usage_limit=5)
        order = _order("TSF-20260101-00000001")

        usage = redeem_coupon(coupon_id=coupon.pk, order=order, discount_amount="100")

        coupon.refresh_from_db()
        self.assertEqual(coupon.used_count, 1)
        self.assertEqual(usage.coupon_code, "SAVE10")
        self.assertEqual(usage.discount_amount, Decimal("100.00"))

    def test_redeem_is_idempotent_per_order(self):
        coupon = make_coupon()
        order = _order("TSF-20260101-00000002")

        first = redeem_coupon(coupon_id=coupon.pk, order=order, discount_amount="10")
        second = redeem_coupon(coupon_id=coupon.pk, order=order, discount_amount="10")

        coupon.refresh_from_db()
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(coupon.used_count, 1)
        self.assertEqual(CouponUsage.objects.filter(order=order).count(), 1)

    def test_redeem_past_limit_raises_and_writes_nothing(self):
        coupon = make_coupon(usage_limit=1)
        redeem_coupon(coupon_id=coupon.pk, order=_order("TSF-20260101-00000003"))

        late_order = _order("TSF-20260101-00000004")
        with self.assertRaises(CouponUsageLimitReachedError):
            redeem_coupon(coupon_id=coupon.pk, order=late_order)

        coupon.refresh_from_db()
        self.assertEqual(coupon.used_count, 1)
        self.assertFalse(CouponUsage.objects.filter(order=late_order).exists())

    def test_redeem_unknown_coupon(self):
        with self.assertRaises(CouponNotFoundError):
            redeem_coupon(coupon_id="0" * 32, order=_order("TSF-20260101-00000005"))

    def test_increment_usage_is_conditional(self):
        coupon = make_coupon(usage_limit=2)

        self.assertTrue(increment_usage(coupon.pk))
        self.assertTrue(increment_usage(coupon.pk))
        self.assertFalse(increment_usage(coupon.pk))

        coupon.refresh_from_db()
        self.assertEqual(coupon.used_count, 2)

    def test_unlimited_coupon_keeps_counting(self):
        coupon = make_coupon(usage_limit=None)

        for _ in range(3):
            self.assertTrue(increment_usage(coupon.pk))

        coupon.refresh_from_db()
        self.assertEqual(coupon.used_count, 3)

    def test_usage_rows_are_immutable(self):
        coupon = make_coupon()
        usage = redeem_coupon(coupon_id=coupon.pk, order=_order("TSF-20260101-00000006"))

        with self.assertRaises(RuntimeError):
            usage.save()
        with self.assertRaises(RuntimeError):
            usage.delete()
