# coupons/models/coupon_usage.py

"""
COUPON USAGE (IMMUTABLE)

One row per redeemed order. The OneToOne on order makes redemption
idempotent per order at the database level.

Created once. Never updated. Never deleted.
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone


class CouponUsage(models.Model):
    coupon = models.ForeignKey(
        "coupons.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        related_name="usages",
    )
    # survives coupon hard delete
    coupon_code = models.CharField(max_length=50)

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="coupon_usage",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="coupon_usages",
    )

    discount_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    used_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-used_at"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("CouponUsage records are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("CouponUsage records cannot be deleted")

    def __str__(self):
        return f"{self.coupon_code} -> {self.order_id}"
