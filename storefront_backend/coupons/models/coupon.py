# coupons/models/coupon.py

"""
COUPON (PROMOTIONAL RULE)

- code is unique and stored uppercase (lookups are case-insensitive by
  normalizing input the same way).
- value: PERCENTAGE -> 0..100 rate, FLAT -> currency amount,
  FREE_SHIPPING -> ignored.
- Validity window [start_date, end_date] is inclusive.
- used_count is only incremented by coupons.services.coupon_redemption.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone


def default_coupon_end_date(start=None):
    days = int(getattr(settings, "COUPON_DEFAULT_VALIDITY_DAYS", 365))
    return (start or timezone.now()) + timedelta(days=days)


def normalize_coupon_code(code) -> str:
    return str(code or "").strip().upper()


class Coupon(models.Model):
    class Type(models.TextChoices):
        PERCENTAGE = "PERCENTAGE", "Percentage"
        FLAT = "FLAT", "Flat amount"
        FREE_SHIPPING = "FREE_SHIPPING", "Free shipping"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=120)
    description = models.TextField(null=True, blank=True)

    type = models.CharField(
        max_length=16,
        choices=Type.choices,
        default=Type.PERCENTAGE,
    )
    value = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    min_order_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    max_discount_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Caps PERCENTAGE discounts.",
    )

    start_date = models.DateTimeField(default=timezone.now)
    end_date = models.DateTimeField(default=default_coupon_end_date)

    is_active = models.BooleanField(default=True)

    usage_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Empty = unlimited.",
    )
    used_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "end_date"], name="coupon_active_end_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(value__gte=0),
                name="coupon_value_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(start_date__lte=F("end_date")),
                name="coupon_start_before_end",
            ),
        ]

    def save(self, *args, **kwargs):
        self.code = normalize_coupon_code(self.code)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.code} ({self.type} {self.value})"
