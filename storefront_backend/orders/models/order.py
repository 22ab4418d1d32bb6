# orders/models/order.py

"""
ORDER

GUARANTEES:
- Customer + shipping fields are SNAPSHOTS taken at checkout.
  Editing a Customer or CustomerAddress never rewrites an order.
- total_amount = subtotal - discount_amount + delivery_fee + tax_amount
  (computed by orders.services.order_service.place_order).
- status / payment_status change ONLY via orders.services.order_workflow,
  which appends OrderStatusHistory in the same transaction.
"""

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import Q


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        CONFIRMED = "CONFIRMED", "Confirmed"
        PROCESSING = "PROCESSING", "Processing"
        SHIPPED = "SHIPPED", "Shipped"
        DELIVERED = "DELIVERED", "Delivered"
        CANCELLED = "CANCELLED", "Cancelled"
        REFUNDED = "REFUNDED", "Refunded"

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PAID = "PAID", "Paid"
        FAILED = "FAILED", "Failed"
        REFUNDED = "REFUNDED", "Refunded"
        PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED", "Partially refunded"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(
        max_length=40,
        unique=True,
        help_text="Human-facing order number, e.g. TSF-20260101-1A2B3C4D",
    )

    # Optional link for "my orders"; the snapshot below is authoritative.
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    # ----------------------------
    # Customer snapshot
    # ----------------------------
    customer_name = models.CharField(max_length=180)
    customer_email = models.EmailField(db_index=True)
    customer_phone = models.CharField(max_length=40, blank=True, default="")

    shipping_address = models.TextField()
    shipping_city = models.CharField(max_length=120)
    shipping_landmark = models.CharField(max_length=255, null=True, blank=True)
    shipping_coordinates = models.JSONField(null=True, blank=True)

    # ----------------------------
    # Money (server authoritative)
    # ----------------------------
    subtotal = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    discount_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    delivery_fee = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    tax_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    coupon_code = models.CharField(max_length=50, blank=True, default="")

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=24,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )

    notes = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="order_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["payment_status"], name="order_payment_status_idx"),
            models.Index(fields=["customer", "created_at"], name="order_customer_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(subtotal__gte=0)
                    & Q(discount_amount__gte=0)
                    & Q(delivery_fee__gte=0)
                    & Q(tax_amount__gte=0)
                    & Q(total_amount__gte=0)
                ),
                name="order_money_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.order_number} | {self.total_amount} | {self.status}"
