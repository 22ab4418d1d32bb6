"""
PATH: orders/migrations/0001_initial.py

MIGRATION: CREATE Order + OrderItem + OrderStatusHistory
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


ORDER_STATUS_CHOICES = [
    ("PENDING", "Pending"),
    ("CONFIRMED", "Confirmed"),
    ("PROCESSING", "Processing"),
    ("SHIPPED", "Shipped"),
    ("DELIVERED", "Delivered"),
    ("CANCELLED", "Cancelled"),
    ("REFUNDED", "Refunded"),
]

PAYMENT_STATUS_CHOICES = [
    ("PENDING", "Pending"),
    ("PAID", "Paid"),
    ("FAILED", "Failed"),
    ("REFUNDED", "Refunded"),
    ("PARTIALLY_REFUNDED", "Partially refunded"),
]


def money_field(**kwargs):
    return models.DecimalField(
        decimal_places=2, default=Decimal("0.00"), max_digits=12, **kwargs
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "order_number",
                    models.CharField(
                        help_text="Human-facing order number, e.g. TSF-20260101-1A2B3C4D",
                        max_length=40,
                        unique=True,
                    ),
                ),
                ("customer_name", models.CharField(max_length=180)),
                ("customer_email", models.EmailField(db_index=True, max_length=254)),
                ("customer_phone", models.CharField(blank=True, default="", max_length=40)),
                ("shipping_address", models.TextField()),
                ("shipping_city", models.CharField(max_length=120)),
                ("shipping_landmark", models.CharField(blank=True, max_length=255, null=True)),
                ("shipping_coordinates", models.JSONField(blank=True, null=True)),
                ("subtotal", money_field()),
                ("discount_amount", money_field()),
                ("delivery_fee", money_field()),
                ("tax_amount", money_field()),
                ("total_amount", money_field()),
                ("coupon_code", models.CharField(blank=True, default="", max_length=50)),
                (
                    "status",
                    models.CharField(
                        choices=ORDER_STATUS_CHOICES, default="PENDING", max_length=16
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=PAYMENT_STATUS_CHOICES, default="PENDING", max_length=24
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="order_created_idx"),
                    models.Index(fields=["status"], name="order_status_idx"),
                    models.Index(fields=["payment_status"], name="order_payment_status_idx"),
                    models.Index(
                        fields=["customer", "created_at"],
                        name="order_customer_created_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(subtotal__gte=0)
                            & models.Q(discount_amount__gte=0)
                            & models.Q(delivery_fee__gte=0)
                            & models.Q(tax_amount__gte=0)
                            & models.Q(total_amount__gte=0)
                        ),
                        name="order_money_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("product_name", models.CharField(max_length=255)),
                ("product_image", models.CharField(blank=True, default="", max_length=500)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("discount_amount", money_field()),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="quantity * unit_price - discount_amount (server computed)",
                        max_digits=12,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusHistory",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("status", models.CharField(choices=ORDER_STATUS_CHOICES, max_length=16)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_status_changes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_history",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "verbose_name_plural": "order status history",
                "indexes": [
                    models.Index(
                        fields=["order", "created_at"],
                        name="orderhist_order_created_idx",
                    ),
                ],
            },
        ),
    ]
