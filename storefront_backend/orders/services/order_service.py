# orders/services/order_service.py

"""
ORDER SERVICE (PLACEMENT + LOOKUPS)

place_order():
- Snapshot customer / shipping fields and line items (no live references).
- Server-side money: subtotal from items, discount from the coupon engine,
  delivery fee waived for FREE_SHIPPING coupons,
  total = subtotal - discount + delivery_fee + tax.
- Initial status PENDING + history entry "Order created".
- Coupon is locked, re-validated and redeemed in the SAME transaction, so a
  coupon that hits its usage limit mid-checkout rolls the order back.

Lookups:
- track_orders(): by order number and/or email, newest first, items +
  history (newest first) prefetched.
- orders_for_customer(): latest N orders of one customer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from django.conf import settings
from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone

from core.money import ZERO, money, to_decimal
from core.results import ErrorKind, StorefrontError
from core.services.system_settings import get_setting
from coupons.models.coupon import normalize_coupon_code
from coupons.services.coupon_engine import evaluate_coupon
from coupons.services.coupon_redemption import redeem_coupon
from coupons.services.coupon_store import find_coupon_by_code
from orders.models import Order, OrderItem, OrderStatusHistory
from orders.services.order_store import append_history, order_number_exists

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5


# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderPlacementError(StorefrontError):
    error_kind = ErrorKind.INVALID_INPUT
    code = "INVALID_ORDER"


class CouponRejectedError(OrderPlacementError):
    """Coupon failed validation at checkout; carries the engine's kind/code."""

    def __init__(self, *, error_kind, code, message):
        super().__init__(message)
        self.error_kind = error_kind
        self.code = code


class OrderLookupError(StorefrontError):
    error_kind = ErrorKind.INVALID_INPUT
    code = "INVALID_LOOKUP"


# ============================================================
# INPUT TYPES
# ============================================================


@dataclass(frozen=True)
class LineItem:
    product_name: str
    quantity: int
    unit_price: Decimal
    discount_amount: Decimal = ZERO
    product_image: str = ""

    @property
    def total_price(self) -> Decimal:
        return money(self.unit_price * self.quantity - self.discount_amount)


def _to_int_qty(value) -> int:
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError("quantity must be a whole integer unit")


def _clean_amount(value, *, label: str) -> Decimal:
    try:
        amount = money(value)
    except ValueError:
        raise OrderPlacementError(f"Invalid {label}")
    if amount < 0:
        raise OrderPlacementError(f"{label.capitalize()} cannot be negative")
    return amount


def _clean_items(items) -> list[LineItem]:
    if not items:
        raise OrderPlacementError("Order must contain at least one item")

    cleaned = []
    for idx, raw in enumerate(items):
        if isinstance(raw, LineItem):
            item = raw
        else:
            name = str(raw.get("product_name") or "").strip()
            if not name:
                raise OrderPlacementError(f"Item {idx + 1}: product name is required")

            try:
                qty = _to_int_qty(raw.get("quantity"))
            except ValueError:
                raise OrderPlacementError(f"Item {idx + 1}: quantity must be a whole number")

            try:
                unit_price = money(to_decimal(raw.get("unit_price")))
            except ValueError:
                raise OrderPlacementError(f"Item {idx + 1}: unit price is required")

            item = LineItem(
                product_name=name,
                quantity=qty,
                unit_price=unit_price,
                discount_amount=_clean_amount(raw.get("discount_amount"), label="item discount"),
                product_image=str(raw.get("product_image") or "").strip(),
            )

        if item.quantity < 1:
            raise OrderPlacementError(f"Item {idx + 1}: quantity must be at least 1")
        if item.unit_price < 0:
            raise OrderPlacementError(f"Item {idx + 1}: unit price cannot be negative")
        try:
            line_total = item.total_price
        except ValueError:
            raise OrderPlacementError(f"Item {idx + 1}: line total is out of range")
        if line_total < 0:
            raise OrderPlacementError(f"Item {idx + 1}: discount exceeds line total")
        cleaned.append(item)

    return cleaned


# ============================================================
# ORDER NUMBER
# ============================================================


def generate_order_number(now=None) -> str:
    """
    <PREFIX>-<YYYYMMDD>-<8 hex>, e.g. TSF-20260101-1A2B3C4D.
    Prefix: SystemSetting "order_number_prefix", else settings.ORDER_NUMBER_PREFIX.
    """
    prefix = get_setting("order_number_prefix", None) or getattr(
        settings, "ORDER_NUMBER_PREFIX", "TSF"
    )
    now = now or timezone.now()
    return f"{str(prefix).strip().upper()}-{now:%Y%m%d}-{uuid4().hex[:8].upper()}"


def _unique_order_number() -> str:
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        candidate = generate_order_number()
        if not order_number_exists(candidate):
            return candidate
    raise RuntimeError("Could not generate a unique order number")


# ============================================================
# PLACEMENT
# ============================================================


@transaction.atomic
def place_order(
    *,
    customer_name: str,
    customer_email: str,
    items,
    shipping_address: str = "",
    shipping_city: str = "",
    shipping_landmark: str | None = None,
    shipping_coordinates: dict | None = None,
    address=None,
    customer_phone: str = "",
    customer=None,
    delivery_fee=0,
    tax_amount=0,
    coupon_code: str | None = None,
    notes: str | None = None,
    actor=None,
) -> Order:
    """
    Finalize a checkout into an Order.

    `address` (a CustomerAddress) fills the shipping snapshot when given.

    Raises:
    - OrderPlacementError (bad items / amounts / missing customer fields)
    - CouponRejectedError (coupon invalid for this subtotal)
    - CouponUsageLimitReachedError (limit hit between validation and redemption)
    """
    name = (customer_name or "").strip()
    email = (customer_email or "").strip().lower()
    if not name or not email:
        raise OrderPlacementError("Customer name and email are required")

    if address is not None:
        shipping_address = address.address
        shipping_city = address.city
        shipping_landmark = address.landmark
        shipping_coordinates = address.coordinates

    shipping_address = (shipping_address or "").strip()
    shipping_city = (shipping_city or "").strip()
    if not shipping_address or not shipping_city:
        raise OrderPlacementError("Shipping address and city are required")

    lines = _clean_items(items)
    try:
        subtotal = money(sum((line.total_price for line in lines), ZERO))
    except ValueError:
        raise OrderPlacementError("Order subtotal is out of range")
    delivery = _clean_amount(delivery_fee, label="delivery fee")
    tax = _clean_amount(tax_amount, label="tax amount")

    # --------------------------------------------------
    # COUPON (locked + re-validated against subtotal)
    # --------------------------------------------------
    code = normalize_coupon_code(coupon_code)
    coupon = None
    discount = ZERO
    if code:
        coupon = find_coupon_by_code(code, for_update=True)
        result = evaluate_coupon(coupon, subtotal)
        if not result.valid:
            raise CouponRejectedError(
                error_kind=result.error_kind,
                code=result.code,
                message=result.message,
            )
        discount = result.discount_amount
        if result.coupon.is_free_shipping:
            delivery = ZERO

    try:
        total = money(subtotal - discount + delivery + tax)
    except ValueError:
        raise OrderPlacementError("Order total is out of range")

    order = Order.objects.create(
        order_number=_unique_order_number(),
        customer=customer,
        customer_name=name,
        customer_email=email,
        customer_phone=(customer_phone or "").strip(),
        shipping_address=shipping_address,
        shipping_city=shipping_city,
        shipping_landmark=(shipping_landmark or "").strip() or None,
        shipping_coordinates=shipping_coordinates,
        subtotal=subtotal,
        discount_amount=discount,
        delivery_fee=delivery,
        tax_amount=tax,
        total_amount=total,
        coupon_code=code,
        status=Order.Status.PENDING,
        payment_status=Order.PaymentStatus.PENDING,
        notes=(notes or "").strip() or None,
    )

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product_name=line.product_name,
                product_image=line.product_image,
                quantity=line.quantity,
                unit_price=line.unit_price,
                discount_amount=line.discount_amount,
                total_price=line.total_price,
            )
            for line in lines
        ]
    )

    append_history(
        order,
        Order.Status.PENDING,
        "Order created",
        changed_by=actor if getattr(actor, "is_authenticated", False) else None,
    )

    if coupon is not None:
        redeem_coupon(
            coupon_id=coupon.pk,
            order=order,
            customer=customer,
            discount_amount=discount,
        )

    logger.info(
        "Order placed",
        extra={
            "order_id": str(order.pk),
            "order_number": order.order_number,
            "total": str(order.total_amount),
            "coupon_code": code or None,
        },
    )
    return order


# ============================================================
# LOOKUPS
# ============================================================


def with_order_details(qs):
    return qs.prefetch_related(
        "items",
        Prefetch(
            "status_history",
            queryset=OrderStatusHistory.objects.order_by("-created_at", "-id"),
        ),
    )


def track_orders(*, order_number: str | None = None, email: str | None = None, limit: int = 20):
    """
    Public order tracking. At least one of order_number / email is required;
    when both are given, both must match.
    """
    number = (order_number or "").strip().upper()
    mail = (email or "").strip()
    if not number and not mail:
        raise OrderLookupError("Order number or email is required")

    qs = Order.objects.all()
    if number:
        qs = qs.filter(order_number=number)
    if mail:
        qs = qs.filter(customer_email__iexact=mail)

    return list(with_order_details(qs.order_by("-created_at"))[:limit])


def orders_for_customer(customer, *, limit: int = 10):
    if customer is None:
        return []
    qs = Order.objects.filter(customer=customer).order_by("-created_at")
    return list(with_order_details(qs)[:limit])
