# orders/tests/test_order_service.py

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase

from core.results import ErrorKind
from core.services.system_settings import clear_settings_cache, set_setting
from coupons.models import Coupon, CouponUsage
from coupons.services.coupon_engine import CouponUsageLimitReachedError
from coupons.tests.factories import make_coupon
from customers.models import Customer, CustomerAddress
from orders.models import Order, OrderStatusHistory
from orders.services.order_service import (
    CouponRejectedError,
    OrderLookupError,
    OrderPlacementError,
    generate_order_number,
    orders_for_customer,
    place_order,
    track_orders,
)
from orders.tests.factories import make_order

ORDER_NUMBER_RE = r"^TSF-\d{8}-[0-9A-F]{8}$"


def _items():
    return [
        {"product_name": "Tea 500g", "quantity": 2, "unit_price": "400.00"},
        {"product_name": "Honey", "quantity": "1", "unit_price": "200", "discount_amount": "50"},
    ]


def _place(**overrides):
    data = {
        "customer_name": "Asha Perera",
        "customer_email": " Asha@Example.com ",
        "items": _items(),
        "shipping_address": "12 Lake Road",
        "shipping_city": "Colombo",
        "delivery_fee": "250",
    }
    data.update(overrides)
    return place_order(**data)


class PlaceOrderTests(TestCase):
    def setUp(self):
        clear_settings_cache()

    def tearDown(self):
        clear_settings_cache()

    def test_totals_snapshot_and_initial_history(self):
        order = _place(tax_amount="10")

        self.assertRegex(order.order_number, ORDER_NUMBER_RE)
        self.assertEqual(order.customer_email, "asha@example.com")
        self.assertEqual(order.subtotal, Decimal("950.00"))
        self.assertEqual(order.discount_amount, Decimal("0.00"))
        self.assertEqual(order.total_amount, Decimal("1210.00"))
        self.assertEqual(order.status, Order.Status.PENDING)
        self.assertEqual(order.payment_status, Order.PaymentStatus.PENDING)
        self.assertEqual(order.items.count(), 2)
        self.assertEqual(
            order.items.get(product_name="Honey").total_price, Decimal("150.00")
        )

        history = list(OrderStatusHistory.objects.filter(order=order))
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].status, Order.Status.PENDING)
        self.assertEqual(history[0].notes, "Order created")

    def test_coupon_discount_and_redemption(self):
        coupon = make_coupon("SAVE10", max_discount_amount=Decimal("50"))

        order = _place(coupon_code="save10")

        self.assertEqual(order.coupon_code, "SAVE10")
        self.assertEqual(order.discount_amount, Decimal("50.00"))
        self.assertEqual(order.total_amount, Decimal("1150.00"))
        coupon.refresh_from_db()
        self.assertEqual(coupon.used_count, 1)
        usage = CouponUsage.objects.get(order=order)
        self.assertEqual(usage.discount_amount, Decimal("50.00"))

    def test_free_shipping_waives_delivery(self):
        make_coupon("SHIPFREE", type=Coupon.Type.FREE_SHIPPING, value=Decimal("0"))

        order = _place(coupon_code="SHIPFREE")

        self.assertEqual(order.discount_amount, Decimal("0.00"))
        self.assertEqual(order.delivery_fee, Decimal("0.00"))
        self.assertEqual(order.total_amount, Decimal("950.00"))

    def test_rejected_coupon_creates_nothing(self):
        make_coupon("BIG", min_order_amount=Decimal("5000"))

        with self.assertRaises(CouponRejectedError) as ctx:
            _place(coupon_code="BIG")

        self.assertEqual(ctx.exception.code, "ORDER_AMOUNT_BELOW_MINIMUM")
        self.assertEqual(ctx.exception.error_kind, ErrorKind.POLICY_VIOLATION)
        self.assertFalse(Order.objects.exists())

    def test_exhausted_coupon_rejected(self):
        make_coupon("ONCE", usage_limit=1, used_count=1)

        with self.assertRaises(CouponRejectedError) as ctx:
            _place(coupon_code="ONCE")

        self.assertEqual(ctx.exception.code, CouponUsageLimitReachedError.code)
        self.assertFalse(Order.objects.exists())

    def test_saved_address_fills_shipping_snapshot(self):
        customer = Customer.objects.create(name="Asha", email="asha@example.com")
        address = CustomerAddress.objects.create(
            customer=customer,
            name="Office",
            address="1 Main Street",
            city="Kandy",
            landmark="Near the clock tower",
            is_default=True,
        )

        order = _place(shipping_address="", shipping_city="", address=address, customer=customer)

        self.assertEqual(order.shipping_address, "1 Main Street")
        self.assertEqual(order.shipping_city, "Kandy")
        self.assertEqual(order.shipping_landmark, "Near the clock tower")
        self.assertEqual(order.customer, customer)

    def test_invalid_input(self):
        cases = [
            {"items": []},
            {"customer_email": ""},
            {"shipping_city": ""},
            {"items": [{"product_name": "Tea", "quantity": 0, "unit_price": "1"}]},
            {"items": [{"product_name": "Tea", "quantity": 1.5, "unit_price": "1"}]},
            {"delivery_fee": "-1"},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(OrderPlacementError):
                    _place(**overrides)
        self.assertFalse(Order.objects.exists())

    def test_out_of_range_amounts_are_rejected(self):
        huge = "1" + "0" * 30
        cases = [
            {"items": [{"product_name": "Tea", "quantity": 1, "unit_price": huge}]},
            {"items": [{"product_name": "Tea", "quantity": 10**6, "unit_price": "9999999"}]},
            {
                "items": [
                    {"product_name": "Tea", "quantity": 1, "unit_price": "9000000000"},
                    {"product_name": "Rice", "quantity": 1, "unit_price": "9000000000"},
                ]
            },
            {"delivery_fee": huge},
            {"tax_amount": "1e999999"},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(OrderPlacementError):
                    _place(**overrides)
        self.assertFalse(Order.objects.exists())

    def test_order_number_prefix_from_system_setting(self):
        set_setting("order_number_prefix", "shop")

        number = generate_order_number(datetime(2026, 3, 9, tzinfo=dt_timezone.utc))

        self.assertRegex(number, r"^SHOP-20260309-[0-9A-F]{8}$")


class OrderLookupTests(TestCase):
    def test_track_requires_a_key(self):
        with self.assertRaises(OrderLookupError):
            track_orders(order_number=" ", email=None)

    def test_track_by_number_email_or_both(self):
        mine = make_order(customer_email="asha@example.com")
        make_order(customer_email="other@example.com")

        by_number = track_orders(order_number=mine.order_number.lower())
        by_email = track_orders(email="ASHA@example.com")
        both_mismatch = track_orders(order_number=mine.order_number, email="other@example.com")

        self.assertEqual([o.pk for o in by_number], [mine.pk])
        self.assertEqual([o.pk for o in by_email], [mine.pk])
        self.assertEqual(both_mismatch, [])

    def test_orders_for_customer_is_limited_and_scoped(self):
        customer = Customer.objects.create(name="Asha", email="asha@example.com")
        for _ in range(3):
            make_order(customer=customer)
        make_order()

        self.assertEqual(len(orders_for_customer(customer)), 3)
        self.assertEqual(len(orders_for_customer(customer, limit=2)), 2)
        self.assertEqual(orders_for_customer(None), [])
