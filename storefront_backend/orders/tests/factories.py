# orders/tests/factories.py

from decimal import Decimal
from uuid import uuid4

from orders.models import Order


def make_order(**overrides) -> Order:
    data = {
        "order_number": f"TSF-20260101-{uuid4().hex[:8].upper()}",
        "customer_name": "Asha Perera",
        "customer_email": "asha@example.com",
        "shipping_address": "12 Lake Road",
        "shipping_city": "Colombo",
        "subtotal": Decimal("1000.00"),
        "total_amount": Decimal("1000.00"),
    }
    data.update(overrides)
    return Order.objects.create(**data)
