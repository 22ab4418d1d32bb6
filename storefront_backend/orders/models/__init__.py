# orders/models/__init__.py

from .order import Order
from .order_item import OrderItem
from .order_status_history import OrderStatusHistory

__all__ = [
    "Order",
    "OrderItem",
    "OrderStatusHistory",
]
