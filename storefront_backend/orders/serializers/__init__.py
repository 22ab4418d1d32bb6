from .order import (
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusHistorySerializer,
)
from .status_update import OrderStatusUpdateSerializer

__all__ = [
    "OrderItemSerializer",
    "OrderSerializer",
    "OrderStatusHistorySerializer",
    "OrderStatusUpdateSerializer",
]
