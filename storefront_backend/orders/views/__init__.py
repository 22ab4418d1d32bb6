from .admin_orders import OrderAdminViewSet
from .customer_orders import MyOrdersView
from .tracking import OrderTrackView

__all__ = [
    "MyOrdersView",
    "OrderAdminViewSet",
    "OrderTrackView",
]
