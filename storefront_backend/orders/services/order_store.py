# orders/services/order_store.py

"""
ORDER STORE (DATA ACCESS)

- find_order(id)                    -> Order | None
- update_order(order, fields)       -> Order
- append_history(order, status, notes)

Callers own the transaction boundary: the workflow wraps update_order +
append_history in ONE transaction.
"""

from __future__ import annotations

from core.ids import as_uuid
from orders.models import Order, OrderStatusHistory


def find_order(order_id, *, for_update: bool = False) -> Order | None:
    pk = as_uuid(order_id)
    if pk is None:
        return None

    qs = Order.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(pk=pk).first()


def order_number_exists(order_number: str) -> bool:
    return Order.objects.filter(order_number=order_number).exists()


def update_order(order: Order, fields: dict) -> Order:
    for name, value in fields.items():
        setattr(order, name, value)
    order.save(update_fields=[*fields.keys(), "updated_at"])
    return order


def append_history(order: Order, status: str, notes: str = "", *, changed_by=None) -> OrderStatusHistory:
    return OrderStatusHistory.objects.create(
        order=order,
        status=status,
        notes=notes or "",
        changed_by=changed_by,
    )
