# orders/models/order_status_history.py

"""
ORDER STATUS HISTORY (APPEND-ONLY)

- One row per status change, written by the order workflow in the same
  transaction as the order update.
- Latest row's status == order.status.
- Created once. Never updated. Never deleted.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from .order import Order


class OrderStatusHistory(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="status_history",
    )

    status = models.CharField(max_length=16, choices=Order.Status.choices)
    notes = models.TextField(blank=True, default="")

    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_status_changes",
    )

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "order status history"
        indexes = [
            models.Index(fields=["order", "created_at"], name="orderhist_order_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("OrderStatusHistory entries are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise RuntimeError("OrderStatusHistory entries cannot be deleted")

    def __str__(self):
        return f"{self.order_id} -> {self.status}"
