# orders/tests/test_order_workflow.py

from __future__ import annotations

import uuid
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from core.models import AuditLog
from core.results import ErrorKind
from orders.models import Order, OrderStatusHistory
from orders.services.order_workflow import apply_order_update
from orders.tests.factories import make_order

User = get_user_model()
S = Order.Status
P = Order.PaymentStatus


class OrderWorkflowTests(TestCase):
    """
    GUARANTEES:
    - One history row per actual status change, none for repeats
    - Order, history and audit commit together
    - Latest history row always matches order.status
    """

    def setUp(self):
        self.manager = User.objects.create_user(username="manager", password="pass", is_staff=True)
        self.order = make_order()

    def _history(self):
        return list(
            OrderStatusHistory.objects.filter(order=self.order).order_by("created_at", "id")
        )

    def test_status_change_appends_history(self):
        result = apply_order_update(
            order_id=self.order.pk,
            status="SHIPPED",
            payment_status="PAID",
            actor=self.manager,
        )

        self.assertTrue(result.ok)
        self.assertEqual(result.message, "Order updated successfully")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, S.SHIPPED)
        self.assertEqual(self.order.payment_status, P.PAID)

        history = self._history()
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].status, S.SHIPPED)
        self.assertEqual(history[0].notes, "Status changed from PENDING to SHIPPED")
        self.assertEqual(history[0].changed_by, self.manager)

    def test_repeating_status_adds_no_history(self):
        apply_order_update(order_id=self.order.pk, status="CONFIRMED", payment_status="PENDING")
        result = apply_order_update(
            order_id=self.order.pk, status="confirmed", payment_status="paid"
        )

        self.assertTrue(result.ok)
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, P.PAID)
        self.assertEqual(len(self._history()), 1)

    def test_each_change_is_recorded_and_latest_matches(self):
        apply_order_update(order_id=self.order.pk, status="CONFIRMED", payment_status="PAID")
        apply_order_update(order_id=self.order.pk, status="PROCESSING", payment_status="PAID")

        history = self._history()
        self.assertEqual([h.status for h in history], [S.CONFIRMED, S.PROCESSING])
        self.order.refresh_from_db()
        self.assertEqual(history[-1].status, self.order.status)

    def test_caller_notes_do_not_replace_history_note(self):
        apply_order_update(
            order_id=self.order.pk,
            status="CONFIRMED",
            payment_status="PENDING",
            notes="Called the customer",
        )

        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, "Called the customer")
        self.assertEqual(self._history()[0].notes, "Status changed from PENDING to CONFIRMED")

    def test_notes_none_keeps_and_blank_clears(self):
        self.order.notes = "Leave at gate"
        self.order.save()

        apply_order_update(order_id=self.order.pk, status="PENDING", payment_status="PENDING")
        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, "Leave at gate")

        apply_order_update(
            order_id=self.order.pk, status="PENDING", payment_status="PENDING", notes=""
        )
        self.order.refresh_from_db()
        self.assertIsNone(self.order.notes)

    def test_update_is_audited(self):
        apply_order_update(
            order_id=self.order.pk,
            status="CONFIRMED",
            payment_status="PAID",
            actor=self.manager,
        )

        entry = AuditLog.objects.get(table_name="orders", record_id=str(self.order.pk))
        self.assertEqual(entry.action, AuditLog.ACTION_UPDATE)
        self.assertEqual(entry.old_values, {"status": "PENDING", "payment_status": "PENDING"})
        self.assertEqual(entry.new_values, {"status": "CONFIRMED", "payment_status": "PAID"})
        self.assertEqual(entry.actor, self.manager)

    def test_unknown_order(self):
        result = apply_order_update(
            order_id=uuid.uuid4(), status="SHIPPED", payment_status="PAID"
        )

        self.assertFalse(result.ok)
        self.assertEqual(result.error_kind, ErrorKind.NOT_FOUND)
        self.assertEqual(result.code, "ORDER_NOT_FOUND")

    def test_invalid_enum_values(self):
        for status, payment_status in (("LOST", "PAID"), ("SHIPPED", "MAYBE"), ("", "PAID")):
            with self.subTest(status=status, payment_status=payment_status):
                result = apply_order_update(
                    order_id=self.order.pk, status=status, payment_status=payment_status
                )
                self.assertFalse(result.ok)
                self.assertEqual(result.error_kind, ErrorKind.INVALID_INPUT)
                self.assertEqual(result.code, "INVALID_STATUS_VALUE")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, S.PENDING)
        self.assertEqual(self._history(), [])

    def test_illegal_transition_rejected(self):
        apply_order_update(order_id=self.order.pk, status="DELIVERED", payment_status="PAID")

        result = apply_order_update(
            order_id=self.order.pk, status="PENDING", payment_status="PAID"
        )

        self.assertFalse(result.ok)
        self.assertEqual(result.error_kind, ErrorKind.POLICY_VIOLATION)
        self.assertEqual(result.code, "INVALID_STATUS_TRANSITION")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, S.DELIVERED)
        self.assertEqual(len(self._history()), 1)

    @override_settings(ORDER_STRICT_TRANSITIONS=False)
    def test_relaxed_mode_allows_any_move(self):
        apply_order_update(order_id=self.order.pk, status="DELIVERED", payment_status="PAID")

        result = apply_order_update(
            order_id=self.order.pk, status="PENDING", payment_status="PAID"
        )

        self.assertTrue(result.ok)
        self.assertEqual(self._history()[-1].notes, "Status changed from DELIVERED to PENDING")

    def test_history_failure_rolls_back_everything(self):
        with mock.patch(
            "orders.services.order_workflow.append_history",
            side_effect=RuntimeError("history write failed"),
        ):
            with self.assertRaises(RuntimeError):
                apply_order_update(
                    order_id=self.order.pk, status="SHIPPED", payment_status="PAID"
                )

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, S.PENDING)
        self.assertEqual(self.order.payment_status, P.PENDING)
        self.assertEqual(self._history(), [])
        self.assertFalse(AuditLog.objects.filter(table_name="orders").exists())
