# orders/services/order_workflow.py

"""
ORDER WORKFLOW (STATUS + PAYMENT STATUS)

Purpose:
- Apply an admin status / payment-status update to an Order.
- Keep the status history complete and free of duplicates.

GUARANTEES:
- Order update + history insert + audit entry commit together or not at all.
- A history row is appended IFF the status actually changes, with the note
  "Status changed from <previous> to <new>". Caller notes are stored on the
  order and never suppress that entry.
- Repeating the same status only updates payment status / notes.
- Expected failures come back as OperationResult; database faults propagate.

FLOW:
1) Lock order row (missing -> ORDER_NOT_FOUND)
2) Normalize + validate enum values
3) Validate transition (lifecycle table; strict mode only)
4) Update order fields
5) Append history (status change only)
6) Audit log
"""

from __future__ import annotations

import logging

from django.db import transaction

from core.models import AuditLog
from core.results import ErrorKind, OperationResult, StorefrontError
from core.services.audit import log_audit
from orders.models import Order
from orders.services.order_lifecycle import (
    InvalidOrderTransitionError,
    validate_transition,
)
from orders.services.order_store import append_history, find_order, update_order

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderWorkflowError(StorefrontError):
    pass


class OrderNotFoundError(OrderWorkflowError):
    error_kind = ErrorKind.NOT_FOUND
    code = "ORDER_NOT_FOUND"

    def __init__(self, message: str = "Order not found"):
        super().__init__(message)


class InvalidStatusValueError(OrderWorkflowError):
    error_kind = ErrorKind.INVALID_INPUT
    code = "INVALID_STATUS_VALUE"


class InvalidStatusTransitionError(OrderWorkflowError):
    error_kind = ErrorKind.POLICY_VIOLATION
    code = "INVALID_STATUS_TRANSITION"


# ============================================================
# HELPERS
# ============================================================


def _normalize_enum(value, choices, *, label: str) -> str:
    normalized = str(value or "").strip().upper()
    if not normalized:
        raise InvalidStatusValueError(f"{label} is required")
    if normalized not in choices.values:
        raise InvalidStatusValueError(f"Invalid {label.lower()}: {value}")
    return normalized


def _clean_notes(notes):
    if notes is None:
        return None
    text = str(notes).strip()
    return text or None


def status_change_note(previous: str, new: str) -> str:
    return f"Status changed from {previous} to {new}"


@transaction.atomic
def _apply(*, order_id, status, payment_status, notes, actor, request) -> Order:
    order = find_order(order_id, for_update=True)
    if order is None:
        raise OrderNotFoundError()

    new_status = _normalize_enum(status, Order.Status, label="Status")
    new_payment_status = _normalize_enum(
        payment_status, Order.PaymentStatus, label="Payment status"
    )

    previous_status = order.status
    previous_payment_status = order.payment_status

    try:
        validate_transition(order=order, target_status=new_status)
    except InvalidOrderTransitionError as exc:
        raise InvalidStatusTransitionError(str(exc)) from exc

    fields = {
        "status": new_status,
        "payment_status": new_payment_status,
    }
    cleaned_notes = _clean_notes(notes)
    if notes is not None:
        fields["notes"] = cleaned_notes

    old_values = {
        "status": previous_status,
        "payment_status": previous_payment_status,
    }
    if "notes" in fields:
        old_values["notes"] = order.notes

    update_order(order, fields)

    if new_status != previous_status:
        append_history(
            order,
            new_status,
            status_change_note(previous_status, new_status),
            changed_by=actor if getattr(actor, "is_authenticated", False) else None,
        )

    log_audit(
        table_name="orders",
        record_id=order.pk,
        action=AuditLog.ACTION_UPDATE,
        old_values=old_values,
        new_values=dict(fields),
        actor=actor,
        request=request,
    )
    return order


# ============================================================
# PUBLIC OPERATION
# ============================================================


def apply_order_update(
    *,
    order_id,
    status,
    payment_status,
    notes=None,
    actor=None,
    request=None,
) -> OperationResult:
    """
    Apply status + payment status (+ optional notes) to one order.

    notes=None leaves the stored notes untouched; "" clears them.
    On success, result.data is the refreshed Order.
    """
    try:
        order = _apply(
            order_id=order_id,
            status=status,
            payment_status=payment_status,
            notes=notes,
            actor=actor,
            request=request,
        )
    except OrderWorkflowError as exc:
        logger.info(
            "Order update rejected",
            extra={"order_id": str(order_id), "code": exc.code, "reason": exc.message},
        )
        return OperationResult.failure(exc)

    logger.info(
        "Order updated",
        extra={
            "order_id": str(order.pk),
            "order_number": order.order_number,
            "status": order.status,
            "payment_status": order.payment_status,
        },
    )
    return OperationResult.success(order, message="Order updated successfully")
