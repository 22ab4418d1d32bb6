"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the allowed status transitions for Order entities.

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth

Strict mode (settings.ORDER_STRICT_TRANSITIONS) enforces the table below.
Non-strict mode accepts any enum member from any status.
Same-status updates are always allowed.
"""

from django.conf import settings

from orders.models import Order

S = Order.Status

# ============================================================
# DOMAIN ERRORS
# ============================================================


class OrderLifecycleError(Exception):
    pass


class InvalidOrderTransitionError(OrderLifecycleError):
    pass


# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    S.REFUNDED,
}

ALLOWED_TRANSITIONS = {
    S.PENDING: {S.CONFIRMED, S.PROCESSING, S.SHIPPED, S.DELIVERED, S.CANCELLED},
    # un-confirming back to PENDING is allowed
    S.CONFIRMED: {S.PENDING, S.PROCESSING, S.SHIPPED, S.DELIVERED, S.CANCELLED},
    S.PROCESSING: {S.CONFIRMED, S.SHIPPED, S.DELIVERED, S.CANCELLED},
    S.SHIPPED: {S.DELIVERED, S.CANCELLED},
    S.DELIVERED: {S.REFUNDED},
    S.CANCELLED: {S.REFUNDED},
}


# ============================================================
# DOMAIN RULES
# ============================================================


def strict_transitions_enabled() -> bool:
    return bool(getattr(settings, "ORDER_STRICT_TRANSITIONS", True))


def can_transition(*, from_status: str, to_status: str, strict: bool | None = None) -> bool:
    if from_status == to_status:
        return True

    if strict is None:
        strict = strict_transitions_enabled()
    if not strict:
        return True

    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def allowed_next_statuses(from_status: str) -> list[str]:
    if from_status in TERMINAL_STATES:
        return []
    return sorted(ALLOWED_TRANSITIONS.get(from_status, set()))


def validate_transition(*, order: Order, target_status: str, strict: bool | None = None):
    if not can_transition(
        from_status=order.status,
        to_status=target_status,
        strict=strict,
    ):
        raise InvalidOrderTransitionError(
            f"Order status cannot change from {order.status} to {target_status}"
        )
