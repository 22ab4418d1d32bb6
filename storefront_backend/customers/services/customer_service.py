# customers/services/customer_service.py

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from customers.models import Customer

logger = logging.getLogger(__name__)


def _display_name(user) -> str:
    full = ""
    if hasattr(user, "get_full_name"):
        full = (user.get_full_name() or "").strip()
    return full or (getattr(user, "username", "") or "").strip()


def get_customer_for_user(user) -> Customer | None:
    if user is None or not getattr(user, "is_authenticated", False):
        return None

    linked = Customer.objects.filter(user=user).first()
    if linked is not None:
        return linked

    email = (getattr(user, "email", "") or "").strip()
    if not email:
        return None
    return Customer.objects.filter(email__iexact=email).first()


def get_or_create_customer_for_user(user) -> Customer | None:
    """
    Resolve the storefront Customer behind an authenticated user.

    Lookup order: linked profile, then email. First use creates the
    profile from the user's name/email. Users without an email cannot
    own a customer profile and get None.
    """
    customer = get_customer_for_user(user)
    if customer is not None:
        if customer.user_id is None:
            customer.user = user
            customer.save(update_fields=["user", "updated_at"])
        return customer

    email = (getattr(user, "email", "") or "").strip() if user else ""
    if not email:
        return None

    try:
        with transaction.atomic():
            customer = Customer.objects.create(
                user=user,
                name=_display_name(user) or email.split("@")[0],
                email=email.lower(),
            )
    except IntegrityError:
        # concurrent first request created it
        return Customer.objects.filter(email__iexact=email).first()

    logger.info("Customer profile created", extra={"customer_id": str(customer.id)})
    return customer
