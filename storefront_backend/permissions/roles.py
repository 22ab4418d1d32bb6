# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# Roles are derived from the auth user flags; there is no role column.
ROLE_ADMIN = "admin"        # is_superuser
ROLE_MANAGER = "manager"    # is_staff
ROLE_CUSTOMER = "customer"  # any other authenticated user

ALL_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_CUSTOMER,
}


# =========================================================
# CAPABILITIES
# =========================================================
# Views protect capabilities, not raw roles.
CAP_ORDERS_VIEW = "orders.view"
CAP_ORDERS_MANAGE = "orders.manage"  # status / payment workflow

CAP_COUPONS_VIEW = "coupons.view"
CAP_COUPONS_MANAGE = "coupons.manage"  # create / edit / delete coupons

CAP_ADDRESSES_MANAGE = "addresses.manage"  # own saved addresses

CAP_AUDIT_VIEW = "audit.view"

ALL_CAPABILITIES = {
    CAP_ORDERS_VIEW,
    CAP_ORDERS_MANAGE,
    CAP_COUPONS_VIEW,
    CAP_COUPONS_MANAGE,
    CAP_ADDRESSES_MANAGE,
    CAP_AUDIT_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_ORDERS_VIEW,
        CAP_ORDERS_MANAGE,
        CAP_COUPONS_VIEW,
        # coupon changes stay with admins
    },
    ROLE_CUSTOMER: {
        CAP_ADDRESSES_MANAGE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "is_superuser", False):
        return ROLE_ADMIN
    if getattr(user, "is_staff", False):
        return ROLE_MANAGER
    return ROLE_CUSTOMER


def effective_capabilities_for(user) -> set[str]:
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    return capability in effective_capabilities_for(user)


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        required_capability = CAP_ORDERS_MANAGE
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default
            return False

        return required in effective_capabilities_for(user)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a set.

    Usage:
        required_any_capabilities = {CAP_ORDERS_VIEW, CAP_ORDERS_MANAGE}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = effective_capabilities_for(user)
        return any(cap in caps for cap in set(required))
