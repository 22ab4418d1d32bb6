# coupons/services/coupon_engine.py

"""
COUPON ENGINE (VALIDATION + DISCOUNT)

Purpose:
- Decide whether a coupon code applies to an order amount right now.
- Compute the discount it grants.

DESIGN PRINCIPLES:
- Read-only: validation never touches used_count (redemption does).
  The same code can be validated any number of times before checkout.
- Deterministic: result depends only on (coupon row, amount, now).
- Expected failures are returned as CouponValidationResult(valid=False),
  never raised to the caller.

Rules (checked in this order):
1) code exists                      -> COUPON_NOT_FOUND
2) is_active                        -> COUPON_INACTIVE
3) start_date <= now <= end_date    -> COUPON_NOT_YET_VALID_OR_EXPIRED
4) used_count < usage_limit         -> COUPON_USAGE_LIMIT_REACHED
5) amount >= min_order_amount       -> ORDER_AMOUNT_BELOW_MINIMUM

Discount:
- PERCENTAGE:    amount * value / 100, capped by max_discount_amount (and amount)
- FLAT:          min(value, amount)
- FREE_SHIPPING: 0.00 (caller waives the delivery fee)
Rounded to 2dp, half-up. Amounts beyond core.money.MAX_AMOUNT are
invalid input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from django.conf import settings
from django.utils import timezone

from core.money import ZERO, money, to_decimal
from core.results import ErrorKind, StorefrontError
from coupons.models import Coupon
from coupons.models.coupon import normalize_coupon_code
from coupons.services.coupon_store import find_coupon_by_code

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================


class CouponError(StorefrontError):
    pass


class CouponInputError(CouponError):
    error_kind = ErrorKind.INVALID_INPUT
    code = "INVALID_INPUT"


class CouponNotFoundError(CouponError):
    error_kind = ErrorKind.NOT_FOUND
    code = "COUPON_NOT_FOUND"

    def __init__(self, message: str = "Invalid coupon code"):
        super().__init__(message)


class CouponInactiveError(CouponError):
    error_kind = ErrorKind.POLICY_VIOLATION
    code = "COUPON_INACTIVE"

    def __init__(self, message: str = "This coupon is not active"):
        super().__init__(message)


class CouponNotYetValidOrExpiredError(CouponError):
    error_kind = ErrorKind.POLICY_VIOLATION
    code = "COUPON_NOT_YET_VALID_OR_EXPIRED"


class CouponUsageLimitReachedError(CouponError):
    error_kind = ErrorKind.POLICY_VIOLATION
    code = "COUPON_USAGE_LIMIT_REACHED"

    def __init__(self, message: str = "This coupon has reached its usage limit"):
        super().__init__(message)


class OrderAmountBelowMinimumError(CouponError):
    error_kind = ErrorKind.POLICY_VIOLATION
    code = "ORDER_AMOUNT_BELOW_MINIMUM"


# ============================================================
# RESULT TYPES
# ============================================================


def _opt_str(value) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class CouponSnapshot:
    id: Any
    code: str
    name: str
    description: Optional[str]
    type: str
    value: Decimal
    min_order_amount: Optional[Decimal]
    max_discount_amount: Optional[Decimal]
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    is_active: bool
    usage_limit: Optional[int]
    used_count: int

    @classmethod
    def from_model(cls, coupon: Coupon) -> "CouponSnapshot":
        return cls(
            id=coupon.pk,
            code=coupon.code,
            name=coupon.name,
            description=coupon.description,
            type=str(coupon.type),
            value=money(coupon.value),
            min_order_amount=(
                None if coupon.min_order_amount is None else money(coupon.min_order_amount)
            ),
            max_discount_amount=(
                None
                if coupon.max_discount_amount is None
                else money(coupon.max_discount_amount)
            ),
            start_date=coupon.start_date,
            end_date=coupon.end_date,
            is_active=bool(coupon.is_active),
            usage_limit=coupon.usage_limit,
            used_count=int(coupon.used_count or 0),
        )

    @property
    def is_free_shipping(self) -> bool:
        return self.type == Coupon.Type.FREE_SHIPPING

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "value": str(self.value),
            "min_order_amount": _opt_str(self.min_order_amount),
            "max_discount_amount": _opt_str(self.max_discount_amount),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "is_active": self.is_active,
            "usage_limit": self.usage_limit,
            "used_count": self.used_count,
        }


@dataclass(frozen=True)
class CouponValidationResult:
    valid: bool
    discount_amount: Optional[Decimal] = None
    coupon: Optional[CouponSnapshot] = None
    error_kind: Optional[ErrorKind] = None
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def accepted(cls, coupon: CouponSnapshot, discount: Decimal) -> "CouponValidationResult":
        return cls(valid=True, discount_amount=discount, coupon=coupon)

    @classmethod
    def rejected(cls, exc: CouponError) -> "CouponValidationResult":
        return cls(
            valid=False,
            error_kind=exc.error_kind,
            code=exc.code,
            message=exc.message,
        )

    def to_dict(self) -> dict:
        if not self.valid:
            return {
                "valid": False,
                "error_kind": self.error_kind.value if self.error_kind else None,
                "code": self.code,
                "message": self.message,
            }
        return {
            "valid": True,
            "discount_amount": str(self.discount_amount),
            "coupon": self.coupon.to_dict() if self.coupon else None,
        }


# ============================================================
# DISCOUNT COMPUTATION (PURE)
# ============================================================


def compute_discount(
    *,
    coupon_type: str,
    value,
    order_amount,
    max_discount_amount=None,
) -> Decimal:
    amount = to_decimal(order_amount)
    rate_or_amount = to_decimal(value)

    if coupon_type == Coupon.Type.PERCENTAGE:
        discount = min(amount * rate_or_amount / Decimal("100"), amount)
        if max_discount_amount is not None:
            discount = min(discount, to_decimal(max_discount_amount))
    elif coupon_type == Coupon.Type.FLAT:
        discount = min(rate_or_amount, amount)
    else:
        # FREE_SHIPPING: merchandise discount is zero
        discount = ZERO

    return money(discount)


# ============================================================
# POLICY CHECKS (raise CouponError)
# ============================================================


def _clean_amount(order_amount) -> Decimal:
    try:
        amount = to_decimal(order_amount)
    except ValueError:
        raise CouponInputError("Valid order amount is required")
    if amount < 0:
        raise CouponInputError("Valid order amount is required")
    return amount


def check_coupon(coupon: Coupon | None, order_amount: Decimal, now: datetime) -> Decimal:
    """
    Apply the policy rules to one coupon row; returns the discount.
    """
    if coupon is None:
        raise CouponNotFoundError()

    if not coupon.is_active:
        raise CouponInactiveError()

    if coupon.start_date is not None and now < coupon.start_date:
        raise CouponNotYetValidOrExpiredError("This coupon is not yet valid")

    if coupon.end_date is not None and now > coupon.end_date:
        raise CouponNotYetValidOrExpiredError("This coupon has expired")

    if coupon.usage_limit is not None and coupon.used_count >= coupon.usage_limit:
        raise CouponUsageLimitReachedError()

    if coupon.min_order_amount is not None and order_amount < coupon.min_order_amount:
        label = getattr(settings, "CURRENCY_LABEL", "Rs.")
        raise OrderAmountBelowMinimumError(
            f"Minimum order amount of {label} {money(coupon.min_order_amount)} "
            f"required for this coupon"
        )

    return compute_discount(
        coupon_type=coupon.type,
        value=coupon.value,
        order_amount=order_amount,
        max_discount_amount=coupon.max_discount_amount,
    )


# ============================================================
# PUBLIC OPERATION
# ============================================================


def evaluate_coupon(coupon: Coupon | None, order_amount, now: datetime | None = None) -> CouponValidationResult:
    """
    Validate an already-loaded coupon row (e.g. one locked by checkout).
    """
    now = now or timezone.now()
    try:
        amount = _clean_amount(order_amount)
        discount = check_coupon(coupon, amount, now)
    except CouponError as exc:
        return CouponValidationResult.rejected(exc)

    return CouponValidationResult.accepted(CouponSnapshot.from_model(coupon), discount)


def validate_coupon(code, order_amount, now: datetime | None = None) -> CouponValidationResult:
    normalized = normalize_coupon_code(code)
    if not normalized:
        result = CouponValidationResult.rejected(CouponInputError("Coupon code is required"))
    else:
        try:
            _clean_amount(order_amount)
        except CouponInputError as exc:
            result = CouponValidationResult.rejected(exc)
        else:
            result = evaluate_coupon(find_coupon_by_code(normalized), order_amount, now)

    if result.valid:
        logger.info(
            "Coupon validated",
            extra={"coupon_code": normalized, "discount": str(result.discount_amount)},
        )
    else:
        logger.info(
            "Coupon rejected",
            extra={"coupon_code": normalized, "code": result.code},
        )
    return result
