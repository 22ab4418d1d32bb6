# coupons/services/coupon_store.py

"""
COUPON STORE (DATA ACCESS)

- find_coupon_by_code(code)  -> Coupon | None   (case-insensitive)
- find_coupon_by_id(id)      -> Coupon | None
- save_coupon(coupon)
- delete_coupon(coupon)      (hard delete)
- increment_usage(id)        -> bool            (atomic increment-with-check)
"""

from __future__ import annotations

from django.db.models import F, Q

from core.ids import as_uuid
from coupons.models import Coupon
from coupons.models.coupon import normalize_coupon_code


def find_coupon_by_code(code, *, for_update: bool = False) -> Coupon | None:
    normalized = normalize_coupon_code(code)
    if not normalized:
        return None

    qs = Coupon.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(code=normalized).first()


def find_coupon_by_id(coupon_id, *, for_update: bool = False) -> Coupon | None:
    pk = as_uuid(coupon_id)
    if pk is None:
        return None

    qs = Coupon.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(pk=pk).first()


def code_taken(code, *, exclude_id=None) -> bool:
    qs = Coupon.objects.filter(code=normalize_coupon_code(code))
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs.exists()


def save_coupon(coupon: Coupon) -> Coupon:
    coupon.save()
    return coupon


def delete_coupon(coupon: Coupon) -> None:
    coupon.delete()


def increment_usage(coupon_id) -> bool:
    """
    used_count += 1 unless the usage limit is already reached.

    Single conditional UPDATE: concurrent redemptions can never push
    used_count past usage_limit. Returns False when nothing was updated.
    """
    updated = (
        Coupon.objects.filter(pk=coupon_id)
        .filter(Q(usage_limit__isnull=True) | Q(used_count__lt=F("usage_limit")))
        .update(used_count=F("used_count") + 1)
    )
    return updated == 1
