# coupons/views/admin_coupons.py

"""
ADMIN COUPON CRUD

- list/retrieve: coupons.view (admin + manager)
- create/update/delete: coupons.manage (admin)

Every write is audited (core.AuditLog) in the same transaction.
Delete is a hard delete; redemption rows keep their coupon_code snapshot.
"""

from __future__ import annotations

import logging

from django.db import transaction
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from core.models import AuditLog
from core.services.audit import log_audit
from coupons.models import Coupon
from coupons.serializers import CouponSerializer
from coupons.services.coupon_store import delete_coupon
from permissions.roles import (
    CAP_COUPONS_MANAGE,
    CAP_COUPONS_VIEW,
    HasAnyCapability,
    HasCapability,
)

logger = logging.getLogger(__name__)

SAFE_ACTIONS = {"list", "retrieve"}


class CouponAdminViewSet(viewsets.ModelViewSet):
    queryset = Coupon.objects.all().order_by("-created_at")
    serializer_class = CouponSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["type", "is_active"]

    required_capability = None

    def get_permissions(self):
        if self.action in SAFE_ACTIONS:
            self.required_any_capabilities = {CAP_COUPONS_VIEW, CAP_COUPONS_MANAGE}
            return [IsAuthenticated(), HasAnyCapability()]

        self.required_capability = CAP_COUPONS_MANAGE
        return [IsAuthenticated(), HasCapability()]

    def _snapshot(self, coupon: Coupon) -> dict:
        return dict(CouponSerializer(coupon).data)

    @transaction.atomic
    def perform_create(self, serializer):
        coupon = serializer.save()
        log_audit(
            table_name="coupons",
            record_id=coupon.pk,
            action=AuditLog.ACTION_CREATE,
            new_values=self._snapshot(coupon),
            request=self.request,
        )
        logger.info("Coupon created", extra={"coupon_code": coupon.code})

    @transaction.atomic
    def perform_update(self, serializer):
        old_values = self._snapshot(serializer.instance)
        coupon = serializer.save()
        log_audit(
            table_name="coupons",
            record_id=coupon.pk,
            action=AuditLog.ACTION_UPDATE,
            old_values=old_values,
            new_values=self._snapshot(coupon),
            request=self.request,
        )
        logger.info("Coupon updated", extra={"coupon_code": coupon.code})

    @transaction.atomic
    def perform_destroy(self, instance):
        old_values = self._snapshot(instance)
        record_id = instance.pk
        delete_coupon(instance)
        log_audit(
            table_name="coupons",
            record_id=record_id,
            action=AuditLog.ACTION_DELETE,
            old_values=old_values,
            request=self.request,
        )
        logger.info("Coupon deleted", extra={"coupon_code": old_values.get("code")})
