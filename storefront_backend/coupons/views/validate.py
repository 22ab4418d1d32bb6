# coupons/views/validate.py

"""
PUBLIC COUPON VALIDATION

POST /api/coupons/validate/   {"code": "SAVE10", "order_amount": "1000"}

- Read-only: nothing is reserved or consumed.
- AllowAny + throttled (public_write): a cart page may call this on every
  recalculation.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.results import ErrorKind
from core.throttles import PublicWriteThrottle
from coupons.serializers import (
    CouponValidateRequestSerializer,
    CouponValidateResponseSerializer,
)
from coupons.services.coupon_engine import validate_coupon


class CouponValidateView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Coupons"],
        request=CouponValidateRequestSerializer,
        responses={
            200: CouponValidateResponseSerializer,
            400: OpenApiResponse(description="Invalid input or coupon not applicable"),
            404: OpenApiResponse(description="Unknown coupon code"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description="Validate a coupon code against an order amount and preview the discount.",
    )
    def post(self, request, *args, **kwargs):
        s = CouponValidateRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = validate_coupon(
            s.validated_data.get("code"),
            s.validated_data.get("order_amount"),
        )

        if not result.valid:
            http_status = (
                status.HTTP_404_NOT_FOUND
                if result.error_kind == ErrorKind.NOT_FOUND
                else status.HTTP_400_BAD_REQUEST
            )
            return Response(
                {
                    "valid": False,
                    "error": {
                        "kind": result.error_kind.value,
                        "code": result.code,
                        "message": result.message,
                    },
                },
                status=http_status,
            )

        payload = result.to_dict()
        payload["message"] = "Coupon applied successfully!"
        return Response(payload, status=status.HTTP_200_OK)
