# orders/views/tracking.py

"""
PUBLIC ORDER TRACKING

GET /api/orders/track/?order_number=TSF-...&email=...

- AllowAny + throttled (public_poll)
- At least one of order_number / email; both must match when both given
- Newest first; status history newest first
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.api import error_response
from core.throttles import PublicPollThrottle
from orders.serializers import OrderSerializer
from orders.services.order_service import OrderLookupError, track_orders


class OrderTrackView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        tags=["Orders"],
        parameters=[
            OpenApiParameter(name="order_number", required=False, type=str),
            OpenApiParameter(name="email", required=False, type=str),
        ],
        responses={
            200: OrderSerializer(many=True),
            400: OpenApiResponse(description="Missing lookup parameters"),
            404: OpenApiResponse(description="No matching orders"),
        },
    )
    def get(self, request, *args, **kwargs):
        try:
            orders = track_orders(
                order_number=request.query_params.get("order_number"),
                email=request.query_params.get("email"),
            )
        except OrderLookupError as exc:
            return error_response(
                code=exc.code,
                message=exc.message,
                http_status=status.HTTP_400_BAD_REQUEST,
                kind=exc.error_kind.value,
            )

        if not orders:
            return error_response(
                code="ORDER_NOT_FOUND",
                message="No orders found",
                http_status=status.HTTP_404_NOT_FOUND,
                kind="NotFound",
            )

        return Response({"orders": OrderSerializer(orders, many=True).data})
