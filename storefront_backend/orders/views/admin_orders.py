# orders/views/admin_orders.py

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api import failed_result_response
from orders.filters import OrderFilter
from orders.models import Order
from orders.serializers import OrderSerializer, OrderStatusUpdateSerializer
from orders.services.order_service import with_order_details
from orders.services.order_workflow import apply_order_update
from permissions.roles import (
    CAP_ORDERS_MANAGE,
    CAP_ORDERS_VIEW,
    HasAnyCapability,
    HasCapability,
)


class OrderAdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Admin order ViewSet (READ + STATUS WORKFLOW).

    - list/retrieve: orders.view (filters: status, payment_status, email,
      order_number, created_from, created_to)
    - update-status: orders.manage
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = OrderFilter

    required_capability = None

    def get_queryset(self):
        return with_order_details(Order.objects.all().order_by("-created_at"))

    def get_permissions(self):
        if self.action == "update_status":
            self.required_capability = CAP_ORDERS_MANAGE
            return [IsAuthenticated(), HasCapability()]

        self.required_any_capabilities = {CAP_ORDERS_VIEW, CAP_ORDERS_MANAGE}
        return [IsAuthenticated(), HasAnyCapability()]

    def get_serializer_class(self):
        if self.action == "update_status":
            return OrderStatusUpdateSerializer
        return OrderSerializer

    @extend_schema(
        tags=["Orders"],
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Invalid status value"),
            404: OpenApiResponse(description="Order not found"),
            409: OpenApiResponse(description="Transition not allowed"),
        },
    )
    @action(detail=True, methods=["post"], url_path="update-status")
    def update_status(self, request, pk=None):
        """
        Apply status + payment status (+ optional notes).
        """
        command = OrderStatusUpdateSerializer(data=request.data)
        command.is_valid(raise_exception=True)
        data = command.validated_data

        result = apply_order_update(
            order_id=pk,
            status=data["status"],
            payment_status=data["payment_status"],
            notes=data.get("notes"),
            actor=request.user,
            request=request,
        )
        if not result.ok:
            return failed_result_response(result)

        order = self.get_queryset().get(pk=result.data.pk)
        return Response(
            {
                "success": True,
                "message": result.message,
                "order": OrderSerializer(order).data,
            },
            status=status.HTTP_200_OK,
        )
