# customers/views/addresses.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api import error_response, failed_result_response
from customers.serializers import (
    CustomerAddressSerializer,
    CustomerAddressWriteSerializer,
)
from customers.services.address_service import (
    create_address,
    delete_address,
    list_addresses,
    set_default_address,
    update_address,
)
from customers.services.customer_service import (
    get_customer_for_user,
    get_or_create_customer_for_user,
)
from permissions.roles import CAP_ADDRESSES_MANAGE, HasCapability


class CustomerAddressViewSet(viewsets.ViewSet):
    """
    Saved shipping addresses of the authenticated customer.

    - list:        default first, then newest
    - create:      is_default=true demotes the previous default
    - update:      PUT/PATCH, same default rule
    - destroy
    - set-default: POST /addresses/<id>/set-default/
    """

    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_ADDRESSES_MANAGE

    def _resolve_customer(self, request, *, create: bool):
        if create:
            customer = get_or_create_customer_for_user(request.user)
        else:
            customer = get_customer_for_user(request.user)
        return customer

    def list(self, request):
        customer = self._resolve_customer(request, create=False)
        if customer is None:
            return Response({"addresses": []})

        addresses = list_addresses(customer=customer)
        return Response(
            {"addresses": CustomerAddressSerializer(addresses, many=True).data}
        )

    def create(self, request):
        serializer = CustomerAddressWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        customer = self._resolve_customer(request, create=True)
        if customer is None:
            return error_response(
                code="CUSTOMER_NOT_FOUND",
                message="Customer not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        result = create_address(customer=customer, data=serializer.validated_data)
        if not result.ok:
            return failed_result_response(result)

        return Response(
            {"success": True, "address": CustomerAddressSerializer(result.data).data},
            status=status.HTTP_201_CREATED,
        )

    def _update(self, request, pk, *, partial: bool):
        serializer = CustomerAddressWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        if not partial:
            # full replacement: an omitted flag means "not default"
            data.setdefault("is_default", False)

        result = update_address(
            customer=self._resolve_customer(request, create=False),
            address_id=pk,
            data=data,
            partial=partial,
        )
        if not result.ok:
            return failed_result_response(result)

        return Response(
            {"success": True, "address": CustomerAddressSerializer(result.data).data}
        )

    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def destroy(self, request, pk=None):
        result = delete_address(
            customer=self._resolve_customer(request, create=False),
            address_id=pk,
        )
        if not result.ok:
            return failed_result_response(result)
        return Response({"success": True})

    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        result = set_default_address(
            customer=self._resolve_customer(request, create=False),
            address_id=pk,
        )
        if not result.ok:
            return failed_result_response(result)

        return Response(
            {"success": True, "address": CustomerAddressSerializer(result.data).data}
        )
