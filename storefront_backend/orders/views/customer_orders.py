# orders/views/customer_orders.py

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from customers.services.customer_service import get_customer_for_user
from orders.serializers import OrderSerializer
from orders.services.order_service import orders_for_customer

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


class MyOrdersView(APIView):
    """
    GET /api/orders/mine/?limit=10 : latest orders of the signed-in customer.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        try:
            limit = int(request.query_params.get("limit", DEFAULT_LIMIT))
        except (TypeError, ValueError):
            limit = DEFAULT_LIMIT
        limit = max(1, min(limit, MAX_LIMIT))

        customer = get_customer_for_user(request.user)
        orders = orders_for_customer(customer, limit=limit)
        return Response({"orders": OrderSerializer(orders, many=True).data})
