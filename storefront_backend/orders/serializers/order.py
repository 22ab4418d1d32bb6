# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, OrderItem, OrderStatusHistory


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_name",
            "product_image",
            "quantity",
            "unit_price",
            "discount_amount",
            "total_price",
        ]
        read_only_fields = fields


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = ["id", "status", "notes", "created_at"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Read-only order representation (admin + tracking).

    status_history is newest first when the queryset prefetches it that
    way (see orders.services.order_service.with_order_details); otherwise
    chronological.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = OrderStatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_name",
            "customer_email",
            "customer_phone",
            "shipping_address",
            "shipping_city",
            "shipping_landmark",
            "shipping_coordinates",
            "subtotal",
            "discount_amount",
            "delivery_fee",
            "tax_amount",
            "total_amount",
            "coupon_code",
            "status",
            "payment_status",
            "notes",
            "items",
            "status_history",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
