# orders/serializers/status_update.py

from rest_framework import serializers


class OrderStatusUpdateSerializer(serializers.Serializer):
    """
    Admin status update command.

    Enum membership is checked by the order workflow (so the error message
    names the offending value); this serializer only shapes the payload.
    """

    status = serializers.CharField(max_length=32)
    payment_status = serializers.CharField(max_length=32)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
