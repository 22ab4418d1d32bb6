# customers/serializers/address.py

"""
Transport-layer shapes only. Business rules (required fields, default
invariant, ownership) live in customers.services.address_service.
"""

from rest_framework import serializers

from customers.models import CustomerAddress


class CoordinatesSerializer(serializers.Serializer):
    lat = serializers.FloatField()
    lng = serializers.FloatField()


class CustomerAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomerAddress
        fields = [
            "id",
            "type",
            "name",
            "address",
            "city",
            "landmark",
            "coordinates",
            "is_default",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CustomerAddressWriteSerializer(serializers.Serializer):
    type = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField(required=False, allow_blank=True, max_length=120)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True, max_length=120)
    landmark = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    coordinates = CoordinatesSerializer(required=False, allow_null=True)
    is_default = serializers.BooleanField(required=False)
