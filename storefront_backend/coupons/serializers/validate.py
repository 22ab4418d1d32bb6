# coupons/serializers/validate.py

from rest_framework import serializers


class CouponValidateRequestSerializer(serializers.Serializer):
    # Missing/blank values are reported by the coupon engine with
    # customer-facing messages, so both fields are lenient here.
    code = serializers.CharField(required=False, allow_blank=True, default="")
    order_amount = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=None
    )


class CouponSnapshotSerializer(serializers.Serializer):
    id = serializers.CharField()
    code = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    type = serializers.CharField()
    value = serializers.CharField()
    min_order_amount = serializers.CharField(allow_null=True)
    max_discount_amount = serializers.CharField(allow_null=True)
    start_date = serializers.CharField(allow_null=True)
    end_date = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    usage_limit = serializers.IntegerField(allow_null=True)
    used_count = serializers.IntegerField()


class CouponValidateResponseSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    discount_amount = serializers.CharField()
    coupon = CouponSnapshotSerializer()
    message = serializers.CharField()
