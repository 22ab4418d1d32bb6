# coupons/serializers/coupon.py

from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from coupons.models import Coupon
from coupons.models.coupon import default_coupon_end_date, normalize_coupon_code
from coupons.services.coupon_store import code_taken


class CouponSerializer(serializers.ModelSerializer):
    """
    Admin coupon serializer.

    Rules:
    - code is trimmed + uppercased; duplicates rejected (also on update,
      against other coupons)
    - value >= 0; PERCENTAGE value <= 100
    - start_date defaults to now, end_date to start_date +
      COUPON_DEFAULT_VALIDITY_DAYS; omitted dates on update keep stored values
    - start_date <= end_date
    - used_count is read-only (redemption owns it)
    """

    code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=120)
    value = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0.00")
    )
    min_order_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    max_discount_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
    )
    usage_limit = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False)

    class Meta:
        model = Coupon
        fields = [
            "id",
            "code",
            "name",
            "description",
            "type",
            "value",
            "min_order_amount",
            "max_discount_amount",
            "start_date",
            "end_date",
            "is_active",
            "usage_limit",
            "used_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "used_count", "created_at", "updated_at"]

    def validate_code(self, value: str):
        code = normalize_coupon_code(value)
        if not code:
            raise serializers.ValidationError("code cannot be blank")

        exclude_id = self.instance.pk if self.instance is not None else None
        if code_taken(code, exclude_id=exclude_id):
            raise serializers.ValidationError("Coupon code already exists")
        return code

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def validate_description(self, value):
        v = (value or "").strip()
        return v or None

    def validate(self, attrs):
        instance = self.instance

        coupon_type = attrs.get("type", getattr(instance, "type", Coupon.Type.PERCENTAGE))
        value = attrs.get("value", getattr(instance, "value", None))
        if coupon_type == Coupon.Type.PERCENTAGE and value is not None and value > 100:
            raise serializers.ValidationError(
                {"value": "Percentage value cannot exceed 100"}
            )

        if instance is None:
            # fill create defaults here so the window check sees the stored values
            attrs.setdefault("start_date", timezone.now())
            attrs.setdefault("end_date", default_coupon_end_date(attrs["start_date"]))

        start = attrs.get("start_date", getattr(instance, "start_date", None))
        end = attrs.get("end_date", getattr(instance, "end_date", None))
        if start is not None and end is not None and start > end:
            raise serializers.ValidationError(
                {"end_date": "End date must be on or after start date"}
            )

        return attrs
