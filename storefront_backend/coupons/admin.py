# coupons/admin.py

from django.contrib import admin

from coupons.models import Coupon, CouponUsage


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "type",
        "value",
        "is_active",
        "start_date",
        "end_date",
        "used_count",
        "usage_limit",
    )
    list_filter = ("type", "is_active")
    search_fields = ("code", "name")
    readonly_fields = ("used_count", "created_at", "updated_at")


@admin.register(CouponUsage)
class CouponUsageAdmin(admin.ModelAdmin):
    list_display = ("coupon_code", "order", "customer", "discount_amount", "used_at")
    search_fields = ("coupon_code",)
    readonly_fields = (
        "coupon",
        "coupon_code",
        "order",
        "customer",
        "discount_amount",
        "used_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
