# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem, OrderStatusHistory


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product_name",
        "quantity",
        "unit_price",
        "discount_amount",
        "total_price",
    )
    fields = readonly_fields


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ("status", "notes", "changed_by", "created_at")
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly: status changes go through the API workflow so history
    and audit rows are written.
    """

    list_display = (
        "order_number",
        "customer_name",
        "customer_email",
        "total_amount",
        "status",
        "payment_status",
        "created_at",
    )
    list_filter = ("status", "payment_status")
    search_fields = ("order_number", "customer_email", "customer_name")
    inlines = [OrderItemInline, OrderStatusHistoryInline]
    readonly_fields = (
        "order_number",
        "status",
        "payment_status",
        "subtotal",
        "discount_amount",
        "delivery_fee",
        "tax_amount",
        "total_amount",
        "coupon_code",
        "created_at",
        "updated_at",
    )
