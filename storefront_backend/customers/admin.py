# customers/admin.py

from django.contrib import admin

from customers.models import Customer, CustomerAddress


class CustomerAddressInline(admin.TabularInline):
    model = CustomerAddress
    extra = 0
    fields = ("type", "name", "city", "is_default")
    readonly_fields = ("is_default",)


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "created_at")
    search_fields = ("name", "email", "phone")
    inlines = [CustomerAddressInline]


@admin.register(CustomerAddress)
class CustomerAddressAdmin(admin.ModelAdmin):
    list_display = ("customer", "type", "name", "city", "is_default")
    list_filter = ("type", "is_default")
    search_fields = ("customer__email", "name", "city")
    # default flag is service-managed (single-default invariant)
    readonly_fields = ("is_default",)
