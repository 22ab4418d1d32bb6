# orders/filters.py

import django_filters

from orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Order.PaymentStatus.choices)
    email = django_filters.CharFilter(field_name="customer_email", lookup_expr="iexact")
    order_number = django_filters.CharFilter(field_name="order_number", lookup_expr="iexact")
    created_from = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_to = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["status", "payment_status", "email", "order_number"]
