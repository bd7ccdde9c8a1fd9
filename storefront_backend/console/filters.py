# console/filters.py

from django.db.models import Q
from django_filters import rest_framework as filters

from orders.models import Order


class AdminOrderFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=Order.STATUS_CHOICES)
    payment_status = filters.ChoiceFilter(choices=Order.PAYMENT_STATUS_CHOICES)
    search = filters.CharFilter(method="filter_search")

    class Meta:
        model = Order
        fields = ["status", "payment_status", "search"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(order_no__icontains=value) | Q(user__email__icontains=value))
