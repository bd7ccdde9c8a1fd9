# catalog/filters.py

"""
PRODUCT LIST FILTERS

Query params:
- category   category UUID or slug
- search     case-insensitive name match
- min_price / max_price
- is_featured
- sort       newest | price_asc | price_desc | name_asc | name_desc
"""

from __future__ import annotations

import uuid

from django_filters import rest_framework as filters
from django.db.models import Q

from catalog.models import Product

SORT_ORDERINGS = {
    "newest": ("-created_at",),
    "price_asc": ("price", "name"),
    "price_desc": ("-price", "name"),
    "name_asc": ("name",),
    "name_desc": ("-name",),
}


class ProductFilter(filters.FilterSet):
    category = filters.CharFilter(method="filter_category")
    search = filters.CharFilter(field_name="name", lookup_expr="icontains")
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")
    is_featured = filters.BooleanFilter(field_name="is_featured")
    sort = filters.ChoiceFilter(
        method="filter_sort",
        choices=[(key, key) for key in SORT_ORDERINGS],
        empty_label=None,
    )

    class Meta:
        model = Product
        fields = ["category", "search", "min_price", "max_price", "is_featured", "sort"]

    def filter_category(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset

        try:
            category_id = uuid.UUID(value)
        except ValueError:
            return queryset.filter(category__slug=value)

        return queryset.filter(Q(category_id=category_id) | Q(category__slug=value))

    def filter_sort(self, queryset, name, value):
        return queryset.order_by(*SORT_ORDERINGS.get(value, SORT_ORDERINGS["newest"]))
