# console/views/analytics.py

"""
ADMIN DASHBOARD ANALYTICS

All aggregates are computed in the database:
- total_revenue   Sum(total_amount) over payment_status=paid
- total_orders / total_users / total_products
- recent_orders   latest 10 orders
- top_products    5 best-selling item snapshots by quantity over paid orders
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum
from django.db.models.functions import Coalesce
from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.models import Product
from console.serializers import AdminOrderSerializer, AnalyticsSerializer, TopProductSerializer
from orders.models import Order, OrderItem

from .base import AdminAPIMixin

User = get_user_model()

RECENT_ORDERS_LIMIT = 10
TOP_PRODUCTS_LIMIT = 5

ZERO = Decimal("0.00")


def _top_products(limit: int = TOP_PRODUCTS_LIMIT):
    return (
        OrderItem.objects.filter(order__payment_status=Order.PAYMENT_PAID)
        .values("product_id", "product_name")
        .annotate(quantity_sold=Sum("quantity"), revenue=Sum("subtotal"))
        .order_by("-quantity_sold", "product_name")[:limit]
    )


class AnalyticsView(AdminAPIMixin, APIView):
    @extend_schema(responses={200: AnalyticsSerializer})
    def get(self, request):
        revenue = Order.objects.filter(payment_status=Order.PAYMENT_PAID).aggregate(
            total=Coalesce(Sum("total_amount"), ZERO)
        )["total"]

        recent = (
            Order.objects.select_related("user")
            .prefetch_related("items")
            .order_by("-created_at")[:RECENT_ORDERS_LIMIT]
        )

        return Response(
            {
                "data": {
                    "total_revenue": f"{Decimal(revenue):.2f}",
                    "total_orders": Order.objects.count(),
                    "total_users": User.objects.count(),
                    "total_products": Product.objects.count(),
                    "recent_orders": AdminOrderSerializer(recent, many=True).data,
                    "top_products": TopProductSerializer(_top_products(), many=True).data,
                }
            }
        )
