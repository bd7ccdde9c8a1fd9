# console/views/orders.py

"""
ADMIN ORDER MANAGEMENT

- GET /admin/orders               all orders (?status=&payment_status=&search=)
- GET /admin/orders/<id>
- PUT /admin/orders/<id>/status   fulfilment state machine
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from console.filters import AdminOrderFilter
from console.serializers import AdminOrderSerializer, OrderStatusUpdateSerializer
from orders.models import Order

from .base import AdminAPIMixin

logger = logging.getLogger(__name__)


class OrderAdminViewSet(
    AdminAPIMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminOrderSerializer
    filterset_class = AdminOrderFilter
    page_size = 20

    def get_queryset(self):
        return (
            Order.objects.select_related("user")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"data": self.get_serializer(self.get_object()).data})

    @extend_schema(request=OrderStatusUpdateSerializer, responses={200: AdminOrderSerializer})
    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = self.get_object()
        previous = order.status
        changed = order.transition_to(serializer.validated_data["status"])

        if changed:
            logger.info(
                "Order status changed",
                extra={
                    "order_id": str(order.id),
                    "from": previous,
                    "to": order.status,
                    "by": str(request.user.id),
                },
            )

        return Response(
            {
                "data": self.get_serializer(order).data,
                "message": "Order status updated" if changed else "Order status unchanged",
            }
        )
