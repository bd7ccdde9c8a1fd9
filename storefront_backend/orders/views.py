# orders/views.py

"""
ORDER API VIEWS (customer-facing)

- GET  /orders        caller's orders, newest first, with items
- POST /orders        checkout the caller's cart
- GET  /orders/<id>   one of the caller's orders (404 for anyone else's)
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.models import Order
from orders.serializers import CheckoutSerializer, OrderSerializer
from orders.services.checkout import place_order


def _orders_for(user):
    return Order.objects.filter(user=user).prefetch_related("items")


class OrderListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OrderSerializer(many=True)}, description="Order history")
    def get(self, request):
        orders = _orders_for(request.user).order_by("-created_at")
        return Response({"data": OrderSerializer(orders, many=True).data})

    @extend_schema(
        request=CheckoutSerializer,
        responses={201: OrderSerializer},
        description="Create an order from the current cart and clear the cart",
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = place_order(user=request.user, shipping=serializer.validated_data)

        return Response(
            {"data": OrderSerializer(order).data, "message": "Order created successfully"},
            status=status.HTTP_201_CREATED,
        )


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OrderSerializer})
    def get(self, request, order_id):
        order = get_object_or_404(_orders_for(request.user), id=order_id)
        return Response({"data": OrderSerializer(order).data})
