# cart/views.py

"""
CART API VIEWS

- GET    /cart                  items + summary (count, total)
- DELETE /cart                  clear
- POST   /cart/items            add (increments an existing line)
- PUT    /cart/items/<id>       set quantity (< 1 removes the line)
- DELETE /cart/items/<id>       remove one line

Every query is scoped to request.user.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from cart import services
from cart.serializers import (
    AddCartItemSerializer,
    CartItemSerializer,
    CartSummarySerializer,
    UpdateCartItemSerializer,
)


class CartView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: CartItemSerializer(many=True)}, description="Current user's cart")
    def get(self, request):
        items = list(services.cart_items_for(request.user))
        summary = services.summarize(items)

        return Response(
            {
                "data": CartItemSerializer(items, many=True).data,
                "summary": CartSummarySerializer(summary).data,
            }
        )

    @extend_schema(responses={200: dict}, description="Remove every line from the cart")
    def delete(self, request):
        services.clear_cart(user=request.user)
        return Response({"message": "Cart cleared"}, status=status.HTTP_200_OK)


class CartItemsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=AddCartItemSerializer,
        responses={200: CartItemSerializer, 201: CartItemSerializer},
        description="Add a product to the cart (increments quantity if already present)",
    )
    def post(self, request):
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item, created = services.add_item(
            user=request.user,
            product_id=serializer.validated_data["product_id"],
            quantity=serializer.validated_data["quantity"],
        )

        return Response(
            {
                "data": CartItemSerializer(item).data,
                "message": "Added to cart" if created else "Cart updated",
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=UpdateCartItemSerializer,
        responses={200: CartItemSerializer},
        description="Set the quantity of a cart line; a quantity below 1 removes it",
    )
    def put(self, request, item_id):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = services.set_quantity(
            user=request.user,
            item_id=item_id,
            quantity=serializer.validated_data["quantity"],
        )

        if item is None:
            return Response({"data": None, "message": "Item removed from cart"})

        return Response({"data": CartItemSerializer(item).data, "message": "Cart item updated"})

    @extend_schema(responses={200: dict}, description="Remove a cart line")
    def delete(self, request, item_id):
        services.remove_item(user=request.user, item_id=item_id)
        return Response({"message": "Item removed from cart"})
