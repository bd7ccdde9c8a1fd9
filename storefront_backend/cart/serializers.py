"""
PATH: cart/serializers.py

CART SERIALIZERS

- CartItemSerializer: cart line with the nested product and live line total.
- AddCartItemSerializer / UpdateCartItemSerializer: request input.
"""

from rest_framework import serializers

from cart.models import MAX_LINE_QUANTITY, CartItem
from catalog.serializers import ProductSerializer


class CartItemSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)
    product_id = serializers.UUIDField(source="product.id", read_only=True)

    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product",
            "quantity",
            "unit_price",
            "line_total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AddCartItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    # Zero or negative is allowed here: it means "remove this line".
    quantity = serializers.IntegerField(max_value=MAX_LINE_QUANTITY)


class CartSummarySerializer(serializers.Serializer):
    item_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
