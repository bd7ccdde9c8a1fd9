"""
PATH: orders/serializers.py

ORDER SERIALIZERS

- CheckoutSerializer: shipping input for POST /orders (totals are never accepted)
- OrderSerializer: order + item snapshots for history and admin views
"""

from rest_framework import serializers

from orders.models import Order, OrderItem


class CheckoutSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(max_length=255, allow_blank=False)
    city = serializers.CharField(max_length=120, allow_blank=False)
    postal_code = serializers.CharField(max_length=20, allow_blank=False)
    country = serializers.CharField(max_length=120, allow_blank=False)
    phone = serializers.CharField(max_length=40, allow_blank=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "product_price",
            "quantity",
            "subtotal",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_no",
            "status",
            "payment_status",
            "total_amount",
            "shipping_address",
            "city",
            "postal_code",
            "country",
            "phone",
            "notes",
            "payment_intent_id",
            "paid_at",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
