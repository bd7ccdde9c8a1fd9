# console/serializers.py

"""
ADMIN CONSOLE SERIALIZERS

Read shapes for the back-office screens. Product / category writes reuse the
catalog serializers; role changes reuse users.RoleUpdateSerializer.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from orders.models import Order
from orders.serializers import OrderSerializer

User = get_user_model()


class AdminOrderSerializer(OrderSerializer):
    customer_email = serializers.EmailField(source="user.email", read_only=True)
    customer_name = serializers.CharField(source="user.full_name", read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["customer_email", "customer_name"]
        read_only_fields = fields


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class AdminUserSerializer(serializers.ModelSerializer):
    order_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "avatar_url",
            "role",
            "is_active",
            "order_count",
            "created_at",
        ]
        read_only_fields = fields


class TopProductSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(allow_null=True)
    product_name = serializers.CharField()
    quantity_sold = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class AnalyticsSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    total_users = serializers.IntegerField()
    total_products = serializers.IntegerField()
    recent_orders = AdminOrderSerializer(many=True)
    top_products = TopProductSerializer(many=True)
