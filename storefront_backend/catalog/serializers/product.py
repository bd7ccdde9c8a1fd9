# catalog/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: read shape for the public catalog, cart lines and admin lists
  (category nested so the client never needs a second request).
- ProductWriteSerializer: admin console create/update input. Category is given
  as `category_id`; the response is rendered with ProductSerializer.
"""

from decimal import Decimal

from rest_framework import serializers

from catalog.models import Category, Product

from .category import CategorySerializer


class ProductSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "image_url",
            "ingredients",
            "alcohol_content",
            "volume_ml",
            "is_featured",
            "is_available",
            "category",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255, allow_blank=False, trim_whitespace=True)
    description = serializers.CharField(allow_blank=False, trim_whitespace=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"))
    stock = serializers.IntegerField(min_value=0)
    category_id = serializers.PrimaryKeyRelatedField(
        source="category",
        pk_field=serializers.UUIDField(),
        queryset=Category.objects.all(),
    )
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    ingredients = serializers.ListField(
        child=serializers.CharField(max_length=120),
        required=False,
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "category_id",
            "image_url",
            "ingredients",
            "alcohol_content",
            "volume_ml",
            "is_featured",
            "is_available",
        ]
        read_only_fields = ["id"]

    def to_representation(self, instance):
        return ProductSerializer(instance, context=self.context).data
