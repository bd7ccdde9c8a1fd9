# console/views/catalog.py

"""
ADMIN CATALOG MANAGEMENT

- /admin/products[/<id>]     every product, including unavailable ones
- /admin/categories[/<id>]
"""

import logging

from rest_framework import viewsets

from catalog.filters import ProductFilter
from catalog.models import Category, Product
from catalog.serializers import CategorySerializer, ProductSerializer, ProductWriteSerializer

from .base import AdminCRUDMixin

logger = logging.getLogger(__name__)


class ProductAdminViewSet(AdminCRUDMixin, viewsets.ModelViewSet):
    queryset = Product.objects.select_related("category").order_by("-created_at")
    filterset_class = ProductFilter
    object_label = "Product"

    def get_serializer_class(self):
        if self.action in {"create", "update", "partial_update"}:
            return ProductWriteSerializer
        return ProductSerializer

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info("Product created", extra={"product_id": str(product.id), "by": str(self.request.user.id)})

    def perform_update(self, serializer):
        product = serializer.save()
        logger.info("Product updated", extra={"product_id": str(product.id), "by": str(self.request.user.id)})

    def perform_destroy(self, instance):
        logger.info("Product deleted", extra={"product_id": str(instance.id), "by": str(self.request.user.id)})
        instance.delete()


class CategoryAdminViewSet(AdminCRUDMixin, viewsets.ModelViewSet):
    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    object_label = "Category"
