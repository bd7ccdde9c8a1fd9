# catalog/views/catalog.py

"""
PUBLIC CATALOG VIEWS (AllowAny)

- GET /products                      available products (filter + sort + page/limit)
- GET /products/<id>                 product detail with nested category
- GET /products/categories           all categories by name
- GET /products/search?q=            name search, ordered by name
- GET /products/category/<id|slug>   available products in one category

Read-only; admin writes live under /api/admin/products.
"""

from __future__ import annotations

import uuid

from django.db.models import Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, serializers
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from catalog.filters import ProductFilter
from catalog.models import Category, Product
from catalog.serializers import CategorySerializer, ProductSerializer


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(allow_blank=False, trim_whitespace=True, max_length=120)


class _PublicCatalogView:
    permission_classes = [AllowAny]

    def available_products(self):
        return Product.objects.available().select_related("category")


class ProductListView(_PublicCatalogView, generics.ListAPIView):
    serializer_class = ProductSerializer
    filterset_class = ProductFilter

    def get_queryset(self):
        return self.available_products()


class ProductDetailView(_PublicCatalogView, generics.RetrieveAPIView):
    serializer_class = ProductSerializer
    queryset = Product.objects.select_related("category")

    def retrieve(self, request, *args, **kwargs):
        return Response({"data": self.get_serializer(self.get_object()).data})


class CategoryListView(_PublicCatalogView, generics.ListAPIView):
    serializer_class = CategorySerializer
    queryset = Category.objects.all().order_by("name")
    pagination_class = None

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({"data": serializer.data})


class ProductSearchView(_PublicCatalogView, generics.ListAPIView):
    serializer_class = ProductSerializer

    @extend_schema(
        parameters=[OpenApiParameter("q", str, required=True, description="Name contains (case-insensitive)")]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    def get_queryset(self):
        query = SearchQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)

        return self.available_products().filter(
            name__icontains=query.validated_data["q"]
        ).order_by("name")


class CategoryProductsView(_PublicCatalogView, generics.ListAPIView):
    serializer_class = ProductSerializer

    def get_category(self) -> Category:
        ref = (self.kwargs.get("category_ref") or "").strip()
        try:
            lookup = Q(id=uuid.UUID(ref)) | Q(slug=ref)
        except ValueError:
            lookup = Q(slug=ref)
        return get_object_or_404(Category, lookup)

    def get_queryset(self):
        return self.available_products().filter(category=self.get_category())
