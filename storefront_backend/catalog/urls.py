# catalog/urls.py

"""
CATALOG URLS (mounted under /api/)

Fixed segments are declared before the <uuid:pk> detail route so
"categories" / "search" never resolve as ids.
"""

from django.urls import path

from catalog.views import (
    CategoryListView,
    CategoryProductsView,
    ProductDetailView,
    ProductListView,
    ProductSearchView,
)

app_name = "catalog"

urlpatterns = [
    path("products", ProductListView.as_view(), name="product-list"),
    path("products/categories", CategoryListView.as_view(), name="category-list"),
    path("products/search", ProductSearchView.as_view(), name="product-search"),
    path(
        "products/category/<str:category_ref>",
        CategoryProductsView.as_view(),
        name="category-products",
    ),
    path("products/<uuid:pk>", ProductDetailView.as_view(), name="product-detail"),
]
