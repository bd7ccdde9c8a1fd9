from .catalog import (
    CategoryListView,
    CategoryProductsView,
    ProductDetailView,
    ProductListView,
    ProductSearchView,
)

__all__ = [
    "CategoryListView",
    "CategoryProductsView",
    "ProductDetailView",
    "ProductListView",
    "ProductSearchView",
]
