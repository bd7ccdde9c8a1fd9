from .category import CategorySerializer
from .product import ProductSerializer, ProductWriteSerializer

__all__ = ["CategorySerializer", "ProductSerializer", "ProductWriteSerializer"]
