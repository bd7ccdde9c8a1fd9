from .analytics import AnalyticsView
from .catalog import CategoryAdminViewSet, ProductAdminViewSet
from .orders import OrderAdminViewSet
from .users import UserAdminViewSet

__all__ = [
    "AnalyticsView",
    "CategoryAdminViewSet",
    "ProductAdminViewSet",
    "OrderAdminViewSet",
    "UserAdminViewSet",
]
