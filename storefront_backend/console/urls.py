# console/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from console.views import (
    AnalyticsView,
    CategoryAdminViewSet,
    OrderAdminViewSet,
    ProductAdminViewSet,
    UserAdminViewSet,
)

app_name = "console"

router = SimpleRouter(trailing_slash=False)
router.register(r"admin/products", ProductAdminViewSet, basename="admin-products")
router.register(r"admin/categories", CategoryAdminViewSet, basename="admin-categories")
router.register(r"admin/orders", OrderAdminViewSet, basename="admin-orders")
router.register(r"admin/users", UserAdminViewSet, basename="admin-users")

urlpatterns = [
    path("admin/analytics", AnalyticsView.as_view(), name="admin-analytics"),
    path("", include(router.urls)),
]
