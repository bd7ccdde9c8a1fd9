# backend/urls.py
"""
PROJECT URLS

All API routes live under /api/ without trailing slashes:
- /api/products...      public catalog
- /api/auth/...         signup / login / refresh / password reset / profile
- /api/cart...          caller's cart
- /api/orders...        checkout + order history
- /api/payments/...     Stripe intent + webhook
- /api/admin/...        admin console (role "admin")

Django's own admin site is mounted at ADMIN_PATH (env configurable) and is
unrelated to /api/admin.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

handler404 = "backend.exceptions.route_not_found"
handler500 = "backend.exceptions.server_error"


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "auth": {"type": "object"},
                "docs": {"type": "object"},
                "modules": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Storefront API is running",
            "auth": {
                "signup": "/api/auth/signup",
                "login": "/api/auth/login",
                "refresh": "/api/auth/refresh",
                "me": "/api/auth/me",
            },
            "docs": {
                "swagger": "/api/docs",
                "schema": "/api/schema",
            },
            "modules": {
                "products": "/api/products",
                "cart": "/api/cart",
                "orders": "/api/orders",
                "payments": "/api/payments/intent",
                "admin": "/api/admin/analytics",
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
            },
        },
        503: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Confirms the app responds and the default DB answers a trivial query.
    """
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError:
        return Response({"status": "degraded", "db": "down"}, status=503)

    return Response({"status": "ok", "db": "ok"})


# ------------------ ADMIN PATH (HARDENED) ------------------
# Keep the trailing slash; set something non-obvious in production.
ADMIN_PATH = getattr(settings, "ADMIN_PATH", "admin/")
if not ADMIN_PATH.endswith("/"):
    ADMIN_PATH = f"{ADMIN_PATH}/"


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema", SpectacularAPIView.as_view(), name="schema"),
    path("docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Modules (each urls.py carries its own prefix)
    path("", include("users.urls")),
    path("", include("catalog.urls")),
    path("", include("cart.urls")),
    path("", include("orders.urls")),
    path("", include("payments.urls")),
    path("", include("console.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    # Root convenience: visiting / takes you to Swagger docs
    path("", RedirectView.as_view(url="/api/docs", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
