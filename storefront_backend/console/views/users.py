# console/views/users.py

"""
ADMIN USER MANAGEMENT

- GET /admin/users              newest first
- GET /admin/users/<id>
- PUT /admin/users/<id>/role    {"role": "user" | "admin"}
"""

import logging

from django.contrib.auth import get_user_model
from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from console.serializers import AdminUserSerializer
from users.serializers import RoleUpdateSerializer

from .base import AdminAPIMixin

User = get_user_model()
logger = logging.getLogger(__name__)


class UserAdminViewSet(
    AdminAPIMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminUserSerializer

    def get_queryset(self):
        return User.objects.annotate(order_count=Count("orders")).order_by("-created_at")

    def retrieve(self, request, *args, **kwargs):
        return Response({"data": self.get_serializer(self.get_object()).data})

    @extend_schema(request=RoleUpdateSerializer, responses={200: AdminUserSerializer})
    @action(detail=True, methods=["put"], url_path="role")
    def set_role(self, request, pk=None):
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = self.get_object()
        previous = user.role
        user.set_role(serializer.validated_data["role"])
        user.save(update_fields=["role", "is_staff", "updated_at"])

        logger.info(
            "User role changed",
            extra={"user_id": str(user.id), "from": previous, "to": user.role, "by": str(request.user.id)},
        )

        return Response({"data": self.get_serializer(user).data, "message": "User role updated"})
