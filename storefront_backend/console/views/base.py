# console/views/base.py

"""
Shared behaviour for every /admin/* endpoint:
- IsAuthenticated + IsAdmin (401 anonymous, 403 non-admin)
- {"data": ..., "message"?} envelopes on single-object responses
- PUT behaves as a partial update
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import IsAdmin


class AdminAPIMixin:
    permission_classes = [IsAuthenticated, IsAdmin]


class AdminCRUDMixin(AdminAPIMixin):
    object_label = "Object"

    def retrieve(self, request, *args, **kwargs):
        return Response({"data": self.get_serializer(self.get_object()).data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return Response(
            {"data": serializer.data, "message": f"{self.object_label} created"},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response({"data": serializer.data, "message": f"{self.object_label} updated"})

    def destroy(self, request, *args, **kwargs):
        self.perform_destroy(self.get_object())
        return Response({"data": None, "message": f"{self.object_label} deleted"})
