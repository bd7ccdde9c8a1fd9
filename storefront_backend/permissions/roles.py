# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# A Profile is either a shopper ("user") or a back-office operator ("admin").
ROLE_USER = "user"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_USER, "User"),
    (ROLE_ADMIN, "Admin"),
]

ALL_ROLES = {ROLE_USER, ROLE_ADMIN}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    return get_user_role(user) == ROLE_ADMIN


# =========================================================
# Base Role Permission
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)

    Pair with IsAuthenticated so anonymous callers get 401 rather than 403.
    """

    allowed_roles: set[str] = set()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}
    message = "Admin access required."
