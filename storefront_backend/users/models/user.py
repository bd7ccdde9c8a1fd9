"""
PATH: users/models/user.py

CUSTOM USER MODEL (the storefront Profile)

- Email is the canonical identity and login field.
- full_name is the display name shown in the storefront and admin console.
- role is either "user" (shopper) or "admin" (back-office access to /api/admin/*).
- Django admin access (is_staff) is kept in step with the admin role.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_CHOICES, ROLE_USER


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email=None, password=None, **extra_fields):
        email = (email or "").strip()
        if not email:
            raise ValueError("Users must have an email address")

        extra_fields["email"] = self.normalize_email(email)
        extra_fields.setdefault("role", ROLE_USER)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("is_staff", extra_fields["role"] == ROLE_ADMIN)

        user = self.model(**extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)

    full_name = models.CharField(max_length=150, blank=True, default="")
    avatar_url = models.URLField(max_length=500, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()

        if not self.email:
            raise ValidationError("User must have an email")

        self.full_name = (self.full_name or "").strip()

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def set_role(self, role: str) -> None:
        """Change the storefront role and keep Django admin access in step."""
        if role not in dict(ROLE_CHOICES):
            raise ValueError(f"Invalid role: {role}")

        self.role = role
        self.is_staff = role == ROLE_ADMIN or self.is_superuser

    def __str__(self):
        return f"{self.email} ({self.role})"
