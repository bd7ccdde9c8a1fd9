import os
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from permissions.roles import ROLE_ADMIN

User = get_user_model()

ADMIN_ENV = {"AUTO_ADMIN_EMAIL": "boss@example.com", "AUTO_ADMIN_PASSWORD": "Shaken-Not-Stirred-7"}


class EnsureAdminCommandTests(TestCase):
    def test_skips_without_env(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("AUTO_ADMIN_EMAIL", None)
            os.environ.pop("AUTO_ADMIN_PASSWORD", None)
            call_command("ensure_admin", stdout=StringIO())

        self.assertFalse(User.objects.exists())

    def test_creates_then_updates_admin(self):
        with mock.patch.dict(os.environ, ADMIN_ENV):
            call_command("ensure_admin", stdout=StringIO())
            call_command("ensure_admin", stdout=StringIO())

        self.assertEqual(User.objects.count(), 1)
        admin = User.objects.get(email="boss@example.com")
        self.assertEqual(admin.role, ROLE_ADMIN)
        self.assertTrue(admin.is_superuser)
        self.assertTrue(admin.check_password("Shaken-Not-Stirred-7"))

    def test_promotes_existing_shopper(self):
        User.objects.create_user(email="boss@example.com", password="old-Password-1")

        with mock.patch.dict(os.environ, ADMIN_ENV):
            call_command("ensure_admin", stdout=StringIO())

        admin = User.objects.get(email="boss@example.com")
        self.assertEqual(admin.role, ROLE_ADMIN)
        self.assertTrue(admin.is_staff)
