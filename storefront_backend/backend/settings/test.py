# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- In-memory SQLite (fast, isolated)
- Fast password hashing
- Outbound mail captured in django.core.mail.outbox
- Throttles relaxed so suites never trip rate limits
- Fixed Stripe test secrets (webhook tests sign payloads with them)
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, PAYMENTS, REST_FRAMEWORK

DEBUG = False
TESTING = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        "anon": "10000/min",
        "user": "10000/min",
        "auth": "10000/min",
        "webhook": "10000/min",
    },
}

PAYMENTS = {
    "STRIPE": {
        **PAYMENTS["STRIPE"],
        "SECRET_KEY": "sk_test_storefront",
        "PUBLISHABLE_KEY": "pk_test_storefront",
        "WEBHOOK_SECRET": "whsec_test_storefront",
        "CURRENCY": "usd",
    }
}

FRONTEND_BASE_URL = "http://localhost:5173"

LOGGING = {**LOGGING, "root": {"handlers": ["console"], "level": "WARNING"}}
