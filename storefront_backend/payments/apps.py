# payments/apps.py

"""
PAYMENTS APP CONFIG

Stripe card payments:
- payment intent creation for an order
- signed webhook confirming the charge outcome (sole source of "paid")
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
