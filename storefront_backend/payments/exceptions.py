# payments/exceptions.py

"""
PAYMENT SERVICE ERRORS
"""

from backend.exceptions import DomainError, ProviderError


class PaymentError(DomainError):
    """Base exception for payment rule failures."""

    code = "PAYMENT_ERROR"


class OrderNotPayableError(PaymentError):
    """Order is already paid, refunded or cancelled."""

    code = "ORDER_NOT_PAYABLE"


class PaymentProviderError(ProviderError):
    """Stripe rejected the request or could not be reached."""


class PaymentConfigurationError(PaymentProviderError):
    """Stripe keys are missing from settings.PAYMENTS["STRIPE"]."""


class WebhookSignatureError(PaymentError):
    """Stripe-Signature header missing, stale or not matching the raw body."""

    code = "INVALID_SIGNATURE"
