# orders/exceptions.py

"""
ORDER DOMAIN ERRORS

Raised by order models/services; mapped to HTTP by backend.exceptions.
"""

from backend.exceptions import DomainError


class CheckoutError(DomainError):
    """Base checkout exception"""

    code = "CHECKOUT_ERROR"


class EmptyCartError(CheckoutError):
    code = "EMPTY_CART"


class InvalidOrderTransition(DomainError, ValueError):
    """Raised when a status or payment_status change breaks the order state machine."""

    code = "INVALID_TRANSITION"


class ProductUnavailableError(CheckoutError):
    """A cart line points at a product taken off sale after it was added."""

    code = "PRODUCT_UNAVAILABLE"
