# backend/exceptions.py

"""
API ERROR NORMALIZATION

Every error leaves the API in one shape:

    {"error": {"code": "...", "message": "...", "fields": {...}?}}

Categories:
- 400 validation (field-level messages under "fields") and domain rule errors
- 401 / 403 auth failures
- 404 not found
- 429 throttled
- 500 provider + unhandled errors (message hidden unless DEBUG)

Domain services raise plain exception classes carrying `http_status` and
`code`; this handler is the only place they become HTTP responses.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "Internal server error"


class DomainError(Exception):
    """
    Base class for business-rule failures raised by services.

    Subclasses set `code` and `http_status`; the message is the exception text.
    """

    code = "DOMAIN_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST


class ProviderError(Exception):
    """An external provider (payment gateway) failed; surfaced as a 500."""

    code = "PROVIDER_ERROR"


_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "NOT_AUTHENTICATED",
    status.HTTP_403_FORBIDDEN: "PERMISSION_DENIED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "UNSUPPORTED_MEDIA_TYPE",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMITED",
}


def error_payload(*, code: str, message: str, fields=None) -> dict:
    body = {"code": code, "message": message}
    if fields is not None:
        body["fields"] = fields
    return {"error": body}


def _server_error(exc, *, code: str) -> Response:
    message = str(exc) if settings.DEBUG else GENERIC_SERVER_MESSAGE
    return Response(
        error_payload(code=code, message=message or GENERIC_SERVER_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def api_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, DomainError):
        return Response(
            error_payload(code=exc.code, message=str(exc)),
            status=exc.http_status,
        )

    if isinstance(exc, ProviderError):
        logger.error(
            "Provider error",
            extra={"view": view_name, "provider_message": str(exc)},
        )
        return _server_error(exc, code=exc.code)

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled API error", extra={"view": view_name})
        return _server_error(exc, code="INTERNAL_ERROR")

    if isinstance(exc, exceptions.ValidationError):
        response.data = error_payload(
            code="VALIDATION_ERROR",
            message="Validation failed",
            fields=response.data,
        )
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = error_payload(
        code=_STATUS_CODES.get(response.status_code, "ERROR"),
        message=str(detail) if detail is not None else "Request failed",
    )
    return response


def route_not_found(request, exception=None):
    """JSON 404 for routes outside the API router (handler404)."""
    return JsonResponse(
        error_payload(code="NOT_FOUND", message="Route not found"),
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request):
    """JSON 500 for errors escaping DRF (handler500)."""
    return JsonResponse(
        error_payload(code="INTERNAL_ERROR", message=GENERIC_SERVER_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
