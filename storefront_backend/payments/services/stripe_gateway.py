# payments/services/stripe_gateway.py

"""
STRIPE GATEWAY CLIENT

Thin HTTP client for the two Stripe touchpoints the storefront needs:
- PaymentIntent create / retrieve (form-encoded REST calls, Bearer secret key)
- Webhook signature verification (Stripe-Signature: t=<ts>,v1=<hmac>)

Card data never reaches this backend; the browser confirms the intent with
Stripe directly using the client_secret.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from django.conf import settings

from payments.exceptions import PaymentConfigurationError, PaymentProviderError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.stripe.com/v1"
SIGNATURE_SCHEME = "v1"


def _stripe_cfg() -> dict:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = payments.get("STRIPE") if isinstance(payments, dict) else None
    return cfg if isinstance(cfg, dict) else {}


def _get_secret_key() -> str:
    sk = (_stripe_cfg().get("SECRET_KEY") or "").strip()
    if not sk:
        raise PaymentConfigurationError(
            "STRIPE SECRET_KEY is not configured. "
            "Expected settings.PAYMENTS['STRIPE']['SECRET_KEY'] (env STRIPE_SECRET_KEY)."
        )
    return sk


def _get_webhook_secret() -> str:
    secret = (_stripe_cfg().get("WEBHOOK_SECRET") or "").strip()
    if not secret:
        raise PaymentConfigurationError(
            "STRIPE WEBHOOK_SECRET is not configured (env STRIPE_WEBHOOK_SECRET)."
        )
    return secret


def _api_base() -> str:
    return (_stripe_cfg().get("API_BASE") or DEFAULT_API_BASE).rstrip("/")


def payment_currency() -> str:
    return (_stripe_cfg().get("CURRENCY") or "usd").strip().lower()


def to_minor_units(amount) -> int:
    """Decimal major units (12.34) -> integer minor units (1234), ROUND_HALF_UP."""
    try:
        major = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError("amount must be a valid Decimal") from exc
    minor = (major * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(minor)


def _flatten_params(params: dict, prefix: str = "") -> list[tuple[str, str]]:
    """
    Stripe form encoding: nested dicts become bracketed keys,
    e.g. {"metadata": {"order_id": "x"}} -> metadata[order_id]=x
    """
    out: list[tuple[str, str]] = []
    for key, value in params.items():
        full_key = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            out.extend(_flatten_params(value, full_key))
        elif isinstance(value, bool):
            out.append((full_key, "true" if value else "false"))
        else:
            out.append((full_key, str(value)))
    return out


def _request_json(
    method: str,
    path: str,
    *,
    params: dict | None = None,
    idempotency_key: str = "",
    timeout: int = 25,
) -> dict[str, Any]:
    sk = _get_secret_key()
    data = None
    if params is not None:
        data = urlencode(_flatten_params(params)).encode("utf-8")

    headers = {
        "Authorization": f"Bearer {sk}",
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
    }
    if idempotency_key:
        headers["Idempotency-Key"] = idempotency_key

    req = Request(f"{_api_base()}{path}", data=data, headers=headers, method=method)

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        try:
            body = json.loads(e.read().decode("utf-8", errors="replace") or "{}")
        except ValueError:
            body = {}
        message = ((body.get("error") or {}).get("message")) or "Stripe rejected request"
        raise PaymentProviderError(f"Stripe HTTPError: {e.code} {message}") from e
    except URLError as e:
        raise PaymentProviderError(f"Stripe URLError: {e.reason}") from e

    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise PaymentProviderError("Stripe returned non-JSON response") from e

    if not isinstance(parsed, dict):
        raise PaymentProviderError("Stripe returned an unexpected response shape")

    return parsed


def create_payment_intent(
    *,
    amount,
    currency: str,
    metadata: dict | None = None,
    idempotency_key: str = "",
) -> dict:
    params = {
        "amount": to_minor_units(amount),
        "currency": currency,
        "automatic_payment_methods": {"enabled": True},
        "metadata": metadata or {},
    }

    intent = _request_json(
        "POST", "/payment_intents", params=params, idempotency_key=idempotency_key
    )

    if not intent.get("id") or not intent.get("client_secret"):
        raise PaymentProviderError("Stripe payment intent response missing id/client_secret")

    logger.info(
        "Stripe payment intent created",
        extra={"payment_intent_id": intent.get("id"), "amount": intent.get("amount")},
    )
    return intent


def retrieve_payment_intent(payment_intent_id: str) -> dict:
    return _request_json("GET", f"/payment_intents/{quote(str(payment_intent_id), safe='')}")


# ---------------------------------------------------------
# Webhooks
# ---------------------------------------------------------
def _parse_signature_header(header: str) -> tuple[int | None, list[str]]:
    timestamp = None
    signatures: list[str] = []
    for part in (header or "").split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                timestamp = None
        elif key == SIGNATURE_SCHEME and value:
            signatures.append(value)
    return timestamp, signatures


def compute_signature(*, payload: bytes, timestamp: int, secret: str) -> str:
    signed = f"{timestamp}.".encode("utf-8") + (payload or b"")
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def verify_webhook_signature(
    *, raw_body: bytes, signature_header: str | None, now: float | None = None
) -> bool:
    if not signature_header:
        return False

    timestamp, signatures = _parse_signature_header(signature_header)
    if timestamp is None or not signatures:
        return False

    tolerance = int(_stripe_cfg().get("WEBHOOK_TOLERANCE_SECONDS") or 300)
    current = time.time() if now is None else now
    if abs(current - timestamp) > tolerance:
        logger.warning("Stripe webhook timestamp outside tolerance", extra={"timestamp": timestamp})
        return False

    expected = compute_signature(
        payload=raw_body, timestamp=timestamp, secret=_get_webhook_secret()
    )
    return any(hmac.compare_digest(expected, sig) for sig in signatures)


def parse_event(raw_body: bytes) -> dict:
    try:
        event = json.loads((raw_body or b"").decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise ValueError("Webhook body is not valid JSON") from e

    if not isinstance(event, dict) or not event.get("id") or not event.get("type"):
        raise ValueError("Webhook body is not a Stripe event")

    return event
