import json
import time

from payments.services.stripe_gateway import compute_signature

WEBHOOK_SECRET = "whsec_test_storefront"


def signed_headers(body: bytes, *, timestamp=None, secret=WEBHOOK_SECRET) -> dict:
    ts = int(time.time()) if timestamp is None else timestamp
    sig = compute_signature(payload=body, timestamp=ts, secret=secret)
    return {"HTTP_STRIPE_SIGNATURE": f"t={ts},v1={sig}"}


def intent_event(event_id, event_type, *, intent_id, order_id=None, amount=0):
    metadata = {"order_id": str(order_id)} if order_id else {}
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": intent_id,
                "object": "payment_intent",
                "amount": amount,
                "amount_received": amount,
                "currency": "usd",
                "metadata": metadata,
            }
        },
    }


def refund_event(event_id, *, intent_id, amount=3225, amount_refunded=None, refunded=True):
    if amount_refunded is None:
        amount_refunded = amount if refunded else 0
    return {
        "id": event_id,
        "object": "event",
        "type": "charge.refunded",
        "data": {
            "object": {
                "id": "ch_test_refund",
                "object": "charge",
                "payment_intent": intent_id,
                "amount": amount,
                "amount_refunded": amount_refunded,
                "refunded": refunded,
            }
        },
    }


def encode(event: dict) -> bytes:
    return json.dumps(event, separators=(",", ":")).encode("utf-8")
