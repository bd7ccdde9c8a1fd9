# payments/services/webhooks.py

"""
STRIPE WEBHOOK PROCESSING

Runs after the signature has been verified.

Idempotency:
- every event id is recorded once in PaymentEvent; redeliveries are skipped
- Order payment transitions are no-ops when re-applied
- the matched order is locked with select_for_update

Only the order referenced by the event is ever touched.
"""

from __future__ import annotations

import logging
import uuid

from django.db import transaction

from orders.exceptions import InvalidOrderTransition
from orders.models import Order
from payments.models import PaymentEvent

logger = logging.getLogger(__name__)

EVENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_INTENT_FAILED = "payment_intent.payment_failed"
EVENT_CHARGE_REFUNDED = "charge.refunded"

HANDLED_EVENTS = {EVENT_INTENT_SUCCEEDED, EVENT_INTENT_FAILED, EVENT_CHARGE_REFUNDED}

OUTCOME_DUPLICATE = "duplicate"
OUTCOME_IGNORED = "ignored"
OUTCOME_ORDER_NOT_FOUND = "order_not_found"
OUTCOME_INVALID_TRANSITION = "invalid_transition"
OUTCOME_PAID = "paid"
OUTCOME_FAILED = "failed"
OUTCOME_REFUNDED = "refunded"
OUTCOME_UNCHANGED = "unchanged"


def _event_object(event: dict) -> dict:
    obj = (event.get("data") or {}).get("object")
    return obj if isinstance(obj, dict) else {}


def _intent_id_for(event_type: str, obj: dict) -> str:
    # Charges point back at their intent; intents carry their own id
    if event_type == EVENT_CHARGE_REFUNDED:
        return str(obj.get("payment_intent") or "").strip()
    return str(obj.get("id") or "").strip()


def _find_order(*, obj: dict, intent_id: str) -> Order | None:
    orders = Order.objects.select_for_update()

    raw_order_id = str((obj.get("metadata") or {}).get("order_id") or "").strip()
    if raw_order_id:
        try:
            order = orders.filter(id=uuid.UUID(raw_order_id)).first()
        except ValueError:
            order = None
        if order is not None:
            return order

    if intent_id:
        return orders.filter(payment_intent_id=intent_id).first()

    return None


def _apply(event_type: str, order: Order, obj: dict) -> str:
    if event_type == EVENT_INTENT_SUCCEEDED:
        return OUTCOME_PAID if order.mark_paid() else OUTCOME_UNCHANGED
    if event_type == EVENT_INTENT_FAILED:
        return OUTCOME_FAILED if order.mark_payment_failed() else OUTCOME_UNCHANGED
    if event_type == EVENT_CHARGE_REFUNDED:
        # Partial refunds also emit charge.refunded with refunded=false
        if obj.get("refunded") is not True:
            return OUTCOME_UNCHANGED
        return OUTCOME_REFUNDED if order.mark_refunded() else OUTCOME_UNCHANGED
    return OUTCOME_IGNORED


@transaction.atomic
def handle_event(event: dict) -> str:
    """
    Apply one verified Stripe event. Returns a short outcome string.
    """
    event_id = str(event.get("id") or "").strip()
    event_type = str(event.get("type") or "").strip()
    obj = _event_object(event)
    intent_id = _intent_id_for(event_type, obj)

    record, created = PaymentEvent.objects.select_for_update().get_or_create(
        event_id=event_id,
        defaults={
            "event_type": event_type,
            "payment_intent_id": intent_id,
            "payload": event,
        },
    )

    if not created:
        logger.info("Duplicate webhook event ignored", extra={"event_id": event_id})
        return OUTCOME_DUPLICATE

    if event_type not in HANDLED_EVENTS:
        outcome = OUTCOME_IGNORED
        order = None
    else:
        order = _find_order(obj=obj, intent_id=intent_id)

        if order is None:
            logger.warning(
                "Webhook event for unknown order",
                extra={"event_id": event_id, "event_type": event_type, "payment_intent_id": intent_id},
            )
            outcome = OUTCOME_ORDER_NOT_FOUND
        else:
            try:
                outcome = _apply(event_type, order, obj)
            except InvalidOrderTransition as exc:
                logger.warning(
                    "Webhook transition rejected",
                    extra={"event_id": event_id, "order_id": str(order.id), "reason": str(exc)},
                )
                outcome = OUTCOME_INVALID_TRANSITION

    record.order = order
    record.outcome = outcome
    record.save(update_fields=["order", "outcome"])

    logger.info(
        "Webhook event processed",
        extra={
            "event_id": event_id,
            "event_type": event_type,
            "order_id": str(order.id) if order else None,
            "outcome": outcome,
        },
    )
    return outcome
