# payments/services/intents.py

"""
PAYMENT INTENT SERVICE

Creates (or reuses) the Stripe PaymentIntent for one of the caller's orders.
The amount always comes from Order.total_amount, never from the client.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.shortcuts import get_object_or_404

from orders.models import Order
from payments.exceptions import OrderNotPayableError
from payments.services import stripe_gateway

logger = logging.getLogger(__name__)

# Intent states in which the browser can still confirm the same intent
REUSABLE_INTENT_STATUSES = {
    "requires_payment_method",
    "requires_confirmation",
    "requires_action",
}

# Intent already charged or being charged; the webhook settles the order
SETTLING_INTENT_STATUSES = {"processing", "requires_capture", "succeeded"}


def _reusable_intent(order: Order, amount_minor: int) -> dict | None:
    """
    Returns the stored intent when the browser can still confirm it,
    None when a fresh intent is needed (canceled, or the amount changed).
    """
    if not order.payment_intent_id:
        return None

    intent = stripe_gateway.retrieve_payment_intent(order.payment_intent_id)
    intent_status = intent.get("status")

    if intent_status in SETTLING_INTENT_STATUSES:
        logger.warning(
            "Payment already in progress for order",
            extra={
                "order_id": str(order.id),
                "payment_intent_id": order.payment_intent_id,
                "intent_status": intent_status,
            },
        )
        raise OrderNotPayableError(
            f"Payment for order {order.order_no} is already {intent_status}"
        )

    if intent_status not in REUSABLE_INTENT_STATUSES:
        return None
    if int(intent.get("amount") or 0) != amount_minor:
        return None
    if not intent.get("client_secret"):
        return None

    return intent


@transaction.atomic
def start_payment(*, user, order_id) -> dict:
    order = get_object_or_404(Order.objects.select_for_update(), id=order_id, user=user)

    if not order.is_payable:
        raise OrderNotPayableError(
            f"Order {order.order_no} cannot be paid "
            f"(status={order.status}, payment_status={order.payment_status})"
        )

    currency = stripe_gateway.payment_currency()
    amount_minor = stripe_gateway.to_minor_units(order.total_amount)

    intent = _reusable_intent(order, amount_minor)

    if intent is None:
        intent = stripe_gateway.create_payment_intent(
            amount=order.total_amount,
            currency=currency,
            metadata={
                "order_id": str(order.id),
                "order_no": order.order_no,
                "user_id": str(user.id),
            },
            idempotency_key=f"order-{order.id}-{amount_minor}-{order.payment_intent_id or 'new'}",
        )

        order.payment_intent_id = intent["id"]
        order.save(update_fields=["payment_intent_id", "updated_at"])
    else:
        logger.info(
            "Reusing open payment intent",
            extra={"order_id": str(order.id), "payment_intent_id": intent["id"]},
        )

    return {
        "order_id": order.id,
        "client_secret": intent["client_secret"],
        "payment_intent_id": intent["id"],
        "amount": amount_minor,
        "currency": intent.get("currency") or currency,
    }
