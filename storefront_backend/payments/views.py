# payments/views.py

"""
PAYMENT API VIEWS

- POST /payments/intent    (bearer) start or resume payment for one of the caller's orders
- POST /payments/webhook   (Stripe-Signature) gateway callback; the only path that marks paid
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from payments.exceptions import WebhookSignatureError
from payments.serializers import (
    PaymentIntentRequestSerializer,
    PaymentIntentSerializer,
    WebhookAckSerializer,
)
from payments.services import stripe_gateway
from payments.services.intents import start_payment
from payments.services.webhooks import handle_event

logger = logging.getLogger(__name__)


class PaymentIntentView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=PaymentIntentRequestSerializer,
        responses={200: PaymentIntentSerializer},
        description="Create (or reuse) the Stripe PaymentIntent for an unpaid order",
    )
    def post(self, request):
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        intent = start_payment(user=request.user, order_id=serializer.validated_data["order_id"])

        return Response({"data": PaymentIntentSerializer(intent).data}, status=status.HTTP_200_OK)


class StripeWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "webhook"

    @extend_schema(
        request=None,
        responses={200: WebhookAckSerializer},
        parameters=[OpenApiParameter("Stripe-Signature", str, OpenApiParameter.HEADER, required=True)],
        description="Stripe event callback (signature verified against the raw body)",
    )
    def post(self, request, *args, **kwargs):
        # Signature covers the exact bytes; read before any parser touches the stream
        raw_body = request.body or b""
        signature = request.headers.get("Stripe-Signature")

        if not stripe_gateway.verify_webhook_signature(raw_body=raw_body, signature_header=signature):
            logger.warning("Invalid Stripe webhook signature")
            raise WebhookSignatureError("Invalid signature")

        try:
            event = stripe_gateway.parse_event(raw_body)
        except ValueError as exc:
            logger.warning("Malformed Stripe webhook body", extra={"reason": str(exc)})
            outcome = "malformed"
        else:
            outcome = handle_event(event)

        return Response({"received": True, "detail": outcome}, status=status.HTTP_200_OK)
