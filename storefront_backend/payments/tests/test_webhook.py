from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from orders.models import Order
from payments.models import PaymentEvent

from .helpers import encode, intent_event, refund_event, signed_headers

User = get_user_model()


def _order(user, **extra):
    return Order.objects.create(
        user=user,
        total_amount=Decimal("32.25"),
        shipping_address="1 Harbour Street",
        city="Lisbon",
        postal_code="1100-001",
        country="Portugal",
        phone="+351 910 000 000",
        **extra,
    )


class StripeWebhookTests(TestCase):
    """
    GUARANTEES:
    - Only a correctly signed body is processed (400 otherwise)
    - payment_intent.succeeded marks exactly the matching order paid/processing
    - Redelivered events are acknowledged without reprocessing
    - failed never downgrades paid; charge.refunded moves paid -> refunded
    - Unknown orders / event types are acknowledged with 200
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("payments:stripe-webhook")

        self.buyer = User.objects.create_user(email="buyer@example.com", password="Strong-Pass-1")
        self.order = _order(self.buyer, payment_intent_id="pi_match")
        self.bystander = _order(self.buyer, payment_intent_id="pi_other")

    def _post(self, event, **header_kwargs):
        body = encode(event)
        return self.client.post(
            self.url,
            data=body,
            content_type="application/json",
            **signed_headers(body, **header_kwargs),
        )

    # =====================================================
    # SIGNATURE
    # =====================================================

    def test_invalid_signature_is_rejected(self):
        body = encode(
            intent_event("evt_bad", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id)
        )

        res = self.client.post(
            self.url,
            data=body,
            content_type="application/json",
            **signed_headers(body, secret="whsec_wrong"),
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "INVALID_SIGNATURE")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)
        self.assertFalse(PaymentEvent.objects.exists())

    def test_missing_signature_is_rejected(self):
        body = encode(intent_event("evt_none", "payment_intent.succeeded", intent_id="pi_match"))

        res = self.client.post(self.url, data=body, content_type="application/json")

        self.assertEqual(res.status_code, 400)

    def test_stale_timestamp_is_rejected(self):
        event = intent_event("evt_old", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id)

        res = self._post(event, timestamp=1_000_000)

        self.assertEqual(res.status_code, 400)

    def test_tampered_body_is_rejected(self):
        body = encode(intent_event("evt_t", "payment_intent.succeeded", intent_id="pi_other"))
        headers = signed_headers(body)
        tampered = encode(
            intent_event("evt_t", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id)
        )

        res = self.client.post(self.url, data=tampered, content_type="application/json", **headers)

        self.assertEqual(res.status_code, 400)

    # =====================================================
    # SUCCEEDED
    # =====================================================

    def test_succeeded_marks_only_matching_order_paid(self):
        res = self._post(
            intent_event("evt_1", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id, amount=3225)
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"received": True, "detail": "paid"})

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.status, Order.STATUS_PROCESSING)
        self.assertIsNotNone(self.order.paid_at)

        self.bystander.refresh_from_db()
        self.assertEqual(self.bystander.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(self.bystander.status, Order.STATUS_PENDING)

        record = PaymentEvent.objects.get(event_id="evt_1")
        self.assertEqual(record.order, self.order)
        self.assertEqual(record.outcome, "paid")

    def test_succeeded_falls_back_to_payment_intent_id(self):
        res = self._post(intent_event("evt_2", "payment_intent.succeeded", intent_id="pi_match"))

        self.assertEqual(res.status_code, 200)
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)

    def test_redelivered_event_is_not_reprocessed(self):
        event = intent_event("evt_dup", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id)

        first = self._post(event)
        self.order.refresh_from_db()
        paid_at = self.order.paid_at

        second = self._post(event)

        self.assertEqual(first.data["detail"], "paid")
        self.assertEqual(second.status_code, 200)
        self.assertEqual(second.data["detail"], "duplicate")
        self.assertEqual(PaymentEvent.objects.filter(event_id="evt_dup").count(), 1)

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.status, Order.STATUS_PROCESSING)
        self.assertEqual(self.order.paid_at, paid_at)

    def test_second_success_event_for_paid_order_is_noop(self):
        self._post(intent_event("evt_a", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id))
        self.order.refresh_from_db()
        self.order.transition_to(Order.STATUS_SHIPPED)

        res = self._post(intent_event("evt_b", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id))

        self.assertEqual(res.data["detail"], "unchanged")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_SHIPPED)

    # =====================================================
    # FAILED / REFUNDED
    # =====================================================

    def test_payment_failed_marks_failed(self):
        res = self._post(
            intent_event("evt_f", "payment_intent.payment_failed", intent_id="pi_match", order_id=self.order.id)
        )

        self.assertEqual(res.data["detail"], "failed")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_FAILED)
        self.assertEqual(self.order.status, Order.STATUS_PENDING)

    def test_payment_failed_never_downgrades_paid(self):
        self._post(intent_event("evt_p", "payment_intent.succeeded", intent_id="pi_match", order_id=self.order.id))

        res = self._post(
            intent_event("evt_f2", "payment_intent.payment_failed", intent_id="pi_match", order_id=self.order.id)
        )

        self.assertEqual(res.data["detail"], "unchanged")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)

    def test_charge_refunded_moves_paid_to_refunded(self):
        self.order.mark_paid()

        res = self._post(refund_event("evt_r", intent_id="pi_match"))

        self.assertEqual(res.data["detail"], "refunded")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_REFUNDED)

    def test_partial_refund_leaves_order_paid(self):
        self.order.mark_paid()

        res = self._post(
            refund_event("evt_partial", intent_id="pi_match", amount=1000, amount_refunded=100, refunded=False)
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["detail"], "unchanged")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(PaymentEvent.objects.get(event_id="evt_partial").outcome, "unchanged")

    def test_refund_of_unpaid_order_is_acknowledged_and_ignored(self):
        res = self._post(refund_event("evt_r2", intent_id="pi_match"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["detail"], "invalid_transition")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)

    # =====================================================
    # ACKNOWLEDGED NO-OPS
    # =====================================================

    def test_unknown_order_is_acknowledged(self):
        res = self._post(intent_event("evt_u", "payment_intent.succeeded", intent_id="pi_nowhere"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["detail"], "order_not_found")
        self.assertEqual(Order.objects.filter(payment_status=Order.PAYMENT_PAID).count(), 0)

    def test_unhandled_event_type_is_ignored(self):
        res = self._post(intent_event("evt_x", "payment_intent.created", intent_id="pi_match", order_id=self.order.id))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["detail"], "ignored")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)
