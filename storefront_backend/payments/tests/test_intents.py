from decimal import Decimal
from unittest import mock
from urllib.parse import parse_qs

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from orders.models import Order
from payments.exceptions import PaymentProviderError
from payments.services import stripe_gateway

User = get_user_model()

CREATE_INTENT = "payments.services.stripe_gateway.create_payment_intent"
RETRIEVE_INTENT = "payments.services.stripe_gateway.retrieve_payment_intent"


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


class PaymentIntentAPITests(TestCase):
    """
    GUARANTEES:
    - Amount is derived from the order total (minor units), never from the client
    - Only the owner can start payment; paid / cancelled orders are refused
    - An open intent with the same amount is reused
    - Gateway failures surface as a 500 without leaking provider text
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("payments:payment-intent")

        self.buyer = User.objects.create_user(email="buyer@example.com", password="Strong-Pass-1")
        self.other = User.objects.create_user(email="other@example.com", password="Strong-Pass-1")
        self.order = _order(self.buyer)

        self.client.force_authenticate(user=self.buyer)

    @mock.patch(CREATE_INTENT)
    def test_creates_intent_and_stores_id(self, create):
        create.return_value = {"id": "pi_new", "client_secret": "pi_new_secret_x", "currency": "usd"}

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["data"]["client_secret"], "pi_new_secret_x")
        self.assertEqual(res.data["data"]["payment_intent_id"], "pi_new")
        self.assertEqual(res.data["data"]["amount"], 3225)
        self.assertEqual(res.data["data"]["currency"], "usd")

        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs["amount"], Decimal("32.25"))
        self.assertEqual(kwargs["currency"], "usd")
        self.assertEqual(kwargs["metadata"]["order_id"], str(self.order.id))
        self.assertEqual(kwargs["metadata"]["user_id"], str(self.buyer.id))
        self.assertIn(str(self.order.id), kwargs["idempotency_key"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_intent_id, "pi_new")
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)

    @mock.patch(CREATE_INTENT)
    @mock.patch(RETRIEVE_INTENT)
    def test_reuses_open_intent_with_same_amount(self, retrieve, create):
        self.order.payment_intent_id = "pi_open"
        self.order.save()
        retrieve.return_value = {
            "id": "pi_open",
            "client_secret": "pi_open_secret",
            "status": "requires_payment_method",
            "amount": 3225,
            "currency": "usd",
        }

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["data"]["payment_intent_id"], "pi_open")
        create.assert_not_called()

    @mock.patch(CREATE_INTENT)
    @mock.patch(RETRIEVE_INTENT)
    def test_replaces_intent_when_it_cannot_be_confirmed(self, retrieve, create):
        self.order.payment_intent_id = "pi_dead"
        self.order.save()
        retrieve.return_value = {"id": "pi_dead", "status": "canceled", "amount": 3225}
        create.return_value = {"id": "pi_fresh", "client_secret": "pi_fresh_secret", "currency": "usd"}

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.data["data"]["payment_intent_id"], "pi_fresh")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_intent_id, "pi_fresh")

    @mock.patch(CREATE_INTENT)
    @mock.patch(RETRIEVE_INTENT)
    def test_succeeded_intent_blocks_a_second_charge(self, retrieve, create):
        self.order.payment_intent_id = "pi_paid"
        self.order.save()
        retrieve.return_value = {"id": "pi_paid", "status": "succeeded", "amount": 3225}

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_PAYABLE")
        create.assert_not_called()
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_intent_id, "pi_paid")

    @mock.patch(CREATE_INTENT)
    @mock.patch(RETRIEVE_INTENT)
    def test_processing_intent_blocks_a_second_charge_even_if_amount_differs(self, retrieve, create):
        self.order.payment_intent_id = "pi_busy"
        self.order.save()
        retrieve.return_value = {"id": "pi_busy", "status": "processing", "amount": 1000}

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_PAYABLE")
        create.assert_not_called()

    @mock.patch(CREATE_INTENT)
    @mock.patch(RETRIEVE_INTENT)
    def test_replaces_open_intent_when_amount_changed(self, retrieve, create):
        self.order.payment_intent_id = "pi_stale"
        self.order.save()
        retrieve.return_value = {
            "id": "pi_stale",
            "status": "requires_payment_method",
            "amount": 1000,
            "client_secret": "pi_stale_secret",
        }
        create.return_value = {"id": "pi_fresh", "client_secret": "pi_fresh_secret", "currency": "usd"}

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["data"]["payment_intent_id"], "pi_fresh")

    @mock.patch(CREATE_INTENT)
    def test_other_users_order_is_404(self, create):
        foreign = _order(self.other)

        res = self.client.post(self.url, {"order_id": str(foreign.id)}, format="json")

        self.assertEqual(res.status_code, 404)
        create.assert_not_called()

    @mock.patch(CREATE_INTENT)
    def test_paid_order_is_not_payable(self, create):
        self.order.mark_paid()

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "ORDER_NOT_PAYABLE")
        create.assert_not_called()

    @mock.patch(CREATE_INTENT)
    def test_cancelled_order_is_not_payable(self, create):
        self.order.transition_to(Order.STATUS_CANCELLED)

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 400)
        create.assert_not_called()

    @mock.patch(CREATE_INTENT)
    def test_provider_error_is_500_without_details(self, create):
        create.side_effect = PaymentProviderError("Stripe HTTPError: 401 Invalid API Key provided")

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data["error"]["code"], "PROVIDER_ERROR")
        self.assertEqual(res.data["error"]["message"], "Internal server error")

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        res = self.client.post(self.url, {"order_id": str(self.order.id)}, format="json")

        self.assertEqual(res.status_code, 401)


class StripeGatewayTests(TestCase):
    def test_to_minor_units_rounds_half_up(self):
        self.assertEqual(stripe_gateway.to_minor_units(Decimal("32.25")), 3225)
        self.assertEqual(stripe_gateway.to_minor_units("10.005"), 1001)
        self.assertEqual(stripe_gateway.to_minor_units(0), 0)

    @mock.patch("payments.services.stripe_gateway.urlopen")
    def test_create_payment_intent_request_shape(self, urlopen):
        urlopen.return_value.__enter__.return_value.read.return_value = (
            b'{"id": "pi_123", "client_secret": "pi_123_secret", "amount": 3225}'
        )

        intent = stripe_gateway.create_payment_intent(
            amount=Decimal("32.25"),
            currency="usd",
            metadata={"order_id": "abc", "user_id": "u1"},
            idempotency_key="order-abc-3225-new",
        )

        self.assertEqual(intent["id"], "pi_123")

        request = urlopen.call_args.args[0]
        self.assertEqual(request.get_method(), "POST")
        self.assertTrue(request.full_url.endswith("/payment_intents"))
        self.assertEqual(request.get_header("Authorization"), "Bearer sk_test_storefront")
        self.assertEqual(request.get_header("Idempotency-key"), "order-abc-3225-new")

        form = parse_qs(request.data.decode("utf-8"))
        self.assertEqual(form["amount"], ["3225"])
        self.assertEqual(form["currency"], ["usd"])
        self.assertEqual(form["metadata[order_id]"], ["abc"])
        self.assertEqual(form["automatic_payment_methods[enabled]"], ["true"])

    def test_signature_verification(self):
        body = b'{"id":"evt_1","type":"payment_intent.succeeded"}'
        sig = stripe_gateway.compute_signature(
            payload=body, timestamp=1_700_000_000, secret="whsec_test_storefront"
        )

        self.assertTrue(
            stripe_gateway.verify_webhook_signature(
                raw_body=body,
                signature_header=f"t=1700000000,v1=deadbeef,v1={sig}",
                now=1_700_000_100,
            )
        )
        self.assertFalse(
            stripe_gateway.verify_webhook_signature(
                raw_body=body,
                signature_header=f"t=1700000000,v1={sig}",
                now=1_700_000_000 + 301,
            )
        )
        self.assertFalse(
            stripe_gateway.verify_webhook_signature(
                raw_body=body, signature_header="garbage", now=1_700_000_000
            )
        )
