# payments/urls.py

from django.urls import path

from payments.views import PaymentIntentView, StripeWebhookView

app_name = "payments"

urlpatterns = [
    path("payments/intent", PaymentIntentView.as_view(), name="payment-intent"),
    path("payments/webhook", StripeWebhookView.as_view(), name="stripe-webhook"),
]
