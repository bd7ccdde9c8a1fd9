# payments/admin.py

from django.contrib import admin

from payments.models import PaymentEvent


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = ("event_id", "event_type", "order", "outcome", "received_at")
    list_filter = ("event_type", "outcome")
    search_fields = ("event_id", "payment_intent_id", "order__order_no")
    readonly_fields = (
        "event_id",
        "event_type",
        "order",
        "payment_intent_id",
        "outcome",
        "payload",
        "received_at",
    )
