# payments/models.py

import uuid

from django.db import models


class PaymentEvent(models.Model):
    """
    Append-only record of processed gateway webhook events.

    event_id is unique: a redelivered event is acknowledged without being
    applied a second time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    event_id = models.CharField(max_length=255, unique=True)
    event_type = models.CharField(max_length=100, db_index=True)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payment_events",
    )
    payment_intent_id = models.CharField(max_length=255, blank=True, default="")

    outcome = models.CharField(max_length=64, blank=True, default="")
    payload = models.JSONField(default=dict, blank=True)

    received_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-received_at"]

    def __str__(self):
        return f"{self.event_type} | {self.event_id} | {self.outcome}"
