# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from orders.exceptions import InvalidOrderTransition


class Order(models.Model):
    """
    Customer order created from the cart at checkout.

    Key rules:
    - Created with status=pending / payment_status=pending
    - Becomes paid ONLY through the verified payment webhook
    - After creation only status fields and payment_intent_id change

    Fulfilment state machine (status):
        pending -> processing -> shipped -> delivered
        pending | processing -> cancelled

    Payment state machine (payment_status):
        pending -> paid | failed
        failed  -> paid              (retried charge succeeded)
        paid    -> refunded
    """

    STATUS_PENDING = "pending"
    STATUS_PROCESSING = "processing"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_PAID = "paid"
    PAYMENT_FAILED = "failed"
    PAYMENT_REFUNDED = "refunded"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_PAID, "Paid"),
        (PAYMENT_FAILED, "Failed"),
        (PAYMENT_REFUNDED, "Refunded"),
    ]

    STATUS_TRANSITIONS = {
        STATUS_PENDING: {STATUS_PROCESSING, STATUS_CANCELLED},
        STATUS_PROCESSING: {STATUS_SHIPPED, STATUS_CANCELLED},
        STATUS_SHIPPED: {STATUS_DELIVERED},
        STATUS_DELIVERED: set(),
        STATUS_CANCELLED: set(),
    }

    PAYMENT_TRANSITIONS = {
        PAYMENT_PENDING: {PAYMENT_PAID, PAYMENT_FAILED},
        PAYMENT_FAILED: {PAYMENT_PAID},
        PAYMENT_PAID: {PAYMENT_REFUNDED},
        PAYMENT_REFUNDED: set(),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    order_no = models.CharField(
        max_length=64,
        unique=True,
        blank=True,
        help_text="System-generated public order number",
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    payment_status = models.CharField(
        max_length=20, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING
    )

    # Server authoritative
    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    # Shipping
    shipping_address = models.CharField(max_length=255)
    city = models.CharField(max_length=120)
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=120)
    phone = models.CharField(max_length=40)
    notes = models.TextField(blank=True, default="")

    # Gateway reference (Stripe PaymentIntent id)
    payment_intent_id = models.CharField(max_length=255, blank=True, default="", db_index=True)

    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="orders_user_created_idx"),
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["payment_status"], name="orders_payment_status_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self.order_no:
            prefix = timezone.now().strftime("ORD%Y%m%d")
            self.order_no = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"
        super().save(*args, **kwargs)

    # -----------------------------
    # Fulfilment transitions
    # -----------------------------
    def can_transition_to(self, target: str) -> bool:
        return target in self.STATUS_TRANSITIONS.get(self.status, set())

    def transition_to(self, target: str) -> bool:
        """
        Move status along the state machine.
        Returns False when target equals the current status (no-op).
        """
        if target not in self.STATUS_TRANSITIONS:
            raise InvalidOrderTransition(f"Unknown order status: {target}")

        if target == self.status:
            return False

        if not self.can_transition_to(target):
            raise InvalidOrderTransition(
                f"Cannot change order status from {self.status} to {target}"
            )

        self.status = target
        self.save(update_fields=["status", "updated_at"])
        return True

    # -----------------------------
    # Payment transitions
    # -----------------------------
    def _can_move_payment_to(self, target: str) -> bool:
        return target in self.PAYMENT_TRANSITIONS.get(self.payment_status, set())

    def mark_paid(self) -> bool:
        """
        Record a confirmed charge. Moves a pending order into processing.
        Re-applying on a paid order is a no-op (returns False).
        """
        if self.payment_status == self.PAYMENT_PAID:
            return False

        if not self._can_move_payment_to(self.PAYMENT_PAID):
            raise InvalidOrderTransition(
                f"Cannot mark order paid from payment status {self.payment_status}"
            )

        self.payment_status = self.PAYMENT_PAID
        self.paid_at = self.paid_at or timezone.now()
        fields = ["payment_status", "paid_at", "updated_at"]

        if self.status == self.STATUS_PENDING:
            self.status = self.STATUS_PROCESSING
            fields.append("status")

        self.save(update_fields=fields)
        return True

    def mark_payment_failed(self) -> bool:
        """
        Record a failed charge. Never downgrades a paid or refunded order.
        """
        if self.payment_status != self.PAYMENT_PENDING:
            return False

        self.payment_status = self.PAYMENT_FAILED
        self.save(update_fields=["payment_status", "updated_at"])
        return True

    def mark_refunded(self) -> bool:
        if self.payment_status == self.PAYMENT_REFUNDED:
            return False

        if not self._can_move_payment_to(self.PAYMENT_REFUNDED):
            raise InvalidOrderTransition(
                f"Cannot refund order with payment status {self.payment_status}"
            )

        self.payment_status = self.PAYMENT_REFUNDED
        self.save(update_fields=["payment_status", "updated_at"])
        return True

    @property
    def is_payable(self) -> bool:
        return (
            self.payment_status in {self.PAYMENT_PENDING, self.PAYMENT_FAILED}
            and self.status != self.STATUS_CANCELLED
        )

    def __str__(self):
        return f"{self.order_no} | {self.total_amount} | {self.status}/{self.payment_status}"
