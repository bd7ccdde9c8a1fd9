# orders/services/checkout.py

"""
CHECKOUT SERVICE (APPLICATION SERVICE)

Purpose:
- Turn the authenticated user's cart into an Order + OrderItem snapshots.

Sequence:
1) lock the user's cart rows
2) reject an empty cart (EmptyCartError -> 400, no Order written)
   and lines whose product is no longer available (ProductUnavailableError -> 400)
3) total = sum(current product price x quantity), 2dp ROUND_HALF_UP
4) insert Order (pending / pending)
5) insert one OrderItem per cart line (name + price snapshot)
6) delete the cart rows
7) return the order with items

Hard rules:
- Everything runs in ONE transaction: order, items and cart clear commit or
  roll back together.
- Cart rows are locked first, so a double-submitted checkout finds an empty
  cart on the second request.
- Money values are computed server-side; the client never sends totals.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from cart.models import CartItem
from orders.exceptions import EmptyCartError, ProductUnavailableError
from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")

SHIPPING_FIELDS = ("shipping_address", "city", "postal_code", "country", "phone", "notes")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@transaction.atomic
def place_order(*, user, shipping: dict) -> Order:
    cart_items = list(
        CartItem.objects.select_for_update(of=("self",))
        .filter(user=user)
        .select_related("product")
        .order_by("created_at")
    )

    if not cart_items:
        raise EmptyCartError("Cart is empty")

    unavailable = [item.product.name for item in cart_items if not item.product.is_available]
    if unavailable:
        raise ProductUnavailableError(
            f"No longer available: {', '.join(unavailable)}. Remove these items to check out."
        )

    lines = []
    total = Decimal("0.00")
    for item in cart_items:
        unit_price = _money(item.product.price)
        subtotal = _money(unit_price * Decimal(int(item.quantity)))
        total += subtotal
        lines.append((item, unit_price, subtotal))

    order = Order.objects.create(
        user=user,
        status=Order.STATUS_PENDING,
        payment_status=Order.PAYMENT_PENDING,
        total_amount=_money(total),
        **{field: (shipping.get(field) or "").strip() for field in SHIPPING_FIELDS},
    )

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=item.product,
                product_name=item.product.name,
                product_price=unit_price,
                quantity=int(item.quantity),
                subtotal=subtotal,
            )
            for item, unit_price, subtotal in lines
        ]
    )

    CartItem.objects.filter(pk__in=[item.pk for item in cart_items]).delete()

    logger.info(
        "Order placed",
        extra={
            "order_id": str(order.id),
            "user_id": str(user.id),
            "total_amount": str(order.total_amount),
            "lines": len(lines),
        },
    )

    return Order.objects.prefetch_related("items").get(pk=order.pk)
