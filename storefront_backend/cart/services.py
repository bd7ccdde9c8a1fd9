# cart/services.py

"""
CART SERVICE

Upsert-by-uniqueness semantics over (user, product):
- add_item: inserts a new row or increments the existing row's quantity
  (the merged quantity may not exceed MAX_LINE_QUANTITY)
- set_quantity: a quantity below 1 deletes the row
- summarize: item count (sum of quantities) + total (sum of price x quantity)

Every function takes the owner explicitly; callers never touch another user's rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework.exceptions import ValidationError

from cart.models import MAX_LINE_QUANTITY, CartItem
from catalog.models import Product

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CartSummary:
    item_count: int
    total_amount: Decimal


def cart_items_for(user):
    return CartItem.objects.filter(user=user).select_related("product", "product__category")


@transaction.atomic
def add_item(*, user, product_id, quantity: int) -> tuple[CartItem, bool]:
    """
    Returns (item, created). Unavailable products are treated as missing.
    """
    product = get_object_or_404(Product.objects.available(), id=product_id)

    item, created = CartItem.objects.select_for_update().get_or_create(
        user=user,
        product=product,
        defaults={"quantity": quantity},
    )

    if not created:
        merged = int(item.quantity or 0) + int(quantity)
        if merged > MAX_LINE_QUANTITY:
            raise ValidationError(
                {
                    "quantity": [
                        f"Cart already holds {item.quantity}; "
                        f"a line cannot exceed {MAX_LINE_QUANTITY}."
                    ]
                }
            )
        item.quantity = merged
        item.save(update_fields=["quantity", "updated_at"])

    logger.info(
        "Cart item upserted",
        extra={"user_id": str(user.id), "product_id": str(product.id), "created": created},
    )
    return item, created


@transaction.atomic
def set_quantity(*, user, item_id, quantity: int) -> CartItem | None:
    """
    Returns the updated item, or None when the quantity removed it.
    """
    item = get_object_or_404(CartItem.objects.select_for_update(), id=item_id, user=user)

    if quantity < 1:
        item.delete()
        return None

    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item


def remove_item(*, user, item_id) -> None:
    item = get_object_or_404(CartItem, id=item_id, user=user)
    item.delete()


def clear_cart(*, user) -> int:
    deleted, _ = CartItem.objects.filter(user=user).delete()
    return deleted


def summarize(items) -> CartSummary:
    items = list(items)
    return CartSummary(
        item_count=sum(int(i.quantity) for i in items),
        total_amount=_money(sum((i.line_total for i in items), Decimal("0.00"))),
    )
