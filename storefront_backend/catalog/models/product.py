# catalog/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from .category import Category


class ProductQuerySet(models.QuerySet):
    def available(self):
        return self.filter(is_available=True)


class Product(models.Model):
    """
    A sellable cocktail.

    - price is the current selling price; orders snapshot it at checkout.
    - is_available hides the product from the public catalog and the cart.
    - stock is informational; checkout does not reserve or deduct it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)

    image_url = models.URLField(max_length=500, blank=True, default="")
    ingredients = models.JSONField(default=list, blank=True)
    alcohol_content = models.DecimalField(
        max_digits=4,
        decimal_places=1,
        null=True,
        blank=True,
        help_text="ABV percentage",
    )
    volume_ml = models.PositiveIntegerField(null=True, blank=True)

    is_featured = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="catalog_product_name_idx"),
            models.Index(fields=["is_available", "created_at"], name="catalog_product_avail_idx"),
        ]

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError("Price must be non-negative")

        if not isinstance(self.ingredients, list):
            raise ValidationError("ingredients must be a list")

    def __str__(self):
        return f"{self.name} ({self.price})"
