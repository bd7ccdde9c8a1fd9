# catalog/models/category.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.text import slugify


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=140, unique=True, blank=True)
    description = models.TextField(blank=True, default="")
    image_url = models.URLField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def clean(self):
        if not self.slug and not slugify(self.name or ""):
            raise ValidationError({"slug": "Slug cannot be derived from this name; provide one."})

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        if not self.slug:
            self.slug = slugify(self.name)
        # Categories are routed by slug; an empty one is unreachable
        if not self.slug:
            raise ValidationError({"slug": "Slug cannot be derived from this name; provide one."})
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name
