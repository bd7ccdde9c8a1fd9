# catalog/serializers/category.py

from django.utils.text import slugify
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from catalog.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - name is writable (admin console creates categories)
    - slug is optional on write; derived from name when omitted, and required
      when the name has no slug characters
    - id + created_at are read-only
    """

    name = serializers.CharField(
        required=True,
        allow_blank=False,
        max_length=120,
        validators=[UniqueValidator(queryset=Category.objects.all())],
    )
    slug = serializers.SlugField(
        required=False,
        allow_blank=True,
        max_length=140,
        validators=[UniqueValidator(queryset=Category.objects.all())],
    )

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image_url", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def validate(self, attrs):
        slug_missing = not attrs.get("slug") and (self.instance is None or "slug" in attrs)
        if slug_missing:
            name = attrs.get("name") or getattr(self.instance, "name", "")
            slug = slugify(name)
            if not slug:
                raise serializers.ValidationError(
                    {"slug": "Slug cannot be derived from this name; provide one."}
                )
            duplicates = Category.objects.filter(slug=slug)
            if self.instance is not None:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                raise serializers.ValidationError({"slug": "A category with this slug already exists."})
            attrs["slug"] = slug
        return attrs
