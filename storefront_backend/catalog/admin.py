# catalog/admin.py

from django.contrib import admin

from catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "created_at")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "stock", "is_available", "is_featured", "updated_at")
    list_filter = ("is_available", "is_featured", "category")
    search_fields = ("name", "description")
    list_editable = ("is_available", "is_featured")
    readonly_fields = ("created_at", "updated_at")
