# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "product_name", "product_price", "quantity", "subtotal")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_no", "user", "status", "payment_status", "total_amount", "created_at")
    list_filter = ("status", "payment_status")
    search_fields = ("order_no", "user__email", "payment_intent_id")
    readonly_fields = (
        "order_no",
        "user",
        "total_amount",
        "payment_intent_id",
        "paid_at",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]
