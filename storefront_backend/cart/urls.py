# cart/urls.py

from django.urls import path

from cart.views import CartItemDetailView, CartItemsView, CartView

app_name = "cart"

urlpatterns = [
    path("cart", CartView.as_view(), name="cart"),
    path("cart/items", CartItemsView.as_view(), name="cart-items"),
    path("cart/items/<uuid:item_id>", CartItemDetailView.as_view(), name="cart-item-detail"),
]
