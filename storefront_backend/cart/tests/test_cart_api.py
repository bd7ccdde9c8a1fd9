import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from cart.models import CartItem
from catalog.models import Product

User = get_user_model()


class CartAPITests(TestCase):
    """
    GUARANTEES:
    - Adding an existing product increments the line instead of duplicating it
    - A quantity below 1 removes the line
    - Every cart endpoint is scoped to the caller
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="cart@example.com", password="Strong-Pass-1")
        self.other = User.objects.create_user(email="other@example.com", password="Strong-Pass-1")

        self.negroni = Product.objects.create(name="Negroni", description="Bitter", price=Decimal("11.50"))
        self.mojito = Product.objects.create(name="Mojito", description="Minty", price=Decimal("9.25"))

        self.client.force_authenticate(user=self.user)

    # =====================================================
    # ADD / UPSERT
    # =====================================================

    def test_add_then_add_again_increments_quantity(self):
        first = self.client.post(
            reverse("cart:cart-items"), {"product_id": str(self.negroni.id), "quantity": 1}, format="json"
        )
        second = self.client.post(
            reverse("cart:cart-items"), {"product_id": str(self.negroni.id), "quantity": 2}, format="json"
        )

        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 200)
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 1)
        self.assertEqual(CartItem.objects.get(user=self.user).quantity, 3)

    def test_add_defaults_quantity_to_one(self):
        res = self.client.post(reverse("cart:cart-items"), {"product_id": str(self.mojito.id)}, format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["data"]["quantity"], 1)

    def test_add_unavailable_product_is_404(self):
        self.mojito.is_available = False
        self.mojito.save()

        res = self.client.post(reverse("cart:cart-items"), {"product_id": str(self.mojito.id)}, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertFalse(CartItem.objects.exists())

    def test_add_zero_quantity_is_rejected(self):
        res = self.client.post(
            reverse("cart:cart-items"), {"product_id": str(self.mojito.id), "quantity": 0}, format="json"
        )
        self.assertEqual(res.status_code, 400)

    def test_repeated_adds_cannot_push_line_past_99(self):
        url = reverse("cart:cart-items")
        payload = {"product_id": str(self.negroni.id), "quantity": 60}

        first = self.client.post(url, payload, format="json")
        second = self.client.post(url, payload, format="json")

        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 400)
        self.assertIn("quantity", second.data["error"]["fields"])
        self.assertEqual(CartItem.objects.get(user=self.user, product=self.negroni).quantity, 60)

    def test_repeated_adds_may_fill_line_to_exactly_99(self):
        url = reverse("cart:cart-items")
        self.client.post(url, {"product_id": str(self.negroni.id), "quantity": 90}, format="json")

        res = self.client.post(url, {"product_id": str(self.negroni.id), "quantity": 9}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(CartItem.objects.get(user=self.user, product=self.negroni).quantity, 99)

    # =====================================================
    # READ / SUMMARY
    # =====================================================

    def test_get_cart_returns_lines_and_summary(self):
        CartItem.objects.create(user=self.user, product=self.negroni, quantity=2)
        CartItem.objects.create(user=self.user, product=self.mojito, quantity=1)
        CartItem.objects.create(user=self.other, product=self.mojito, quantity=5)

        res = self.client.get(reverse("cart:cart"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["data"]), 2)
        self.assertEqual(res.data["summary"]["item_count"], 3)
        self.assertEqual(Decimal(res.data["summary"]["total_amount"]), Decimal("32.25"))

    def test_cart_requires_authentication(self):
        self.client.force_authenticate(user=None)
        res = self.client.get(reverse("cart:cart"))
        self.assertEqual(res.status_code, 401)

    # =====================================================
    # UPDATE / REMOVE
    # =====================================================

    def test_set_quantity(self):
        item = CartItem.objects.create(user=self.user, product=self.negroni, quantity=1)

        res = self.client.put(reverse("cart:cart-item-detail", args=[item.id]), {"quantity": 4}, format="json")

        self.assertEqual(res.status_code, 200)
        item.refresh_from_db()
        self.assertEqual(item.quantity, 4)

    def test_quantity_zero_removes_line(self):
        item = CartItem.objects.create(user=self.user, product=self.negroni, quantity=2)

        res = self.client.put(reverse("cart:cart-item-detail", args=[item.id]), {"quantity": 0}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.data["data"])
        self.assertFalse(CartItem.objects.filter(id=item.id).exists())

    def test_cannot_touch_another_users_line(self):
        foreign = CartItem.objects.create(user=self.other, product=self.negroni, quantity=2)

        put = self.client.put(reverse("cart:cart-item-detail", args=[foreign.id]), {"quantity": 9}, format="json")
        delete = self.client.delete(reverse("cart:cart-item-detail", args=[foreign.id]))

        self.assertEqual(put.status_code, 404)
        self.assertEqual(delete.status_code, 404)
        foreign.refresh_from_db()
        self.assertEqual(foreign.quantity, 2)

    def test_delete_line(self):
        item = CartItem.objects.create(user=self.user, product=self.negroni, quantity=2)

        res = self.client.delete(reverse("cart:cart-item-detail", args=[item.id]))

        self.assertEqual(res.status_code, 200)
        self.assertFalse(CartItem.objects.exists())

    def test_delete_unknown_line_is_404(self):
        res = self.client.delete(reverse("cart:cart-item-detail", args=[uuid.uuid4()]))
        self.assertEqual(res.status_code, 404)

    def test_clear_cart_only_clears_callers_rows(self):
        CartItem.objects.create(user=self.user, product=self.negroni, quantity=2)
        CartItem.objects.create(user=self.other, product=self.negroni, quantity=1)

        res = self.client.delete(reverse("cart:cart"))

        self.assertEqual(res.status_code, 200)
        self.assertFalse(CartItem.objects.filter(user=self.user).exists())
        self.assertTrue(CartItem.objects.filter(user=self.other).exists())
