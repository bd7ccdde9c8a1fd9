import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from catalog.models import Category, Product


class CatalogAPITests(TestCase):
    """
    Public catalog browsing.

    GUARANTEES:
    - Lists show available products only, with page/limit pagination metadata
    - category / search / sort filters narrow and order results
    - search without q is a validation error
    - unknown categories are 404
    """

    def setUp(self):
        self.client = APIClient()

        self.classics = Category.objects.create(name="Classics")
        self.tropical = Category.objects.create(name="Tropical")

        self.negroni = Product.objects.create(
            name="Negroni", description="Bitter", price=Decimal("11.50"), category=self.classics
        )
        self.daiquiri = Product.objects.create(
            name="Daiquiri", description="Sour", price=Decimal("10.00"), category=self.classics
        )
        self.mai_tai = Product.objects.create(
            name="Mai Tai", description="Tiki", price=Decimal("13.00"), category=self.tropical
        )
        self.retired = Product.objects.create(
            name="Blue Lagoon",
            description="Retired",
            price=Decimal("9.00"),
            category=self.tropical,
            is_available=False,
        )

    def _names(self, res):
        return [p["name"] for p in res.data["data"]]

    def test_list_excludes_unavailable_and_paginates(self):
        res = self.client.get(reverse("catalog:product-list"), {"limit": 2})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["data"]), 2)
        self.assertEqual(
            res.data["pagination"],
            {"page": 1, "limit": 2, "total": 3, "totalPages": 2},
        )

    def test_page_past_the_end_is_empty(self):
        res = self.client.get(reverse("catalog:product-list"), {"page": 5, "limit": 2})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["data"], [])
        self.assertEqual(res.data["pagination"]["total"], 3)

    def test_invalid_limit_is_validation_error(self):
        res = self.client.get(reverse("catalog:product-list"), {"limit": 500})

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")

    def test_filter_by_category_slug_and_id(self):
        by_slug = self.client.get(reverse("catalog:product-list"), {"category": "tropical"})
        by_id = self.client.get(reverse("catalog:product-list"), {"category": str(self.classics.id)})

        self.assertEqual(self._names(by_slug), ["Mai Tai"])
        self.assertCountEqual(self._names(by_id), ["Negroni", "Daiquiri"])

    def test_sort_by_price(self):
        asc = self.client.get(reverse("catalog:product-list"), {"sort": "price_asc"})
        desc = self.client.get(reverse("catalog:product-list"), {"sort": "price_desc"})

        self.assertEqual(self._names(asc), ["Daiquiri", "Negroni", "Mai Tai"])
        self.assertEqual(self._names(desc), ["Mai Tai", "Negroni", "Daiquiri"])

    def test_search_filter_on_list(self):
        res = self.client.get(reverse("catalog:product-list"), {"search": "neg"})
        self.assertEqual(self._names(res), ["Negroni"])

    def test_product_detail(self):
        res = self.client.get(reverse("catalog:product-detail", args=[self.mai_tai.id]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["data"]["name"], "Mai Tai")
        self.assertEqual(res.data["data"]["category"]["slug"], "tropical")

    def test_product_detail_unknown_is_404(self):
        res = self.client.get(reverse("catalog:product-detail", args=[uuid.uuid4()]))

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_categories_list(self):
        res = self.client.get(reverse("catalog:category-list"))

        self.assertEqual(res.status_code, 200)
        self.assertEqual([c["name"] for c in res.data["data"]], ["Classics", "Tropical"])

    def test_search_orders_by_name(self):
        res = self.client.get(reverse("catalog:product-search"), {"q": "i"})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._names(res), ["Daiquiri", "Mai Tai", "Negroni"])

    def test_search_requires_query(self):
        res = self.client.get(reverse("catalog:product-search"))

        self.assertEqual(res.status_code, 400)
        self.assertIn("q", res.data["error"]["fields"])

    def test_category_products(self):
        res = self.client.get(reverse("catalog:category-products", args=["tropical"]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(self._names(res), ["Mai Tai"])

    def test_unknown_category_is_404(self):
        res = self.client.get(reverse("catalog:category-products", args=["shots"]))
        self.assertEqual(res.status_code, 404)


class CategoryModelTests(TestCase):
    def test_slug_is_derived_from_name(self):
        category = Category.objects.create(name="Zero Proof")
        self.assertEqual(category.slug, "zero-proof")

    def test_name_without_slug_characters_is_rejected(self):
        with self.assertRaises(ValidationError):
            Category.objects.create(name="!!!")
        self.assertFalse(Category.objects.exists())
