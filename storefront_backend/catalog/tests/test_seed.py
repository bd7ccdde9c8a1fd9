from django.core.management import call_command
from django.test import TestCase

from catalog.models import Category, Product


class SeedCatalogCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_catalog")
        categories = Category.objects.count()
        products = Product.objects.count()

        call_command("seed_catalog")

        self.assertGreater(products, 0)
        self.assertEqual(Category.objects.count(), categories)
        self.assertEqual(Product.objects.count(), products)
