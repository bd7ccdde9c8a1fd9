from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Category, Product


CATEGORIES = [
    ("Classics", "Timeless recipes that never go out of style."),
    ("Tropical", "Rum, citrus and fruit-forward drinks."),
    ("Signature", "House creations."),
    ("Mocktails", "Zero-proof cocktails."),
]

PRODUCTS = [
    # name, category, price, abv, volume_ml, featured, ingredients
    ("Old Fashioned", "Classics", "12.00", "32.0", 90, True, ["Bourbon", "Sugar", "Angostura bitters", "Orange peel"]),
    ("Negroni", "Classics", "11.50", "24.0", 90, False, ["Gin", "Campari", "Sweet vermouth"]),
    ("Daiquiri", "Classics", "10.00", "20.0", 120, False, ["White rum", "Lime juice", "Simple syrup"]),
    ("Mai Tai", "Tropical", "13.00", "18.0", 180, True, ["Aged rum", "Orgeat", "Lime juice", "Orange curacao"]),
    ("Piña Colada", "Tropical", "12.50", "12.0", 250, False, ["White rum", "Pineapple juice", "Coconut cream"]),
    ("Smoked Rosemary Sour", "Signature", "14.00", "16.0", 150, True, ["Rye whiskey", "Lemon", "Rosemary syrup", "Egg white"]),
    ("Virgin Mojito", "Mocktails", "7.00", None, 300, False, ["Mint", "Lime", "Soda water", "Sugar"]),
]


class Command(BaseCommand):
    help = "Seed demo categories and cocktails (idempotent)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        categories = {}
        for name, description in CATEGORIES:
            obj, _ = Category.objects.get_or_create(
                name=name,
                defaults={"description": description},
            )
            categories[name] = obj

        created = 0
        for name, category, price, abv, volume_ml, featured, ingredients in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "category": categories[category],
                    "description": f"{name} made with {', '.join(ingredients).lower()}.",
                    "price": Decimal(price),
                    "alcohol_content": Decimal(abv) if abv else None,
                    "volume_ml": volume_ml,
                    "is_featured": featured,
                    "ingredients": ingredients,
                    "stock": 50,
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(f"Catalog seeded: {len(categories)} categories, {created} new products.")
        )
