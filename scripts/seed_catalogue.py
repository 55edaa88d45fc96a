"""Seed the catalogue with the shop's starting products.

Skips seeding when the catalogue already holds products, so it is safe to
run more than once.

Usage:
    python scripts/seed_catalogue.py
    python scripts/seed_catalogue.py --include-inactive
"""

import argparse
import sys

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")

PRODUCTS = [
    {
        "name": "Chicken Breast",
        "category": "chicken",
        "unit": "kg",
        "price": 280.0,
        "description": "Boneless chicken breast, tender and lean. Perfect for grilling.",
        "image_url": "/assets/images/Product images/chicken/Chicken Breasts.png",
    },
    {
        "name": "Chicken Curry Cut",
        "category": "chicken",
        "unit": "kg",
        "price": 220.0,
        "description": "Fresh chicken cut into curry-sized pieces with bone.",
        "image_url": "/assets/images/Product images/chicken/Curry Cuts.png",
    },
    {
        "name": "Chicken Leg",
        "category": "chicken",
        "unit": "kg",
        "price": 240.0,
        "description": "Juicy chicken legs, great for roasting and frying.",
        "image_url": "/assets/images/Product images/chicken/Leg piece.png",
    },
    {
        "name": "Chicken Wings",
        "category": "chicken",
        "unit": "kg",
        "price": 200.0,
        "description": "Crispy chicken wings, perfect for snacks and appetizers.",
        "image_url": "/assets/images/Product images/chicken/Chicken Wings.png",
    },
    {
        "name": "Kaadai (Quail)",
        "category": "kadai",
        "unit": "piece",
        "price": 120.0,
        "description": "Fresh farm raised Kaadai (Quail). Nutrient-rich and delicious.",
        "image_url": "/assets/images/Product images/Quail/quail.webp",
    },
]

# Listed in the shop's history but not currently sold.
INACTIVE_PRODUCTS = [
    {"name": "Mutton Curry Cut", "category": "mutton", "unit": "kg", "price": 750.0},
    {"name": "Fish (Seer/King Fish)", "category": "fish", "unit": "kg", "price": 600.0},
]


def main():
    parser = argparse.ArgumentParser(description="Seed the meat shop catalogue")
    parser.add_argument(
        "--include-inactive",
        action="store_true",
        help="Also add discontinued products, marked inactive",
    )
    args = parser.parse_args()

    from catalogue.domain import catalogue
    from catalogue.product.creation import AddProduct
    from catalogue.product.product import Product

    catalogue.init()

    entries = [dict(entry, is_active=True) for entry in PRODUCTS]
    if args.include_inactive:
        entries += [dict(entry, is_active=False) for entry in INACTIVE_PRODUCTS]

    with catalogue.domain_context():
        existing = catalogue.repository_for(Product)._dao.query.all().total
        if existing:
            print(f"Found {existing} existing products. Skipping seed.")
            return

        for entry in entries:
            product_id = catalogue.process(AddProduct(**entry), asynchronous=False)
            state = "active" if entry["is_active"] else "inactive"
            print(f"  {entry['name']} ({entry['unit']}, {state}) -> {product_id}")

    print(f"\nSeeded {len(entries)} products.")


if __name__ == "__main__":
    main()
