"""Seed a small demo catalog for trying search and facets locally.

Creates:
- 4 categories
- 3 suppliers
- 10 products with a spread of prices, colors in their names and sizes,
  including one out of stock (never returned by search)
- 1 admin account (admin@example.com / admin123) for the write routes

Usage:
    uv run python -m scripts.seed_catalog
"""

import asyncio
import uuid

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import async_session_maker
from storefront.core.security import hash_password
from storefront.models.category import Category
from storefront.models.product import Product, ProductSize
from storefront.models.supplier import Supplier
from storefront.models.user import User, UserRole

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"

# Fixed UUIDs for easy reference
CATEGORY_IDS = {
    "Hoodies": uuid.UUID("aaaaaaaa-0000-0000-0000-000000000001"),
    "T-Shirts": uuid.UUID("aaaaaaaa-0000-0000-0000-000000000002"),
    "Jackets": uuid.UUID("aaaaaaaa-0000-0000-0000-000000000003"),
    "Accessories": uuid.UUID("aaaaaaaa-0000-0000-0000-000000000004"),
}
SUPPLIER_IDS = {
    "Northwind": uuid.UUID("bbbbbbbb-0000-0000-0000-000000000001"),
    "Urban Loom": uuid.UUID("bbbbbbbb-0000-0000-0000-000000000002"),
    "Cobalt & Co": uuid.UUID("bbbbbbbb-0000-0000-0000-000000000003"),
}

IMG = "https://placehold.co/600x800?text={}"

# name, description, price, category, supplier, stock, sizes
PRODUCTS: list[tuple[str, str, float, str, str, int, list[tuple[str, int]]]] = [
    ("Red Hoodie", "Heavyweight fleece hoodie", 49.99, "Hoodies", "Northwind", 30,
     [("S", 10), ("M", 10), ("L", 10)]),
    ("Navy Zip Hoodie", "Full zip with brushed lining", 59.0, "Hoodies", "Urban Loom", 12,
     [("M", 6), ("XL", 6)]),
    ("Charcoal Tee", "Organic cotton crew neck", 19.5, "T-Shirts", "Urban Loom", 50,
     [("XS", 10), ("S", 10), ("M", 10), ("L", 10), ("XL", 10)]),
    ("Ivory Linen Tee", "Breathable summer linen", 27.0, "T-Shirts", "Northwind", 8,
     [("S", 4), ("M", 4)]),
    ("Olive Field Jacket", "Waxed cotton with four pockets", 129.0, "Jackets", "Cobalt & Co", 5,
     [("M", 2), ("L", 2), ("XXL", 1)]),
    ("Burgundy Bomber", "Satin bomber with ribbed cuffs", 98.5, "Jackets", "Cobalt & Co", 0,
     [("M", 0), ("L", 0)]),
    ("Slate Rain Shell", "Packable waterproof shell", 110.0, "Jackets", "Northwind", 9,
     [("S", 3), ("M", 3), ("L", 3)]),
    ("Mustard Beanie", "Chunky rib knit", 14.0, "Accessories", "Urban Loom", 40,
     [("ONE SIZE", 40)]),
    ("Lavender Scarf", "Soft merino blend", 32.0, "Accessories", "Cobalt & Co", 15,
     [("ONE SIZE", 15)]),
    ("Black Canvas Tote", "Everyday tote bag", 22.0, "Accessories", "Northwind", 25,
     [("ONE SIZE", 25)]),
]


async def seed(session: AsyncSession) -> None:
    # Clean up previous seed data
    await session.execute(text("DELETE FROM product_sizes"))
    await session.execute(text("DELETE FROM products"))
    await session.execute(text("DELETE FROM suppliers"))
    await session.execute(text("DELETE FROM categories"))
    await session.execute(text("DELETE FROM users WHERE email = :email"), {"email": ADMIN_EMAIL})
    await session.flush()

    for name, category_id in CATEGORY_IDS.items():
        session.add(Category(id=category_id, name=name))
    for name, supplier_id in SUPPLIER_IDS.items():
        session.add(
            Supplier(id=supplier_id, name=name, description=f"{name} apparel and goods")
        )
    await session.flush()

    for name, description, price, category, supplier, stock, sizes in PRODUCTS:
        session.add(
            Product(
                name=name,
                description=description,
                price=price,
                category_id=CATEGORY_IDS[category],
                supplier_id=SUPPLIER_IDS[supplier],
                stock=stock,
                img_url=IMG.format(name.replace(" ", "+")),
                sizes=[ProductSize(size=size, stock=qty) for size, qty in sizes],
            )
        )

    session.add(
        User(
            role=UserRole.ADMIN,
            name="Catalog Admin",
            email=ADMIN_EMAIL,
            phone="+1 555 0000",
            address="Head office",
            password_hash=hash_password(ADMIN_PASSWORD),
        )
    )

    await session.commit()


async def main() -> None:
    async with async_session_maker() as session:
        await seed(session)

    print("=" * 60)
    print("  Catalog seed data created successfully!")
    print("=" * 60)
    print()
    print(f"  Categories: {', '.join(CATEGORY_IDS)}")
    print(f"  Suppliers:  {', '.join(SUPPLIER_IDS)}")
    print(f"  Products:   {len(PRODUCTS)} (1 out of stock)")
    print(f"  Admin:      {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
    print()
    print("  Try: GET /api/v1/search?q=hoodie&sort=price-asc")
    print("       GET /api/v1/search/filters?category=jackets")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
