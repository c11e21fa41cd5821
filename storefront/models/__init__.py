"""SQLAlchemy models."""

from storefront.models.base import Base, TimestampedBase
from storefront.models.category import Category
from storefront.models.product import DEFAULT_SIZES, Product, ProductSize
from storefront.models.supplier import Supplier
from storefront.models.user import User, UserRole

__all__ = [
    # Base
    "Base",
    "TimestampedBase",
    # Catalog
    "Category",
    "Supplier",
    "Product",
    "ProductSize",
    "DEFAULT_SIZES",
    # Accounts
    "User",
    "UserRole",
]
