"""Category management service."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.catalog import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing product categories."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_name(self, name: str) -> Category | None:
        """Case-insensitive lookup; search resolves names the same way."""
        query = select(Category).where(func.lower(Category.name) == name.lower())
        result = await self.db.execute(query)
        return result.scalars().first()

    async def list_categories(self) -> list[Category]:
        """All categories in name order."""
        result = await self.db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def get_category(self, category_id: UUID) -> Category | None:
        return await self.db.get(Category, category_id)

    async def create_category(self, data: CategoryCreate) -> Category:
        category = Category(name=data.name)
        self.db.add(category)
        await self.db.flush()
        logger.info("Created category %s", category.name)
        return category

    async def update_category(self, category_id: UUID, data: CategoryUpdate) -> Category | None:
        category = await self.get_category(category_id)
        if not category:
            return None

        category.name = data.name
        await self.db.flush()
        return category

    async def count_products(self, category_id: UUID) -> int:
        """Number of products filed under a category."""
        query = select(func.count()).select_from(Product).where(Product.category_id == category_id)
        return await self.db.scalar(query) or 0

    async def delete_category(self, category_id: UUID) -> bool:
        """Delete a category.

        Returns:
            True if deleted, False if not found
        """
        category = await self.get_category(category_id)
        if not category:
            return False

        await self.db.delete(category)
        await self.db.flush()
        return True
