"""Product management service."""

import logging
from typing import Literal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.category import Category
from storefront.models.product import DEFAULT_SIZES, Product, ProductSize
from storefront.models.supplier import Supplier
from storefront.schemas.catalog import ProductCreate, ProductSizeSchema, ProductUpdate

logger = logging.getLogger(__name__)

ProductSortField = Literal["created_at", "name", "price", "stock"]
SortOrder = Literal["asc", "desc"]


class InvalidReferenceError(ValueError):
    """A product points at a category or supplier that does not exist."""


def _build_sizes(sizes: list[ProductSizeSchema] | None) -> list[ProductSize]:
    if sizes is None:
        return [ProductSize(size=size, stock=stock) for size, stock in DEFAULT_SIZES]
    return [ProductSize(size=s.size, stock=s.stock) for s in sizes]


class ProductService:
    """Service for managing catalog products."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _check_references(
        self,
        category_id: UUID | None,
        supplier_id: UUID | None,
    ) -> None:
        if category_id is not None and await self.db.get(Category, category_id) is None:
            raise InvalidReferenceError(f"Category {category_id} does not exist")
        if supplier_id is not None and await self.db.get(Supplier, supplier_id) is None:
            raise InvalidReferenceError(f"Supplier {supplier_id} does not exist")

    async def get_product(self, product_id: UUID) -> Product | None:
        """Get a product with category, supplier and sizes loaded."""
        query = (
            select(Product)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_products(
        self,
        sort: ProductSortField = "created_at",
        order: SortOrder = "desc",
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """List products with pagination.

        Returns:
            Tuple of (products, total_count)
        """
        total = await self.db.scalar(select(func.count()).select_from(Product)) or 0

        column = getattr(Product, sort)
        query = (
            select(Product)
            .order_by(column.asc() if order == "asc" else column.desc(), Product.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a product.

        Raises:
            InvalidReferenceError: If the category or supplier does not exist
        """
        await self._check_references(data.category_id, data.supplier_id)

        product = Product(
            name=data.name.strip(),
            description=data.description.strip(),
            price=data.price,
            category_id=data.category_id,
            supplier_id=data.supplier_id,
            stock=data.stock,
            img_url=data.img_url,
            thumbnail_img_1=data.thumbnail_img_1,
            thumbnail_img_2=data.thumbnail_img_2,
            thumbnail_img_3=data.thumbnail_img_3,
            thumbnail_img_4=data.thumbnail_img_4,
            sizes=_build_sizes(data.sizes),
        )
        self.db.add(product)
        await self.db.flush()
        logger.info("Created product %s", product.id)

        created = await self.get_product(product.id)
        assert created is not None
        return created

    async def update_product(self, product_id: UUID, data: ProductUpdate) -> Product | None:
        """Update the fields present in ``data``.

        Replacing ``sizes`` leaves the aggregate ``stock`` untouched.

        Raises:
            InvalidReferenceError: If a new category or supplier does not exist
        """
        product = await self.get_product(product_id)
        if not product:
            return None

        update_data = data.model_dump(exclude_unset=True, exclude={"sizes"})
        await self._check_references(update_data.get("category_id"), update_data.get("supplier_id"))

        for field, value in update_data.items():
            if value is None and not field.startswith("thumbnail_img_"):
                continue
            setattr(product, field, value)

        if data.sizes is not None:
            product.sizes = _build_sizes(data.sizes)

        await self.db.flush()
        return await self.get_product(product_id)

    async def delete_product(self, product_id: UUID) -> bool:
        product = await self.get_product(product_id)
        if not product:
            return False

        await self.db.delete(product)
        await self.db.flush()
        return True
