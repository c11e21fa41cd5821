"""Supplier management service."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import Product
from storefront.models.supplier import Supplier
from storefront.schemas.catalog import SupplierCreate, SupplierUpdate

logger = logging.getLogger(__name__)


class SupplierService:
    """Service for managing suppliers."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_suppliers(self) -> list[Supplier]:
        result = await self.db.execute(select(Supplier).order_by(Supplier.name))
        return list(result.scalars().all())

    async def get_supplier(self, supplier_id: UUID) -> Supplier | None:
        return await self.db.get(Supplier, supplier_id)

    async def create_supplier(self, data: SupplierCreate) -> Supplier:
        supplier = Supplier(
            name=data.name,
            description=data.description,
            supplier_img=data.supplier_img,
        )
        self.db.add(supplier)
        await self.db.flush()
        logger.info("Created supplier %s", supplier.name)
        return supplier

    async def update_supplier(self, supplier_id: UUID, data: SupplierUpdate) -> Supplier | None:
        """Apply the fields present in ``data``; returns None if the supplier is missing."""
        supplier = await self.get_supplier(supplier_id)
        if not supplier:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "supplier_img":
                continue
            setattr(supplier, field, value.strip() if isinstance(value, str) else value)

        await self.db.flush()
        return supplier

    async def count_products(self, supplier_id: UUID) -> int:
        query = select(func.count()).select_from(Product).where(Product.supplier_id == supplier_id)
        return await self.db.scalar(query) or 0

    async def delete_supplier(self, supplier_id: UUID) -> bool:
        supplier = await self.get_supplier(supplier_id)
        if not supplier:
            return False

        await self.db.delete(supplier)
        await self.db.flush()
        return True
