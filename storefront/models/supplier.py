"""Supplier model."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import TimestampedBase

if TYPE_CHECKING:
    from storefront.models.product import Product


class Supplier(TimestampedBase):
    """A supplier (brand) that products are sourced from."""

    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    supplier_img: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="supplier",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Supplier {self.name}>"
