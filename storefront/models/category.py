"""Category model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import TimestampedBase

if TYPE_CHECKING:
    from storefront.models.product import Product


class Category(TimestampedBase):
    """A product category. Names are unique."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category {self.name}>"
