"""Product model and its per-size stock rows."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base, TimestampedBase

if TYPE_CHECKING:
    from storefront.models.category import Category
    from storefront.models.supplier import Supplier

# Size run given to products created without explicit sizes
DEFAULT_SIZES: list[tuple[str, int]] = [(size, 20) for size in ("XS", "S", "M", "L", "XL")]


class ProductSize(Base):
    """Stock for one size label of a product."""

    __tablename__ = "product_sizes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    size: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    product: Mapped["Product"] = relationship("Product", back_populates="sizes")

    __table_args__ = (CheckConstraint("stock >= 0", name="stock_non_negative"),)

    def __repr__(self) -> str:
        return f"<ProductSize {self.size}={self.stock}>"


class Product(TimestampedBase):
    """A sellable catalog item.

    ``stock`` is the aggregate count shown to shoppers and used by search.
    It is stored independently of the per-size stock in ``sizes`` and the
    two are never reconciled.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)

    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    supplier_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("suppliers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Images
    img_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail_img_1: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumbnail_img_2: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumbnail_img_3: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumbnail_img_4: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Relationships
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        lazy="joined",
    )
    supplier: Mapped["Supplier"] = relationship(
        "Supplier",
        back_populates="products",
        lazy="joined",
    )
    sizes: Mapped[list[ProductSize]] = relationship(
        ProductSize,
        back_populates="product",
        order_by=ProductSize.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("stock >= 0", name="stock_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Product {self.name} ({self.id})>"
