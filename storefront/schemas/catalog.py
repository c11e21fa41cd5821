"""Pydantic schemas for categories, suppliers and products."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from storefront.schemas.common import BaseSchema

# === Category Schemas ===


class CategoryCreate(BaseSchema):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CategoryUpdate(CategoryCreate):
    """Schema for renaming a category."""

    pass


class CategoryRef(BaseSchema):
    """Category reference expanded to its name."""

    id: UUID
    name: str


class CategoryResponse(CategoryRef):
    """Schema for category response."""

    created_at: datetime


# === Supplier Schemas ===


class SupplierCreate(BaseSchema):
    """Schema for creating a supplier."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    supplier_img: str | None = None

    @field_validator("name", "description")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class SupplierUpdate(BaseSchema):
    """Schema for updating a supplier."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    supplier_img: str | None = None


class SupplierRef(BaseSchema):
    """Supplier reference expanded to its name."""

    id: UUID
    name: str


class SupplierResponse(SupplierRef):
    """Schema for supplier response."""

    description: str
    supplier_img: str | None = None
    created_at: datetime


# === Product Schemas ===


class ProductSizeSchema(BaseSchema):
    """Stock held for one size label. Labels are stored upper-case."""

    size: str = Field(..., min_length=1, max_length=32)
    stock: int = Field(..., ge=0)

    @field_validator("size")
    @classmethod
    def _normalize_size(cls, value: str) -> str:
        return value.strip().upper()


class ProductBase(BaseSchema):
    """Fields shared by product create and response schemas."""

    name: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    img_url: str = Field(..., min_length=1)
    thumbnail_img_1: str | None = None
    thumbnail_img_2: str | None = None
    thumbnail_img_3: str | None = None
    thumbnail_img_4: str | None = None


class ProductCreate(ProductBase):
    """Schema for creating a product.

    Omitting ``sizes`` gives the default XS-XL run; an explicit list must not be empty.
    """

    category_id: UUID
    supplier_id: UUID
    sizes: list[ProductSizeSchema] | None = Field(default=None, min_length=1)


class ProductUpdate(BaseSchema):
    """Schema for updating a product. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    category_id: UUID | None = None
    supplier_id: UUID | None = None
    img_url: str | None = Field(default=None, min_length=1)
    thumbnail_img_1: str | None = None
    thumbnail_img_2: str | None = None
    thumbnail_img_3: str | None = None
    thumbnail_img_4: str | None = None
    sizes: list[ProductSizeSchema] | None = Field(default=None, min_length=1)


class ProductResponse(ProductBase):
    """Product with category and supplier expanded to ``{id, name}``."""

    id: UUID
    category: CategoryRef
    supplier: SupplierRef
    sizes: list[ProductSizeSchema]
    created_at: datetime
