"""Product catalog endpoints."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from storefront.core.auth import AdminUser
from storefront.core.deps import DBSession
from storefront.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from storefront.schemas.common import PaginatedResponse
from storefront.services.product_service import (
    InvalidReferenceError,
    ProductService,
    ProductSortField,
    SortOrder,
)

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Product not found",
    )


async def _paginate(
    db: DBSession,
    page: int,
    limit: int,
    sort: ProductSortField,
    order: SortOrder,
) -> PaginatedResponse[ProductResponse]:
    offset = (page - 1) * limit
    products, total = await ProductService(db).list_products(
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )
    pages = (total + limit - 1) // limit

    return PaginatedResponse[ProductResponse](
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        page_size=limit,
        pages=pages,
    )


@router.get("", response_model=PaginatedResponse[ProductResponse], summary="List products")
async def list_products(
    db: DBSession,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: Literal["created_at", "name", "price", "stock"] = Query("created_at"),
    order: Literal["asc", "desc"] = Query("desc"),
) -> PaginatedResponse[ProductResponse]:
    """List every product, including out-of-stock ones (admin view)."""
    return await _paginate(db, page, limit, sort, order)


@router.get(
    "/featured",
    response_model=PaginatedResponse[ProductResponse],
    summary="List featured products",
)
async def list_featured_products(
    db: DBSession,
    page: int = Query(1, ge=1),
    limit: int = Query(8, ge=1, le=100),
    sort: Literal["created_at", "name", "price", "stock"] = Query("created_at"),
    order: Literal["asc", "desc"] = Query("desc"),
) -> PaginatedResponse[ProductResponse]:
    """Products for the home page. There is no featured flag yet, so this is the full listing."""
    return await _paginate(db, page, limit, sort, order)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(product_id: UUID, db: DBSession) -> ProductResponse:
    product = await ProductService(db).get_product(product_id)
    if not product:
        raise _not_found()
    return ProductResponse.model_validate(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    data: ProductCreate,
    db: DBSession,
    _admin: AdminUser,
) -> ProductResponse:
    """Create a product. Without ``sizes`` it gets XS-XL with 20 units each."""
    try:
        product = await ProductService(db).create_product(data)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    await db.commit()
    return ProductResponse.model_validate(product)


@router.patch("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: DBSession,
    _admin: AdminUser,
) -> ProductResponse:
    try:
        product = await ProductService(db).update_product(product_id, data)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not product:
        raise _not_found()
    await db.commit()
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(product_id: UUID, db: DBSession, _admin: AdminUser) -> Response:
    if not await ProductService(db).delete_product(product_id):
        raise _not_found()
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
