"""Category management endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status

from storefront.core.auth import AdminUser
from storefront.core.deps import DBSession
from storefront.schemas.catalog import (
    CategoryCreate,
    CategoryRef,
    CategoryResponse,
    CategoryUpdate,
)
from storefront.services.category_service import CategoryService

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Category not found",
    )


@router.get("", response_model=list[CategoryRef], summary="List categories")
async def list_categories(db: DBSession) -> list[CategoryRef]:
    """All categories (id and name) in name order."""
    categories = await CategoryService(db).list_categories()
    return [CategoryRef.model_validate(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get a category")
async def get_category(category_id: UUID, db: DBSession) -> CategoryResponse:
    category = await CategoryService(db).get_category(category_id)
    if not category:
        raise _not_found()
    return CategoryResponse.model_validate(category)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    data: CategoryCreate,
    db: DBSession,
    _admin: AdminUser,
) -> CategoryResponse:
    """Create a category. Names are unique regardless of case."""
    service = CategoryService(db)
    if await service.find_by_name(data.name):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category '{data.name}' already exists",
        )

    category = await service.create_category(data)
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse, summary="Rename a category")
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    db: DBSession,
    _admin: AdminUser,
) -> CategoryResponse:
    service = CategoryService(db)
    existing = await service.find_by_name(data.name)
    if existing and existing.id != category_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category '{data.name}' already exists",
        )

    category = await service.update_category(category_id, data)
    if not category:
        raise _not_found()
    await db.commit()
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category",
)
async def delete_category(category_id: UUID, db: DBSession, _admin: AdminUser) -> Response:
    """Delete a category that no product references."""
    service = CategoryService(db)
    in_use = await service.count_products(category_id)
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Category is used by {in_use} products",
        )

    if not await service.delete_category(category_id):
        raise _not_found()
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
