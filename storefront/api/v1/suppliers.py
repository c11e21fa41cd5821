"""Supplier management endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status

from storefront.core.auth import AdminUser
from storefront.core.deps import DBSession
from storefront.schemas.catalog import (
    SupplierCreate,
    SupplierRef,
    SupplierResponse,
    SupplierUpdate,
)
from storefront.services.supplier_service import SupplierService

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Supplier not found",
    )


@router.get("", response_model=list[SupplierRef], summary="List suppliers")
async def list_suppliers(db: DBSession) -> list[SupplierRef]:
    suppliers = await SupplierService(db).list_suppliers()
    return [SupplierRef.model_validate(s) for s in suppliers]


@router.get("/{supplier_id}", response_model=SupplierResponse, summary="Get a supplier")
async def get_supplier(supplier_id: UUID, db: DBSession) -> SupplierResponse:
    supplier = await SupplierService(db).get_supplier(supplier_id)
    if not supplier:
        raise _not_found()
    return SupplierResponse.model_validate(supplier)


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a supplier",
)
async def create_supplier(
    data: SupplierCreate,
    db: DBSession,
    _admin: AdminUser,
) -> SupplierResponse:
    supplier = await SupplierService(db).create_supplier(data)
    await db.commit()
    return SupplierResponse.model_validate(supplier)


@router.patch("/{supplier_id}", response_model=SupplierResponse, summary="Update a supplier")
async def update_supplier(
    supplier_id: UUID,
    data: SupplierUpdate,
    db: DBSession,
    _admin: AdminUser,
) -> SupplierResponse:
    supplier = await SupplierService(db).update_supplier(supplier_id, data)
    if not supplier:
        raise _not_found()
    await db.commit()
    return SupplierResponse.model_validate(supplier)


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a supplier",
)
async def delete_supplier(supplier_id: UUID, db: DBSession, _admin: AdminUser) -> Response:
    """Delete a supplier that no product references."""
    service = SupplierService(db)
    in_use = await service.count_products(supplier_id)
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Supplier is used by {in_use} products",
        )

    if not await service.delete_supplier(supplier_id):
        raise _not_found()
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
