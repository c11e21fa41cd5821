"""User account management endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Response, status

from storefront.core.auth import AdminUser, CurrentUser
from storefront.core.deps import DBSession
from storefront.models.user import User
from storefront.schemas.user import AdminUserCreate, UserResponse, UserUpdate
from storefront.services.user_service import UserService

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found",
    )


def _ensure_self_or_admin(user: User, user_id: UUID) -> None:
    if user.id != user_id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access this user",
        )


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(db: DBSession, _admin: AdminUser) -> list[UserResponse]:
    """All users, oldest first. Admin only."""
    users = await UserService(db).list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(user_id: UUID, db: DBSession, user: CurrentUser) -> UserResponse:
    """A user's own profile, or any profile for admins."""
    _ensure_self_or_admin(user, user_id)
    found = await UserService(db).get_user(user_id)
    if not found:
        raise _not_found()
    return UserResponse.model_validate(found)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(data: AdminUserCreate, db: DBSession, _admin: AdminUser) -> UserResponse:
    """Create an account with any role. Admin only."""
    service = UserService(db)
    if await service.find_by_email(data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    created = await service.create_user(data, role=data.role)
    await db.commit()
    return UserResponse.model_validate(created)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: DBSession,
    user: CurrentUser,
) -> UserResponse:
    """Update a profile. Users may edit themselves; only admins may change roles."""
    _ensure_self_or_admin(user, user_id)
    if data.role is not None and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )

    updated = await UserService(db).update_user(user_id, data)
    if not updated:
        raise _not_found()
    await db.commit()
    return UserResponse.model_validate(updated)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(user_id: UUID, db: DBSession, _admin: AdminUser) -> Response:
    if not await UserService(db).delete_user(user_id):
        raise _not_found()
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
