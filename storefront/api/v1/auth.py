"""Account registration, login and token refresh."""

import logging

from fastapi import APIRouter, HTTPException, status

from storefront.core.auth import CurrentUser, create_token, verify_token
from storefront.core.deps import DBSession
from storefront.schemas.user import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterResponse,
    UserCreate,
    UserResponse,
)
from storefront.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer account",
)
async def register(data: UserCreate, db: DBSession) -> RegisterResponse:
    """Create a customer account. Admins are created through /users."""
    service = UserService(db)
    if await service.find_by_email(data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    user = await service.create_user(data)
    await db.commit()
    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse, summary="Log in")
async def login(data: LoginRequest, db: DBSession) -> LoginResponse:
    """Exchange email and password for an access token and a refresh token."""
    user = await UserService(db).authenticate(data.email, data.password)
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return LoginResponse(
        message="Login successful",
        access_token=create_token(user, "access"),
        refresh_token=create_token(user, "refresh"),
        user=UserResponse.model_validate(user),
    )


@router.post("/refresh-token", response_model=RefreshResponse, summary="Refresh an access token")
async def refresh_token(data: RefreshRequest, db: DBSession) -> RefreshResponse:
    """Issue a new access token for a valid refresh token."""
    payload = verify_token(data.refresh_token, expected_type="refresh")
    user = await UserService(db).get_user_by_subject(payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    return RefreshResponse(
        message="Token refreshed successfully",
        access_token=create_token(user, "access"),
    )


@router.get("/me", response_model=UserResponse, summary="Current user")
async def me(user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(user)
