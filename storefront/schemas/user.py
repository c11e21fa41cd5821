"""Pydantic schemas for user accounts and authentication."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from storefront.models.user import UserRole
from storefront.schemas.common import BaseSchema, CamelSchema

# === User Schemas ===


class UserBase(BaseSchema):
    """Profile fields shared by create and response schemas."""

    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1)
    avatar: str | None = None

    @field_validator("name", "phone", "address")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserCreate(UserBase):
    """Registration payload."""

    password: str = Field(..., min_length=6, max_length=128)


class AdminUserCreate(UserCreate):
    """Account created by an admin, who may choose the role."""

    role: UserRole = UserRole.CUSTOMER


class UserUpdate(BaseSchema):
    """Profile update. Only provided fields change; ``role`` is admin-only."""

    name: str | None = Field(default=None, min_length=2, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    address: str | None = Field(default=None, min_length=1)
    avatar: str | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    role: UserRole | None = None


class UserResponse(UserBase):
    """A user without the password hash."""

    id: UUID
    role: UserRole
    created_at: datetime


# === Auth Schemas ===


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RefreshRequest(CamelSchema):
    """Body of POST /auth/refresh-token (``refreshToken``)."""

    refresh_token: str = Field(..., min_length=1)


class RegisterResponse(BaseSchema):
    message: str
    user: UserResponse


class LoginResponse(CamelSchema):
    """Tokens are returned as ``accessToken`` / ``refreshToken``."""

    message: str
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class RefreshResponse(CamelSchema):
    message: str
    access_token: str
    token_type: str = "bearer"
