"""JWT authentication for FastAPI using locally signed HS256 tokens."""

from datetime import UTC, datetime, timedelta
from typing import Annotated, Any, Literal

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.core.config import settings
from storefront.core.deps import DBSession
from storefront.models.user import User
from storefront.services.user_service import UserService

TokenType = Literal["access", "refresh"]

# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_token(user: User, token_type: TokenType) -> str:
    """Sign a token carrying the user id (``sub``) and role.

    Access tokens live ``access_token_expire_minutes``; refresh tokens live
    ``refresh_token_expire_days``.
    """
    now = datetime.now(UTC)
    if token_type == "access":
        expires = now + timedelta(minutes=settings.access_token_expire_minutes)
    else:
        expires = now + timedelta(days=settings.refresh_token_expire_days)

    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "type": token_type,
        "iat": now,
        "exp": expires,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, expected_type: TokenType = "access") -> dict[str, Any]:
    """Verify a token's signature, expiry and type.

    Raises:
        HTTPException: 401 if the token is invalid, expired or of the wrong type
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {e}") from e

    if payload.get("type") != expected_type:
        raise _unauthorized("Invalid token type")
    return payload


async def get_current_user(
    db: DBSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer access token to a user.

    Raises:
        HTTPException: 401 if no token is sent, the token is invalid, or it
            does not name an existing user
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = verify_token(credentials.credentials)
    user = await UserService(db).get_user_by_subject(payload["sub"])
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only admins through.

    Raises:
        HTTPException: 403 for authenticated non-admin users
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
