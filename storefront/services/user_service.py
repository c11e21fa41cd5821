"""User account service."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.security import hash_password, verify_password
from storefront.models.user import User, UserRole
from storefront.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing user accounts and checking credentials."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        """Look up a user by email (stored lower-cased)."""
        result = await self.db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at, User.id))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_subject(self, subject: str) -> User | None:
        """Resolve a token ``sub`` claim; malformed ids resolve to None."""
        try:
            user_id = UUID(subject)
        except ValueError:
            return None
        return await self.get_user(user_id)

    async def create_user(self, data: UserCreate, role: UserRole = UserRole.CUSTOMER) -> User:
        """Create a user, hashing the password. Callers check the email is free."""
        user = User(
            role=role,
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            avatar=data.avatar,
            password_hash=hash_password(data.password),
        )
        self.db.add(user)
        await self.db.flush()
        logger.info("Created %s user %s", role.value, user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the email and password match, else None."""
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def update_user(self, user_id: UUID, data: UserUpdate) -> User | None:
        """Apply the fields present in ``data``; a new password is re-hashed."""
        user = await self.get_user(user_id)
        if not user:
            return None

        update_data = data.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        role = update_data.pop("role", None)
        for field, value in update_data.items():
            if value is None and field != "avatar":
                continue
            setattr(user, field, value.strip() if isinstance(value, str) else value)
        if role is not None:
            user.role = role
        if password:
            user.password_hash = hash_password(password)

        await self.db.flush()
        return user

    async def delete_user(self, user_id: UUID) -> bool:
        user = await self.get_user(user_id)
        if not user:
            return False

        await self.db.delete(user)
        await self.db.flush()
        return True
