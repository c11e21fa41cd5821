# ruff: noqa: E402
"""Pytest configuration and fixtures for the storefront API test suite.

Provides:
- A fresh SQLite (aiosqlite) database file per test, built from the models
- Session and session-factory fixtures bound to that database
- An admin-authenticated async HTTP client and an unauthenticated one
- Disabled rate limiting
- Model factory fixtures for Category, Supplier, Product and User
"""

import os

# Settings are read at import time; keep the app's own engine off PostgreSQL.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
# Full-strength password hashing only slows the suite down.
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from collections.abc import AsyncGenerator, Callable
from datetime import datetime
from typing import Any
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from storefront.core.auth import create_token, get_current_user
from storefront.core.database import get_async_session, get_session_factory
from storefront.core.deps import get_db
from storefront.core.rate_limit import limiter
from storefront.core.security import hash_password
from storefront.main import app
from storefront.models import Base, Category, Product, ProductSize, Supplier, User, UserRole

# ---------------------------------------------------------------------------
# Disable rate limiting globally for tests
# ---------------------------------------------------------------------------
limiter.enabled = False


# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def engine(tmp_path: Any) -> AsyncGenerator[AsyncEngine, None]:
    """A throwaway SQLite database with all tables created.

    A file (not :memory:) so that the concurrent page and count queries,
    which each open their own connection, see the same data. NullPool
    gives every session a fresh connection.
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for test setup (factory fixtures) and direct service calls."""
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------


def _override_database(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Point the session and session-factory dependencies at the test database."""

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as s:
            yield s

    def _override_session_factory() -> async_sessionmaker[AsyncSession]:
        return session_factory

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_db] = _override_session
    app.dependency_overrides[get_session_factory] = _override_session_factory


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    admin_user: User,
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client authenticated as ``admin_user`` (token check bypassed)."""

    async def _override_user() -> User:
        return admin_user

    _override_database(session_factory)
    app.dependency_overrides[get_current_user] = _override_user

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unauthed_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the test database. Auth is NOT overridden."""
    _override_database(session_factory)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def plain_client() -> AsyncGenerator[AsyncClient, None]:
    """Minimal async test client with NO dependency overrides."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# Model Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def category_factory(db_session: AsyncSession) -> Callable[..., Any]:
    """Factory that creates Category instances."""

    async def _create(*, name: str = "Hoodies") -> Category:
        category = Category(name=name)
        db_session.add(category)
        await db_session.commit()
        return category

    return _create


@pytest.fixture
def supplier_factory(db_session: AsyncSession) -> Callable[..., Any]:
    """Factory that creates Supplier instances."""

    async def _create(
        *,
        name: str = "Northwind",
        description: str = "Test supplier",
        supplier_img: str | None = None,
    ) -> Supplier:
        supplier = Supplier(name=name, description=description, supplier_img=supplier_img)
        db_session.add(supplier)
        await db_session.commit()
        return supplier

    return _create


@pytest.fixture
def product_factory(
    db_session: AsyncSession,
    category: Category,
    supplier: Supplier,
) -> Callable[..., Any]:
    """Factory that creates Product instances.

    Defaults to the ``category`` and ``supplier`` fixtures.
    """

    async def _create(
        *,
        name: str = "Test Product",
        description: str = "A test product description",
        price: float = 25.0,
        stock: int = 10,
        category_id: UUID | None = None,
        supplier_id: UUID | None = None,
        sizes: list[tuple[str, int]] | None = None,
        created_at: datetime | None = None,
        img_url: str = "https://example.com/product.jpg",
    ) -> Product:
        product = Product(
            name=name,
            description=description,
            price=price,
            stock=stock,
            category_id=category_id or category.id,
            supplier_id=supplier_id or supplier.id,
            img_url=img_url,
            sizes=[ProductSize(size=s, stock=q) for s, q in (sizes or [("M", stock)])],
        )
        if created_at is not None:
            product.created_at = created_at
        db_session.add(product)
        await db_session.commit()
        return product

    return _create


TEST_PASSWORD = "secret-pass"


@pytest.fixture
def user_factory(db_session: AsyncSession) -> Callable[..., Any]:
    """Factory that creates User instances with password ``TEST_PASSWORD``."""

    async def _create(
        *,
        email: str = "shopper@example.com",
        name: str = "Sam Shopper",
        role: UserRole = UserRole.CUSTOMER,
        password: str = TEST_PASSWORD,
    ) -> User:
        user = User(
            email=email,
            name=name,
            role=role,
            phone="+1 555 0100",
            address="1 Market Street",
            password_hash=hash_password(password),
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


# ---------------------------------------------------------------------------
# Convenience fixtures (pre-built models)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def category(category_factory: Callable[..., Any]) -> Category:
    """The default category, "Hoodies"."""
    return await category_factory()


@pytest_asyncio.fixture
async def supplier(supplier_factory: Callable[..., Any]) -> Supplier:
    """The default supplier, "Northwind"."""
    return await supplier_factory()


@pytest_asyncio.fixture
async def admin_user(user_factory: Callable[..., Any]) -> User:
    """An admin account; the default ``client`` acts as this user."""
    return await user_factory(email="admin@example.com", name="Ada Admin", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def customer(user_factory: Callable[..., Any]) -> User:
    """A customer account."""
    return await user_factory()


@pytest.fixture
def user_password() -> str:
    """The password every ``user_factory`` account is created with."""
    return TEST_PASSWORD


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Builds an Authorization header carrying a real access token for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(user, 'access')}"}

    return _headers
