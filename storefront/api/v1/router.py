"""API v1 router combining all route modules."""

from fastapi import APIRouter

from storefront.api.v1 import auth, categories, health, products, search, suppliers, users

api_router = APIRouter()

# Include health check routes (no prefix)
api_router.include_router(health.router)

# Product search, facets and autocomplete (public)
api_router.include_router(
    search.router,
    prefix="/search",
    tags=["search"],
)

# Catalog management (reads public, writes admin-only)
api_router.include_router(
    products.router,
    prefix="/products",
    tags=["products"],
)

api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"],
)

api_router.include_router(
    suppliers.router,
    prefix="/suppliers",
    tags=["suppliers"],
)

# Accounts
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
)
