"""Public product search endpoints: results, facets and autocomplete."""

import logging
import math

from fastapi import APIRouter, Query, Request, status

from storefront.core.config import settings
from storefront.core.deps import DBSession, SessionFactory
from storefront.core.errors import ApiError
from storefront.core.rate_limit import limiter
from storefront.schemas.catalog import ProductResponse
from storefront.schemas.search import (
    DEFAULT_SORT,
    FacetResponse,
    Pagination,
    SearchFilterContext,
    SearchResponse,
    SuggestionResponse,
)
from storefront.services.facet_service import FacetService
from storefront.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter()


# === Helpers ===


def _parse_int(value: str | None, default: int) -> int | None:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return None


def _parse_pagination(page: str | None, limit: str | None) -> tuple[int, int]:
    """Parse page/limit, rejecting anything outside page >= 1 and 1 <= limit <= max."""
    page_num = _parse_int(page, 1)
    limit_num = _parse_int(limit, settings.search_default_limit)
    if (
        page_num is None
        or limit_num is None
        or page_num < 1
        or limit_num < 1
        or limit_num > settings.search_max_limit
    ):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid page or limit")
    return page_num, limit_num


def _parse_price(value: str | None, param: str) -> float | None:
    """Parse an optional price bound. Empty strings mean no bound."""
    if not value:
        return None
    try:
        price = float(value)
    except ValueError:
        price = math.nan
    if not math.isfinite(price):
        raise ApiError(status.HTTP_400_BAD_REQUEST, f"Invalid {param}: must be a number")
    return price


# === Endpoints ===


@router.get(
    "",
    response_model=SearchResponse,
    summary="Search products",
)
async def search_products(
    session_factory: SessionFactory,
    q: str | None = Query(None, description="Free-text query"),
    category: str | None = Query(None, description="Category name"),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    supplier: str | None = Query(None, description="Supplier name"),
    color: str | None = Query(None, description="Accepted and echoed, not filtered on"),
    size: str | None = Query(None, description="Size label, e.g. M"),
    sort: str | None = Query(
        None, description="price-asc, price-desc, newest, name-asc, name-desc or relevance"
    ),
    page: str | None = Query(None, description="Page number, from 1"),
    limit: str | None = Query(None, description="Page size, 1 to the configured maximum"),
) -> SearchResponse:
    """Search in-stock products with optional filters, sorting and pagination."""
    page_num, limit_num = _parse_pagination(page, limit)
    context = SearchFilterContext(
        search_query=q or "",
        category=category,
        min_price=_parse_price(min_price, "minPrice"),
        max_price=_parse_price(max_price, "maxPrice"),
        supplier=supplier,
        color=color,
        size=size,
        sort=sort or DEFAULT_SORT,
        page=page_num,
        limit=limit_num,
    )

    try:
        results = await SearchService(session_factory).search(context)
    except Exception as exc:
        logger.exception("Search failed")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error during search",
        ) from exc

    return SearchResponse(
        data=[ProductResponse.model_validate(p) for p in results.items],
        pagination=Pagination(
            current_page=page_num,
            total_pages=results.total_pages,
            total_products=results.total_count,
            has_next=page_num < results.total_pages,
            has_prev=page_num > 1,
            limit=limit_num,
        ),
        filters=results.applied_filters,
        message=f"Found {results.total_count} products matching your search",
    )


@router.get(
    "/filters",
    response_model=FacetResponse,
    summary="Get available filter options",
)
async def get_filter_options(
    db: DBSession,
    q: str | None = Query(None, description="Free-text query"),
    category: str | None = Query(None, description="Category name"),
    supplier: str | None = Query(None),  # noqa: ARG001 - accepted, unused by the facet pass
    color: str | None = Query(None),  # noqa: ARG001
    size: str | None = Query(None),  # noqa: ARG001
) -> FacetResponse:
    """Facet values (categories, suppliers, sizes, colors, price range) for the current search."""
    try:
        facets = await FacetService(db).get_filter_options(search_query=q, category=category)
    except Exception as exc:
        logger.exception("Get filter options failed")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error") from exc

    return FacetResponse(data=facets, message="Filter options retrieved successfully")


@router.get(
    "/suggestions",
    response_model=SuggestionResponse,
    summary="Autocomplete suggestions",
)
@limiter.limit(settings.suggestion_rate_limit)
async def get_suggestions(
    request: Request,  # noqa: ARG001 - required by slowapi
    session_factory: SessionFactory,
    q: str | None = Query(None, description="Partial query, at least 2 characters"),
) -> SuggestionResponse:
    """Up to five matching products as ``{name, category, price}``."""
    if not q or len(q) < 2:
        return SuggestionResponse(data=[], message="Query too short")

    try:
        suggestions = await SearchService(session_factory).suggest(q)
    except Exception as exc:
        logger.exception("Suggestions failed")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error") from exc

    return SuggestionResponse(data=suggestions, message="Suggestions retrieved successfully")
