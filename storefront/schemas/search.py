"""Pydantic schemas for product search, facets and suggestions."""

from uuid import UUID

from pydantic import BaseModel, Field

from storefront.schemas.catalog import CategoryRef, ProductResponse
from storefront.schemas.common import CamelSchema

DEFAULT_SORT = "relevance"


class SearchFilterContext(BaseModel):
    """Normalized search parameters for a single request."""

    search_query: str = ""
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    supplier: str | None = None
    color: str | None = None
    size: str | None = None
    sort: str = DEFAULT_SORT
    page: int = Field(1, ge=1)
    # Upper bound is enforced by the route against settings.search_max_limit
    limit: int = Field(20, ge=1)


class AppliedFilters(CamelSchema):
    """Filters echoed back with search results so the UI can restore its state."""

    search_query: str = ""
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    supplier: str | None = None
    color: str | None = None
    size: str | None = None
    sort: str = DEFAULT_SORT


class Pagination(CamelSchema):
    """Pagination block of a search response."""

    current_page: int
    total_pages: int
    total_products: int
    has_next: bool
    has_prev: bool
    limit: int


class SearchResponse(CamelSchema):
    """Response from GET /search."""

    success: bool = True
    data: list[ProductResponse]
    pagination: Pagination
    filters: AppliedFilters
    message: str


# === Facets ===


class CategoryFacet(CamelSchema):
    """A category option; ``is_selected`` highlights the active one."""

    id: UUID
    name: str
    is_selected: bool = False


class PriceRange(CamelSchema):
    """Whole-number price bounds over the matched products."""

    min: int = 0
    max: int = 1000


class FacetOptionSet(CamelSchema):
    """Refinement options available for the current search."""

    categories: list[CategoryFacet] = []
    suppliers: list[str] = []
    sizes: list[str] = []
    colors: list[str] = []
    price_range: PriceRange = Field(default_factory=PriceRange)
    total_matched: int = 0


class FacetResponse(CamelSchema):
    """Response from GET /search/filters."""

    success: bool = True
    data: FacetOptionSet
    message: str


# === Suggestions ===


class Suggestion(CamelSchema):
    """Autocomplete entry."""

    name: str
    category: CategoryRef
    price: float


class SuggestionResponse(CamelSchema):
    """Response from GET /search/suggestions."""

    success: bool = True
    data: list[Suggestion]
    message: str
