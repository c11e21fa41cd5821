"""Refinement facets (categories, suppliers, sizes, colors, price) for a search."""

import logging
import math
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas.search import CategoryFacet, FacetOptionSet, PriceRange
from storefront.services.query_builder import QueryFilterBuilder, all_of

logger = logging.getLogger(__name__)

SIZE_ORDER = ["XS", "S", "M", "L", "XL", "XXL"]

# Price range reported when nothing matches
DEFAULT_PRICE_RANGE = (0, 1000)

# Base color -> words that indicate it in a product's name or description
COLOR_SYNONYMS: dict[str, list[str]] = {
    "red": ["red", "crimson", "scarlet", "burgundy", "maroon"],
    "blue": ["blue", "navy", "azure", "cobalt", "sapphire"],
    "green": ["green", "emerald", "olive", "lime", "forest"],
    "yellow": ["yellow", "gold", "amber", "mustard"],
    "black": ["black", "ebony", "charcoal", "jet"],
    "white": ["white", "ivory", "cream", "pearl"],
    "pink": ["pink", "rose", "magenta", "fuchsia"],
    "purple": ["purple", "violet", "lavender", "plum"],
    "orange": ["orange", "coral", "peach", "tangerine"],
    "brown": ["brown", "tan", "beige", "khaki", "camel"],
    "gray": ["gray", "grey", "silver", "slate"],
}


def extract_product_colors(name: str | None, description: str | None) -> list[str]:
    """Guess a product's colors from its text.

    This is a plain substring test, so "tangerine" also reads as tan and
    "jetty" as black. Treat the output as a hint, not a taxonomy.
    """
    text = f"{name or ''} {description or ''}".lower()
    return [
        base.capitalize()
        for base, synonyms in COLOR_SYNONYMS.items()
        if any(word in text for word in synonyms)
    ]


def sort_sizes(sizes: Iterable[str]) -> list[str]:
    """Order size labels XS..XXL; labels outside that run follow in name order."""
    rank = {label: i for i, label in enumerate(SIZE_ORDER)}
    return sorted(sizes, key=lambda s: (rank.get(s, len(SIZE_ORDER)), s))


class FacetService:
    """Computes the refinement panel shown next to search results."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_filter_options(
        self,
        search_query: str | None = None,
        category: str | None = None,
    ) -> FacetOptionSet:
        """Collect facet values over every product matching the text and category.

        Price, supplier, size and stock filters are deliberately not applied, and
        every matching product is loaded so the price range covers the whole set.

        Args:
            search_query: Free text matched as a substring of name or description
            category: Category name (case-insensitive exact); unknown names are ignored

        Returns:
            FacetOptionSet; empty lists and the default price range when nothing matches
        """
        dialect = self.db.get_bind().dialect.name
        clauses = await QueryFilterBuilder(self.db).build_facet_clauses(search_query, category)

        result = await self.db.execute(select(Product).where(all_of(clauses, dialect)))
        products = list(result.scalars().all())

        categories = await self._category_options(search_query, category)
        facets = self.aggregate(products)
        facets.categories = categories

        logger.debug("Computed facets over %d products", facets.total_matched)
        return facets

    @staticmethod
    def aggregate(products: Iterable[Product]) -> FacetOptionSet:
        """Single pass over products collecting suppliers, sizes, colors and prices."""
        suppliers: set[str] = set()
        sizes: set[str] = set()
        colors: set[str] = set()
        min_price = math.inf
        max_price = -math.inf
        total = 0

        for product in products:
            total += 1
            if product.supplier is not None:
                suppliers.add(product.supplier.name)
            for entry in product.sizes:
                if entry.size:
                    sizes.add(entry.size)
            min_price = min(min_price, product.price)
            max_price = max(max_price, product.price)
            colors.update(extract_product_colors(product.name, product.description))

        if total:
            price_range = PriceRange(min=math.floor(min_price), max=math.ceil(max_price))
        else:
            price_range = PriceRange(min=DEFAULT_PRICE_RANGE[0], max=DEFAULT_PRICE_RANGE[1])

        return FacetOptionSet(
            suppliers=sorted(suppliers),
            sizes=sort_sizes(sizes),
            colors=sorted(colors),
            price_range=price_range,
            total_matched=total,
        )

    async def _category_options(
        self,
        search_query: str | None,
        category: str | None,
    ) -> list[CategoryFacet]:
        """Every category, flagged when it equals the requested category or else the query."""
        result = await self.db.execute(select(Category).order_by(Category.name))
        selected = (category or search_query or "").lower()
        return [
            CategoryFacet(
                id=c.id,
                name=c.name,
                is_selected=bool(selected) and c.name.lower() == selected,
            )
            for c in result.scalars().all()
        ]
