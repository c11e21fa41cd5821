"""Paginated product search over the catalog."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.config import settings
from storefront.models.product import Product
from storefront.schemas.catalog import CategoryRef
from storefront.schemas.search import AppliedFilters, SearchFilterContext, Suggestion
from storefront.services.query_builder import QueryFilterBuilder

logger = logging.getLogger(__name__)

MIN_SUGGESTION_LENGTH = 2


@dataclass
class SearchResultPage:
    """One page of search results."""

    items: list[Product]
    total_count: int
    total_pages: int
    applied_filters: AppliedFilters


class SearchService:
    """Filtered, sorted and paginated product search.

    The page fetch and the total count run concurrently on separate sessions.
    They are not wrapped in a transaction, so a write landing between them can
    make the page and the count disagree slightly.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def search(self, context: SearchFilterContext) -> SearchResultPage:
        """Run a product search.

        Args:
            context: Normalized filters, sort key and pagination. ``page`` and
                ``limit`` are assumed to be validated by the caller.

        Returns:
            SearchResultPage with the requested page and the total match count
        """
        async with self.session_factory() as db:
            dialect = db.get_bind().dialect.name
            query = await QueryFilterBuilder(db).build(context)

        logger.debug(
            "Searching products with %d clauses, sort=%s",
            len(query.clauses),
            query.sort.value,
        )

        where = query.where(dialect)
        items, total_count = await asyncio.gather(
            self._fetch_page(where, query.order_by(dialect), context.page, context.limit),
            self._count(where),
        )

        return SearchResultPage(
            items=items,
            total_count=total_count,
            total_pages=math.ceil(total_count / context.limit),
            applied_filters=AppliedFilters(
                search_query=context.search_query.strip(),
                category=context.category,
                min_price=context.min_price,
                max_price=context.max_price,
                supplier=context.supplier,
                color=context.color,
                size=context.size,
                sort=context.sort,
            ),
        )

    async def suggest(self, q: str | None) -> list[Suggestion]:
        """Autocomplete suggestions for a partial query.

        Queries shorter than two characters return nothing without touching the store.
        """
        if not q or len(q) < MIN_SUGGESTION_LENGTH:
            return []

        page = await self.search(
            SearchFilterContext(search_query=q, page=1, limit=settings.suggestion_limit)
        )
        return [
            Suggestion(
                name=p.name,
                category=CategoryRef.model_validate(p.category),
                price=p.price,
            )
            for p in page.items
        ]

    async def _fetch_page(
        self,
        where: ColumnElement[bool],
        order_by: list[Any],
        page: int,
        limit: int,
    ) -> list[Product]:
        """Fetch one page of products with category, supplier and sizes loaded."""
        stmt = (
            select(Product)
            .where(where)
            .order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def _count(self, where: ColumnElement[bool]) -> int:
        """Count every product matching ``where``, ignoring pagination."""
        stmt = select(func.count()).select_from(Product).where(where)
        async with self.session_factory() as db:
            return (await db.execute(stmt)).scalar() or 0
