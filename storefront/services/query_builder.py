"""Translate search parameters into catalog predicates and an ordering.

A search is described by a flat list of clauses that are ANDed together.
Each clause is a small frozen dataclass; ``to_sql`` turns one into a
SQLAlchemy boolean expression for the session's dialect.
"""

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    String,
    and_,
    case,
    false,
    func,
    literal,
    or_,
    select,
    text,
    true,
)
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.category import Category
from storefront.models.product import Product, ProductSize
from storefront.models.supplier import Supplier
from storefront.schemas.search import SearchFilterContext

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\w+")


# === Clauses ===


@dataclass(frozen=True)
class TextMatch:
    """Full-text match of any query word against name and description."""

    term: str


@dataclass(frozen=True)
class TextContains:
    """Case-insensitive substring match against name or description."""

    term: str


@dataclass(frozen=True)
class CategoryIn:
    """Product belongs to one of the given categories."""

    category_ids: tuple[UUID, ...]


@dataclass(frozen=True)
class CategoryEq:
    category_id: UUID


@dataclass(frozen=True)
class SupplierEq:
    supplier_id: UUID


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds; either side may be open."""

    min_price: float | None = None
    max_price: float | None = None


@dataclass(frozen=True)
class SizeEq:
    """At least one size entry carries this label."""

    size: str


@dataclass(frozen=True)
class StockFloor:
    """Aggregate stock strictly above ``minimum``."""

    minimum: int = 0


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of nested clauses."""

    clauses: tuple["Clause", ...]


Clause = (
    TextMatch
    | TextContains
    | CategoryIn
    | CategoryEq
    | SupplierEq
    | PriceRange
    | SizeEq
    | StockFloor
    | AnyOf
)


# === Sorting ===


class SortKey(str, enum.Enum):
    """Sort keys accepted by product search."""

    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NEWEST = "newest"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    RELEVANCE = "relevance"


_SORT_COLUMNS: dict[SortKey, Any] = {
    SortKey.PRICE_ASC: Product.price.asc(),
    SortKey.PRICE_DESC: Product.price.desc(),
    SortKey.NEWEST: Product.created_at.desc(),
    SortKey.NAME_ASC: Product.name.asc(),
    SortKey.NAME_DESC: Product.name.desc(),
}


def resolve_sort(sort: str | None, has_text_search: bool) -> SortKey:
    """Map a requested sort key to the ordering actually used.

    Unknown keys are treated as relevance. Relevance without a text term
    falls back to newest first.
    """
    try:
        key = SortKey(sort) if sort else SortKey.RELEVANCE
    except ValueError:
        key = SortKey.RELEVANCE
    if key is SortKey.RELEVANCE and not has_text_search:
        return SortKey.NEWEST
    return key


# === SQL translation ===


def query_words(term: str) -> list[str]:
    """Split a search term into lower-cased words."""
    return [w.lower() for w in _WORD_RE.findall(term)]


def _document(dialect: str) -> Any:
    name = func.coalesce(Product.name, literal(""))
    description = func.coalesce(Product.description, literal(""))
    if dialect == "postgresql":
        return func.to_tsvector(
            text("'english'::regconfig"), name + literal(" ") + description
        )
    return func.lower(name + literal(" ") + description, type_=String)


def _tsquery(words: list[str]) -> Any:
    # Any word may match, joined as an OR tsquery
    return func.to_tsquery(text("'english'::regconfig"), " | ".join(words))


def text_match_expression(term: str, dialect: str) -> ColumnElement[bool]:
    """Predicate matching products whose name or description contains any word of ``term``.

    PostgreSQL uses the english text-search configuration (stemmed words).
    Other dialects fall back to a substring test per word.
    """
    words = query_words(term)
    if not words:
        return false()
    document = _document(dialect)
    if dialect == "postgresql":
        return document.op("@@")(_tsquery(words))
    return or_(*(document.contains(w, autoescape=True) for w in words))


def relevance_score(term: str, dialect: str) -> ColumnElement[Any]:
    """Score for ordering text matches, higher is better."""
    words = query_words(term)
    if not words:
        return literal(0)
    document = _document(dialect)
    if dialect == "postgresql":
        return func.ts_rank(document, _tsquery(words))
    # Number of distinct query words found
    return sum(
        (case((document.contains(w, autoescape=True), 1), else_=0) for w in dict.fromkeys(words)),
        start=literal(0),
    )


def to_sql(clause: Clause, dialect: str) -> ColumnElement[bool]:
    """Translate one clause into a SQLAlchemy boolean expression."""
    if isinstance(clause, TextMatch):
        return text_match_expression(clause.term, dialect)
    if isinstance(clause, TextContains):
        return or_(
            Product.name.icontains(clause.term, autoescape=True),
            Product.description.icontains(clause.term, autoescape=True),
        )
    if isinstance(clause, CategoryIn):
        return Product.category_id.in_(clause.category_ids)
    if isinstance(clause, CategoryEq):
        return Product.category_id == clause.category_id
    if isinstance(clause, SupplierEq):
        return Product.supplier_id == clause.supplier_id
    if isinstance(clause, PriceRange):
        bounds = [true()]
        if clause.min_price is not None:
            bounds.append(Product.price >= clause.min_price)
        if clause.max_price is not None:
            bounds.append(Product.price <= clause.max_price)
        return and_(*bounds)
    if isinstance(clause, SizeEq):
        return Product.sizes.any(ProductSize.size == clause.size)
    if isinstance(clause, StockFloor):
        return Product.stock > clause.minimum
    if isinstance(clause, AnyOf):
        return or_(*(to_sql(c, dialect) for c in clause.clauses))
    raise TypeError(f"Unsupported clause: {clause!r}")


def all_of(clauses: list[Clause], dialect: str) -> ColumnElement[bool]:
    """AND every clause together. An empty list matches everything."""
    return and_(true(), *(to_sql(c, dialect) for c in clauses))


# === Built query ===


@dataclass
class SearchQuery:
    """Clauses and ordering produced for one search request."""

    clauses: list[Clause] = field(default_factory=list)
    sort: SortKey = SortKey.NEWEST
    text_term: str | None = None

    def where(self, dialect: str) -> ColumnElement[bool]:
        return all_of(self.clauses, dialect)

    def order_by(self, dialect: str) -> list[Any]:
        """ORDER BY expressions, always ending with ``id`` so pages are stable."""
        if self.sort is SortKey.RELEVANCE and self.text_term:
            columns = [
                relevance_score(self.text_term, dialect).desc(),
                Product.created_at.desc(),
            ]
        else:
            columns = [_SORT_COLUMNS.get(self.sort, Product.created_at.desc())]
        return [*columns, Product.id.asc()]


class QueryFilterBuilder:
    """Builds a SearchQuery from request filters, resolving names against the catalog."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def build(self, context: SearchFilterContext) -> SearchQuery:
        """Build the clause list and ordering for a product search.

        Category and supplier names that match nothing are dropped rather
        than narrowing the result to nothing.
        """
        clauses: list[Clause] = []
        term = context.search_query.strip()

        if term:
            category_ids = await self.categories_matching(term)
            clauses.append(AnyOf((TextMatch(term), CategoryIn(tuple(category_ids)))))

        if context.category:
            category_id = await self.resolve_category(context.category)
            if category_id is not None:
                clauses.append(CategoryEq(category_id))

        if context.min_price is not None or context.max_price is not None:
            clauses.append(PriceRange(context.min_price, context.max_price))

        if context.supplier:
            supplier_id = await self.resolve_supplier(context.supplier)
            if supplier_id is not None:
                clauses.append(SupplierEq(supplier_id))

        if context.size:
            clauses.append(SizeEq(context.size.upper()))

        # Color is echoed back to the caller but not filtered on.
        clauses.append(StockFloor())

        return SearchQuery(
            clauses=clauses,
            sort=resolve_sort(context.sort, bool(term)),
            text_term=term or None,
        )

    async def build_facet_clauses(
        self,
        search_query: str | None = None,
        category: str | None = None,
    ) -> list[Clause]:
        """Looser clauses for the facet pass: text and category only."""
        clauses: list[Clause] = []
        if search_query:
            clauses.append(TextContains(search_query))
        if category:
            category_id = await self.resolve_category(category)
            if category_id is not None:
                clauses.append(CategoryEq(category_id))
        return clauses

    async def categories_matching(self, term: str) -> list[UUID]:
        """Ids of categories whose name contains ``term`` (case-insensitive)."""
        stmt = select(Category.id).where(Category.name.icontains(term, autoescape=True))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def resolve_category(self, name: str) -> UUID | None:
        """Case-insensitive exact lookup of a category id by name."""
        stmt = select(Category.id).where(func.lower(Category.name) == name.lower()).limit(1)
        category_id = (await self.db.execute(stmt)).scalar_one_or_none()
        if category_id is None:
            logger.debug("Category filter %r matched nothing; ignoring", name)
        return category_id

    async def resolve_supplier(self, name: str) -> UUID | None:
        """Case-insensitive exact lookup of a supplier id by name.

        Supplier names are not unique; the first match wins.
        """
        stmt = (
            select(Supplier.id)
            .where(func.lower(Supplier.name) == name.lower())
            .order_by(Supplier.created_at)
            .limit(1)
        )
        supplier_id = (await self.db.execute(stmt)).scalar_one_or_none()
        if supplier_id is None:
            logger.debug("Supplier filter %r matched nothing; ignoring", name)
        return supplier_id
