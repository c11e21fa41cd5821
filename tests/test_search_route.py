"""Tests for the public search endpoints.

Covers:
- GET /api/v1/search (envelope, pagination, parameter validation, error mapping)
- GET /api/v1/search/filters
- GET /api/v1/search/suggestions
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from storefront.core.config import settings
from storefront.models.category import Category

SEARCH_URL = "/api/v1/search"


class TestSearchEndpoint:
    """Tests for GET /api/v1/search."""

    @pytest.mark.asyncio
    async def test_envelope_shape(
        self,
        client: AsyncClient,
        product_factory: Callable[..., Any],
    ) -> None:
        """A search returns data, pagination and echoed filters."""
        await product_factory(name="Red Hoodie", price=39.99)

        response = await client.get(SEARCH_URL, params={"q": "red", "minPrice": "10"})
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Found 1 products matching your search"
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalProducts": 1,
            "hasNext": False,
            "hasPrev": False,
            "limit": 20,
        }
        assert body["filters"]["searchQuery"] == "red"
        assert body["filters"]["minPrice"] == 10
        assert body["filters"]["maxPrice"] is None
        assert body["filters"]["sort"] == "relevance"

        item = body["data"][0]
        assert item["name"] == "Red Hoodie"
        assert item["price"] == 39.99
        assert item["category"]["name"] == "Hoodies"
        assert item["supplier"]["name"] == "Northwind"
        assert item["sizes"] == [{"size": "M", "stock": 10}]

    @pytest.mark.asyncio
    async def test_pagination_flags(
        self,
        client: AsyncClient,
        product_factory: Callable[..., Any],
    ) -> None:
        """Middle pages report both next and previous."""
        for i in range(5):
            await product_factory(name=f"Tee {i}", price=10.0 + i)

        response = await client.get(
            SEARCH_URL, params={"sort": "price-asc", "page": "2", "limit": "2"}
        )
        assert response.status_code == 200

        body = response.json()
        assert [p["price"] for p in body["data"]] == [12.0, 13.0]
        assert body["pagination"]["totalPages"] == 3
        assert body["pagination"]["hasNext"] is True
        assert body["pagination"]["hasPrev"] is True

    @pytest.mark.asyncio
    async def test_out_of_stock_hidden(
        self,
        client: AsyncClient,
        product_factory: Callable[..., Any],
    ) -> None:
        """Out-of-stock products never appear in search."""
        await product_factory(name="Sold Out", stock=0)

        response = await client.get(SEARCH_URL, params={"minPrice": "0", "maxPrice": "100"})
        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["pagination"]["totalProducts"] == 0

    @pytest.mark.asyncio
    async def test_limit_over_max_rejected_before_search(self, client: AsyncClient) -> None:
        """An oversized page is rejected without touching the catalog."""
        with patch("storefront.api.v1.search.SearchService") as service_cls:
            service_cls.return_value.search = AsyncMock()
            response = await client.get(SEARCH_URL, params={"limit": "150"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid page or limit"}
        service_cls.return_value.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_limit_follows_configured_max(
        self,
        client: AsyncClient,
        product_factory: Callable[..., Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Raising search_max_limit lets larger pages through."""
        monkeypatch.setattr(settings, "search_max_limit", 150)
        await product_factory()

        response = await client.get(SEARCH_URL, params={"limit": "150"})
        assert response.status_code == 200
        assert response.json()["pagination"]["limit"] == 150

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [{"page": "0"}, {"page": "-1"}, {"limit": "0"}, {"page": "two"}, {"limit": "1.5"}],
    )
    async def test_invalid_pagination(self, client: AsyncClient, params: dict[str, str]) -> None:
        """Malformed page or limit gets 400."""
        response = await client.get(SEARCH_URL, params=params)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid page or limit"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("param", "value"),
        [("minPrice", "abc"), ("maxPrice", "nan"), ("minPrice", "inf")],
    )
    async def test_invalid_price(self, client: AsyncClient, param: str, value: str) -> None:
        """Non-numeric or non-finite prices get 400."""
        response = await client.get(SEARCH_URL, params={param: value})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": f"Invalid {param}: must be a number",
        }

    @pytest.mark.asyncio
    async def test_empty_price_is_no_bound(
        self,
        client: AsyncClient,
        product_factory: Callable[..., Any],
    ) -> None:
        """Empty price params mean no bound."""
        await product_factory()

        response = await client.get(SEARCH_URL, params={"minPrice": "", "maxPrice": ""})
        assert response.status_code == 200
        assert response.json()["pagination"]["totalProducts"] == 1

    @pytest.mark.asyncio
    async def test_store_failure_maps_to_500(self, client: AsyncClient) -> None:
        """Unexpected search errors map to a 500 envelope."""
        with patch("storefront.api.v1.search.SearchService") as service_cls:
            service_cls.return_value.search = AsyncMock(side_effect=RuntimeError("db down"))
            response = await client.get(SEARCH_URL, params={"q": "red"})

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Internal server error during search",
        }


class TestFiltersEndpoint:
    """Tests for GET /api/v1/search/filters."""

    @pytest.mark.asyncio
    async def test_envelope_shape(
        self,
        client: AsyncClient,
        category: Category,
        product_factory: Callable[..., Any],
    ) -> None:
        """Filter options come back in the camelCase envelope."""
        await product_factory(name="Red Hoodie", price=19.5, sizes=[("L", 1), ("S", 2)])

        response = await client.get(f"{SEARCH_URL}/filters", params={"q": "hoodie"})
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Filter options retrieved successfully"

        data = body["data"]
        assert data["categories"] == [
            {"id": str(category.id), "name": "Hoodies", "isSelected": False}
        ]
        assert data["suppliers"] == ["Northwind"]
        assert data["sizes"] == ["S", "L"]
        assert data["colors"] == ["Red"]
        assert data["priceRange"] == {"min": 19, "max": 20}
        assert data["totalMatched"] == 1

    @pytest.mark.asyncio
    async def test_no_matches_default_range(self, client: AsyncClient) -> None:
        """No matches gives the default price range."""
        response = await client.get(f"{SEARCH_URL}/filters", params={"q": "nothing"})
        assert response.status_code == 200
        assert response.json()["data"]["priceRange"] == {"min": 0, "max": 1000}

    @pytest.mark.asyncio
    async def test_failure_maps_to_500(self, client: AsyncClient) -> None:
        """Unexpected facet errors map to a 500 envelope."""
        with patch("storefront.api.v1.search.FacetService") as service_cls:
            service_cls.return_value.get_filter_options = AsyncMock(side_effect=RuntimeError)
            response = await client.get(f"{SEARCH_URL}/filters")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}


class TestSuggestionsEndpoint:
    """Tests for GET /api/v1/search/suggestions."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "r"}])
    async def test_short_query(self, client: AsyncClient, params: dict[str, str]) -> None:
        """Queries under two characters return no suggestions."""
        response = await client.get(f"{SEARCH_URL}/suggestions", params=params)
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "message": "Query too short"}

    @pytest.mark.asyncio
    async def test_returns_suggestions(
        self,
        client: AsyncClient,
        category: Category,
        product_factory: Callable[..., Any],
    ) -> None:
        """Suggestions carry name, price and category."""
        await product_factory(name="Red Hoodie", price=39.99)

        response = await client.get(f"{SEARCH_URL}/suggestions", params={"q": "red"})
        assert response.status_code == 200

        body = response.json()
        assert body["message"] == "Suggestions retrieved successfully"
        assert body["data"] == [
            {
                "name": "Red Hoodie",
                "category": {"id": str(category.id), "name": "Hoodies"},
                "price": 39.99,
            }
        ]
