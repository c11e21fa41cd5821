"""Tests for the category endpoints."""

import uuid
from collections.abc import Callable
from typing import Any

import pytest
from httpx import AsyncClient

from storefront.models.category import Category

URL = "/api/v1/categories"


class TestListCategories:
    """Tests for listing categories."""

    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient) -> None:
        """An empty catalog lists no categories."""
        response = await client.get(URL)
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_sorted_by_name(
        self, client: AsyncClient, category_factory: Callable[..., Any]
    ) -> None:
        """Categories are listed by name with only id and name."""
        await category_factory(name="Jackets")
        await category_factory(name="Caps")

        response = await client.get(URL)
        assert [c["name"] for c in response.json()] == ["Caps", "Jackets"]
        assert set(response.json()[0].keys()) == {"id", "name"}


class TestCreateCategory:
    """Tests for creating categories."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient) -> None:
        """Creating a category trims its name."""
        response = await client.post(URL, json={"name": "  Jackets "})
        assert response.status_code == 201

        data = response.json()
        assert data["name"] == "Jackets"
        assert "id" in data
        assert "created_at" in data

    @pytest.mark.asyncio
    async def test_duplicate_name_any_case(self, client: AsyncClient, category: Category) -> None:
        """Category names are unique regardless of case."""
        response = await client.post(URL, json={"name": category.name.upper()})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, client: AsyncClient) -> None:
        """A whitespace-only name is rejected."""
        response = await client.post(URL, json={"name": "   "})
        assert response.status_code == 422


class TestGetCategory:
    """Tests for fetching a category."""

    @pytest.mark.asyncio
    async def test_get(self, client: AsyncClient, category: Category) -> None:
        """A category is fetched by id."""
        response = await client.get(f"{URL}/{category.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Hoodies"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        """An unknown id gets 404."""
        response = await client.get(f"{URL}/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"] == "Category not found"


class TestUpdateCategory:
    """Tests for renaming categories."""

    @pytest.mark.asyncio
    async def test_rename(self, client: AsyncClient, category: Category) -> None:
        """A category can be renamed."""
        response = await client.patch(f"{URL}/{category.id}", json={"name": "Sweatshirts"})
        assert response.status_code == 200
        assert response.json()["name"] == "Sweatshirts"

    @pytest.mark.asyncio
    async def test_change_case_of_own_name(self, client: AsyncClient, category: Category) -> None:
        """Renaming to a different casing of the same name is not a conflict."""
        response = await client.patch(f"{URL}/{category.id}", json={"name": "HOODIES"})
        assert response.status_code == 200
        assert response.json()["name"] == "HOODIES"

    @pytest.mark.asyncio
    async def test_conflict(
        self,
        client: AsyncClient,
        category: Category,
        category_factory: Callable[..., Any],
    ) -> None:
        """Renaming onto another category's name conflicts."""
        await category_factory(name="Jackets")
        response = await client.patch(f"{URL}/{category.id}", json={"name": "jackets"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        """Renaming an unknown id gets 404."""
        response = await client.patch(f"{URL}/{uuid.uuid4()}", json={"name": "Anything"})
        assert response.status_code == 404


class TestDeleteCategory:
    """Tests for deleting categories."""

    @pytest.mark.asyncio
    async def test_delete_unused(self, client: AsyncClient, category: Category) -> None:
        """A category with no products can be deleted."""
        response = await client.delete(f"{URL}/{category.id}")
        assert response.status_code == 204

        response = await client.get(f"{URL}/{category.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_in_use_conflict(
        self,
        client: AsyncClient,
        category: Category,
        product_factory: Callable[..., Any],
    ) -> None:
        """A category referenced by a product cannot be deleted."""
        await product_factory()

        response = await client.delete(f"{URL}/{category.id}")
        assert response.status_code == 409
        assert response.json()["detail"] == "Category is used by 1 products"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        """Deleting an unknown id gets 404."""
        response = await client.delete(f"{URL}/{uuid.uuid4()}")
        assert response.status_code == 404
