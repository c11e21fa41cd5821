"""Pydantic schemas for request/response validation."""

from storefront.schemas.common import BaseSchema, CamelSchema, HealthResponse, PaginatedResponse

__all__ = [
    "BaseSchema",
    "CamelSchema",
    "HealthResponse",
    "PaginatedResponse",
]
