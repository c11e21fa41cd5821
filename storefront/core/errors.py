"""API error type and its JSON rendering."""

from fastapi import Request
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """An error with an HTTP status, rendered as ``{success: false, message}``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def api_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render an ApiError in the storefront response envelope."""
    assert isinstance(exc, ApiError)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )
