"""Rate limiting for public storefront endpoints (slowapi)."""

from slowapi import Limiter
from starlette.requests import Request


def _client_ip(request: Request) -> str:
    """Key requests by the first X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "127.0.0.1"


limiter = Limiter(key_func=_client_ip)
