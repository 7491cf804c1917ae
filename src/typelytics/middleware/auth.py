"""API key authentication middleware."""

import secrets
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

PUBLIC_PATHS = frozenset(
    {
        "/api/v1/health/live",
        "/api/v1/health/ready",
    }
)


def _provided_key(request: Request) -> str:
    """Read the key from ``X-API-Key`` or a bearer ``Authorization`` header."""
    key = request.headers.get("X-API-Key", "")
    if key:
        return key
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer":
        return token.strip()
    return ""


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Rejects requests to chart endpoints that lack the service API key."""

    def __init__(self, app: Callable[..., Awaitable[Response]], api_key: str) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Validate the API key for non-public endpoints.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            HTTP response, or 401 if authentication fails.
        """
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        provided = _provided_key(request)
        if not provided:
            return JSONResponse(
                status_code=401,
                content={"error": "Missing API key"},
            )

        if not secrets.compare_digest(provided, self._api_key):
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid API key"},
            )

        return await call_next(request)
