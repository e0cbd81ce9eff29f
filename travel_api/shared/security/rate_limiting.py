"""
Rate limiting configuration and setup.

Uses slowapi to enforce a default limit on every endpoint (applied by
SlowAPIMiddleware in the application factory). Authenticated callers
are bucketed per actor; anonymous requests by client address.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from travel_api.core.config import settings
from travel_api.shared.security.auth import (
    BEARER_PREFIX,
    AuthenticationError,
    decode_token,
)


def rate_limit_key(request: Request) -> str:
    """Return the bucket key for a request: the actor id, else the client IP."""
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith(BEARER_PREFIX):
        try:
            actor = decode_token(authorization[len(BEARER_PREFIX):].strip())
        except AuthenticationError:
            return get_remote_address(request)
        return f"actor:{actor.id}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=[settings.rate_limit_default],
)


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with a clean JSON response.

    Returns:
        A 429 JSON response with a clear error message.
    """
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
