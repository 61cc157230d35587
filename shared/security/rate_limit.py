"""
Rate limiting utilities using slowapi.
Protects the login endpoint from credential stuffing.

Usage:
    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import audit_rate_limit_event
from shared.config.settings import settings

# Limiter keyed by client IP; disabled entirely with RATE_LIMIT_ENABLED=false
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Handler for slowapi's RateLimitExceeded.
    Returns the standard {"message": ...} error body.
    """
    audit_rate_limit_event(
        context=request.url.path,
        identifier=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"message": "Too many requests. Please try again later."},
        headers={"Retry-After": "60"},
    )
