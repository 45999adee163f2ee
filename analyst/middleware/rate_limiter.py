"""
Rate Limiting Middleware

Protects upload and model-backed endpoints using SlowAPI with a Redis backend.
Limits are keyed by bearer token when present, client IP otherwise.
"""

import hashlib
import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse

from analyst.config import settings

logger = logging.getLogger(__name__)


def rate_limit_key(request: Request) -> str:
    """
    Generate rate limit key based on bearer token or IP

    Format: "token:{sha256 prefix}" or "ip:{address}"
    """
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer ") and auth[7:]:
        digest = hashlib.sha256(auth[7:].encode()).hexdigest()[:16]
        return f"token:{digest}"

    return f"ip:{get_remote_address(request)}"


# Initialize rate limiter with Redis backend
limiter = Limiter(
    key_func=rate_limit_key,
    storage_uri=settings.REDIS_URL if settings.RATE_LIMIT_ENABLED else "memory://",
    enabled=settings.RATE_LIMIT_ENABLED
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a Retry-After hint"""
    retry_after = "60"
    if exc.headers:
        retry_after = exc.headers.get("Retry-After", retry_after)

    logger.warning(f"Rate limit exceeded for {rate_limit_key(request)} on {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "rate_limit_exceeded",
            "detail": "Too many requests. Please slow down.",
            "retry_after": int(retry_after),
            "limit": str(exc.detail),
        },
        headers={"Retry-After": retry_after}
    )


# Rate limit decorators for different endpoints

def chat_rate_limit():
    """
    Rate limit for chat and comparison endpoints

    Default: 10 requests per minute
    """
    return limiter.limit(settings.RATE_LIMIT_CHAT)


def upload_rate_limit():
    """
    Rate limit for upload endpoints

    Default: 20 requests per hour
    """
    return limiter.limit(settings.RATE_LIMIT_UPLOAD)


def setup_rate_limiting(app):
    """
    Setup rate limiting middleware

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    if settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting enabled with Redis backend")
    else:
        logger.warning("Rate limiting disabled")
