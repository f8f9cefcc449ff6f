"""
Rate limiting middleware using slowapi.
Caps the request rate per client address on every picker endpoint.
"""
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import logging

from core.config import RateLimitConfigs

logger = logging.getLogger(__name__)


def get_rate_limiter(enabled: bool | None = None, rate_per_minute: int | None = None):
    """
    Create and configure the rate limiter.

    Configuration:
    - RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: true)
    - RATE_LIMIT_PER_MINUTE: Requests per minute (default: 600)

    The coalescing client issues at most one read per distinct key per tick,
    so the default leaves plenty of headroom for a single browser session.

    Returns:
        Limiter instance, or None when rate limiting is disabled
    """
    enabled = RateLimitConfigs.ENABLED if enabled is None else enabled

    if not enabled:
        logger.warning("Rate limiting is DISABLED.")
        return None

    rate_per_minute = rate_per_minute or RateLimitConfigs.PER_MINUTE

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[f"{rate_per_minute}/minute"],
        storage_uri="memory://",
        headers_enabled=False,
    )

    logger.info(f"Rate limiting enabled: {rate_per_minute} requests per minute")

    return limiter


def setup_rate_limiting(app, enabled: bool | None = None):
    """
    Setup rate limiting for the FastAPI application.

    Args:
        app: FastAPI application instance
        enabled: Overrides RATE_LIMIT_ENABLED when given
    """
    limiter = get_rate_limiter(enabled=enabled)
    if limiter is None:
        logger.warning("Skipping rate limiting setup (disabled)")
        return

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    logger.info("Rate limiting middleware configured")
