"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from grid_builder.config import Settings
from grid_builder.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

CORS_METHODS = ["GET", "POST", "OPTIONS"]


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    # The storage endpoint is public: any origin, read and create only
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        event_type="security_config",
        origins="*",
        methods=CORS_METHODS,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=["Content-Type"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
    app.state.limiter = limiter

    @app.middleware("http")
    async def count_requests(request, call_next):
        """Count total requests for the health endpoint."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        response = await call_next(request)
        return response

    return limiter
