"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from chat_proxy import __version__
from chat_proxy.config import Settings, load_settings
from chat_proxy.logging import configure_logging
from chat_proxy.middleware import (
    ClientRateLimiter,
    setup_cors,
    setup_error_boundary,
    setup_exception_handlers,
    setup_rate_limiting,
)
from chat_proxy.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory.

    Without explicit settings the environment is read once here, so a missing
    credential stops the process before any route is served. Run with
    ``uvicorn chat_proxy.main:create_app --factory`` or ``python -m chat_proxy``.
    """

    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Hugging Face Chat Proxy",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    limiter = ClientRateLimiter(
        limit=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    # Middleware added last runs first: CORS wraps the rate limiter, which wraps
    # the error boundary.
    setup_error_boundary(app)
    setup_rate_limiting(app, limiter, trust_proxy=settings.rate_limit_trust_proxy)
    setup_cors(app, settings)
    setup_exception_handlers(app)

    app.include_router(router)

    return app
