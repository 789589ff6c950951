"""Front-door collaborators: CORS, rate limiting and error shaping."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter

from chat_proxy.config import Settings
from chat_proxy.exceptions import ServiceError
from chat_proxy.models import ErrorReply

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/health"
RATE_LIMIT_MESSAGE = "Too many requests, please try again later"
INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class ClientRateLimiter:
    """Per-client fixed-window budget backed by a `limits` storage."""

    def __init__(self, limit: int, window_seconds: int, storage: Storage | None = None) -> None:
        self._item = RateLimitItemPerSecond(limit, window_seconds)
        self._strategy = FixedWindowRateLimiter(storage or MemoryStorage())

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for `key` and report whether it may proceed."""

        allowed = self._strategy.hit(self._item, key)
        stats = self._strategy.get_window_stats(self._item, key)
        return RateLimitDecision(
            allowed=allowed,
            limit=self._item.amount,
            remaining=stats.remaining,
            reset_after=max(stats.reset_time - time.time(), 0.0),
        )


def client_identity(request: Request, trust_proxy: bool = False) -> str:
    """Key used to attribute a request to a client for rate limiting."""

    if trust_proxy:
        forwarded = request.headers.get("X-Forwarded-For", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    client = request.client
    if client is None:
        return "unknown"
    return client.host


def setup_rate_limiting(app: FastAPI, limiter: ClientRateLimiter, trust_proxy: bool = False) -> None:
    """Reject clients that exceed the request budget of the current window."""

    @app.middleware("http")
    async def enforce_rate_limit(request: Request, call_next):
        # Preflights are answered by the CORS layer; health checks stay available.
        if request.method == "OPTIONS" or request.url.path == HEALTH_CHECK_PATH:
            return await call_next(request)

        client = client_identity(request, trust_proxy)
        decision = limiter.hit(client)
        reset_seconds = str(math.ceil(decision.reset_after))
        headers = {
            "RateLimit-Limit": str(decision.limit),
            "RateLimit-Remaining": str(decision.remaining),
            "RateLimit-Reset": reset_seconds,
        }

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={"client": client, "path": request.url.path},
            )
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=ErrorReply(error=RATE_LIMIT_MESSAGE).model_dump(exclude_none=True),
                headers={**headers, "Retry-After": reset_seconds},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow browser calls from the configured origins only."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every per-request failure as an `ErrorReply` body."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.http_status,
            content=ErrorReply(error=exc.message, details=exc.details).model_dump(exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorReply(error="Message is required").model_dump(exclude_none=True),
        )


def setup_error_boundary(app: FastAPI) -> None:
    """Turn any unhandled exception into a 500 `ErrorReply` inside the CORS layer."""

    @app.middleware("http")
    async def render_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error",
                extra={"path": request.url.path, "method": request.method},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorReply(error=INTERNAL_ERROR_MESSAGE).model_dump(exclude_none=True),
            )
