"""HTTP routes exposed by the proxy."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from chat_proxy import __version__
from chat_proxy.config import Settings
from chat_proxy.dependencies import get_chat_handler, get_settings
from chat_proxy.models import ChatReply, ChatRequest, ErrorReply, HealthResponse, VersionResponse
from chat_proxy.services.chat_handler import ChatProxyHandler

router = APIRouter()


@router.post(
    "/ask",
    response_model=ChatReply,
    responses={400: {"model": ErrorReply}, 429: {"model": ErrorReply}, 500: {"model": ErrorReply}},
)
async def ask(
    payload: ChatRequest,
    handler: Annotated[ChatProxyHandler, Depends(get_chat_handler)],
) -> ChatReply:
    return await handler.handle(payload)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/version", response_model=VersionResponse)
async def version(settings: Annotated[Settings, Depends(get_settings)]) -> VersionResponse:
    return VersionResponse(version=__version__, environment=settings.environment)
