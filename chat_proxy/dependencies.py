"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from chat_proxy.config import Settings
from chat_proxy.prompts import passthrough, strip_prompt_echo
from chat_proxy.services.chat_handler import ChatProxyHandler
from chat_proxy.services.inference_client import InferenceClient


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_settings(connection: HTTPConnection) -> Settings:
    """Return the settings the application was built with."""

    return connection.app.state.settings  # type: ignore[return-value]


async def get_inference_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> InferenceClient:
    return InferenceClient(client=client, settings=settings)


async def get_chat_handler(
    generator: InferenceClient = Depends(get_inference_client),
    settings: Settings = Depends(get_settings),
) -> ChatProxyHandler:
    """Dependency provider for ChatProxyHandler."""

    return ChatProxyHandler(
        generator,
        template=settings.prompt_template,
        postprocess=strip_prompt_echo if settings.strip_prompt_echo else passthrough,
    )
