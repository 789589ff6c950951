"""Adapter for the Hugging Face text-generation inference API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from chat_proxy.config import Settings
from chat_proxy.exceptions import UpstreamCallError, UpstreamShapeError
from chat_proxy.models import GenerationParameters, InferenceRequest

logger = logging.getLogger(__name__)


class InferenceClient:
    """Wrapper around a single Hugging Face model endpoint."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    async def generate(self, prompt: str, parameters: GenerationParameters) -> Any:
        """Run one text-generation call and return the decoded JSON body."""

        payload = InferenceRequest(inputs=prompt, parameters=parameters)

        headers = {
            "Authorization": f"Bearer {self._settings.hf_api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                str(self._settings.hf_model_url),
                headers=headers,
                json=payload.model_dump(),
                timeout=self._settings.hf_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Hugging Face API request timed out", exc_info=exc)
            raise UpstreamCallError(
                "Error communicating with Hugging Face API",
                details="Hugging Face API request timed out",
            ) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Hugging Face API error",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": exc.response.text,
                },
            )
            raise UpstreamCallError(
                "Error communicating with Hugging Face API",
                details=_error_details(exc.response),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected Hugging Face API HTTP error")
            raise UpstreamCallError(
                "Error communicating with Hugging Face API",
                details=str(exc) or exc.__class__.__name__,
            ) from exc

        try:
            return response.json()
        except (ValueError, RecursionError) as exc:
            logger.error("Malformed Hugging Face response", extra={"raw_response": response.text})
            raise UpstreamShapeError("Invalid response from Hugging Face API") from exc


def _error_details(response: httpx.Response) -> str:
    """Pull the most useful error description out of an upstream error response."""

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        if isinstance(error, str):
            return error
        return json.dumps(error)

    if response.text:
        return response.text

    return f"Hugging Face API returned status {response.status_code}"
