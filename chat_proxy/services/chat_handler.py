"""The `/ask` workflow: validate, prompt, generate, clean up."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from chat_proxy.exceptions import MessageRequiredError, UpstreamShapeError
from chat_proxy.models import ChatReply, ChatRequest, GenerationParameters
from chat_proxy.prompts import PROMPT_TEMPLATE, PostProcessor, build_prompt, strip_prompt_echo

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str, parameters: GenerationParameters) -> Any: ...


class ChatProxyHandler:
    """Turns a chat request into a single upstream generation call."""

    def __init__(
        self,
        generator: TextGenerator,
        template: str = PROMPT_TEMPLATE,
        postprocess: PostProcessor = strip_prompt_echo,
    ) -> None:
        self._generator = generator
        self._template = template
        self._postprocess = postprocess

    async def handle(self, request: ChatRequest) -> ChatReply:
        """Answer a chat request.

        Raises `MessageRequiredError` before any upstream call when the message
        is missing or blank. `UpstreamCallError` from the generator propagates
        unchanged; unusable upstream bodies raise `UpstreamShapeError`.
        """

        message = request.message
        if message is None or not message.strip():
            raise MessageRequiredError("Message is required")

        prompt = build_prompt(message, self._template)
        data = await self._generator.generate(prompt, GenerationParameters())

        generated_text = _first_generated_text(data)
        if generated_text is None:
            logger.error("Invalid Hugging Face response", extra={"raw_response": data})
            raise UpstreamShapeError("Invalid response from Hugging Face API")

        content = self._postprocess(generated_text, prompt)
        logger.info("Chat reply delivered", extra={"chars": len(content)})
        return ChatReply(content=content)


def _first_generated_text(data: Any) -> str | None:
    if not isinstance(data, list) or not data:
        return None

    first = data[0]
    if not isinstance(first, dict):
        return None

    text = first.get("generated_text")
    if not isinstance(text, str) or not text:
        return None
    return text
