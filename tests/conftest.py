"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("HF_API_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")

from chat_proxy.config import Settings  # noqa: E402
from chat_proxy.main import create_app  # noqa: E402
from chat_proxy.models import GenerationParameters  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    monkeypatch.setenv("HF_API_KEY", "test-key")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("CORS_ORIGIN", raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, CORS_ORIGIN="https://chat.example.com")


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


class RecordingGenerator:
    """Upstream test double that records prompts and replays a canned outcome."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, GenerationParameters]] = []

    async def generate(self, prompt: str, parameters: GenerationParameters) -> Any:
        self.calls.append((prompt, parameters))
        if self.error is not None:
            raise self.error
        if callable(self.result):
            return self.result(prompt)
        return self.result


@pytest.fixture
def make_generator():
    return RecordingGenerator
