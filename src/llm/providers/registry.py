from __future__ import annotations

from typing import Optional

import httpx

from .base import DEFAULT_TIMEOUT_S, LLMProvider
from .gemini_provider import GeminiProvider
from .mock_provider import MockProvider
from .openai_provider import OpenAIProvider

PROVIDER_NAMES = ("gemini", "openai", "mock")


def get_provider(
    name: str,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    transport: Optional[httpx.BaseTransport] = None,
) -> LLMProvider:
    key = (name or "").strip().lower()
    if key == "gemini":
        return GeminiProvider(timeout_s=timeout_s, transport=transport)
    if key == "openai":
        return OpenAIProvider(timeout_s=timeout_s, transport=transport)
    if key == "mock":
        return MockProvider()
    raise ValueError(f"Unknown LLM provider: {name!r} (expected one of {', '.join(PROVIDER_NAMES)})")

DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash-latest",
    "openai": "gpt-4o-mini",
    "mock": "mock",
}


def default_model(name: str) -> str:
    return DEFAULT_MODELS.get((name or "").strip().lower(), DEFAULT_MODELS["gemini"])
