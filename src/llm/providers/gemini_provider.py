from __future__ import annotations

import os
from typing import Optional

import httpx

from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import TransportError
from .base import DEFAULT_TIMEOUT_S, HTTPProvider


class GeminiProvider(HTTPProvider):
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            base_url or os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
            timeout_s=timeout_s,
            transport=transport,
        )

    def generate(self, *, prompt: str, credential: str, params: GenerationParams) -> str:
        url = f"{self.base_url}/models/{params.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": params.temperature,
                "maxOutputTokens": params.max_output_tokens,
            },
        }

        data = self._post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            params={"key": credential},
        )

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise TransportError("Model API response has no completion text") from e
