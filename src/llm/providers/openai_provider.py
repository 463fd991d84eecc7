from __future__ import annotations

import os
from typing import Optional

import httpx

from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import TransportError
from .base import DEFAULT_TIMEOUT_S, HTTPProvider


class OpenAIProvider(HTTPProvider):
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            base_url or os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            timeout_s=timeout_s,
            transport=transport,
        )

    def generate(self, *, prompt: str, credential: str, params: GenerationParams) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": params.model,
            "messages": [
                {"role": "user", "content": prompt},
            ],
            "temperature": params.temperature,
            "max_tokens": params.max_output_tokens,
        }

        data = self._post(url, json=payload, headers=headers)

        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise TransportError("Model API response has no completion text") from e
