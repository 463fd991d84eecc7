from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import TransportError

DEFAULT_TIMEOUT_S = 30.0


class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, prompt: str, credential: str, params: GenerationParams) -> str:
        """
        Must return the model output as TEXT (repair/parse happens downstream).
        """
        raise NotImplementedError


class HTTPProvider(LLMProvider):
    """Shared plumbing for providers that talk JSON over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.strip().rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

    def _post(self, url: str, *, json: dict, headers: Optional[dict] = None,
              params: Optional[dict] = None) -> Any:
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                r = client.post(url, json=json, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to model API failed: {e}") from e

        if not r.is_success:
            raise TransportError(_error_message(r), status_code=r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise TransportError("Model API returned a non-JSON body", status_code=r.status_code) from e


def _error_message(r: httpx.Response) -> str:
    """Pull error.message out of a failed response, the way both APIs report it."""
    try:
        body = r.json()
    except ValueError:
        return "API request failed"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return "API request failed"
