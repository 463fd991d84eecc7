from __future__ import annotations

import logging
from typing import Any, List, Optional

from llm.prompts import build_extraction_prompt
from llm.providers.base import LLMProvider
from llm.providers.gemini_provider import GeminiProvider
from llm.repair import parse_drafts
from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import CredentialError

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper around an LLMProvider.

    The provider is the only piece that touches the network; everything the
    client adds (credential check, prompt, repair/parse) runs locally so it
    can be exercised with canned text.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        params: Optional[GenerationParams] = None,
    ):
        self.provider = provider or GeminiProvider()
        self.params = params or GenerationParams()

    def generate_text(
        self,
        prompt: str,
        credential: Optional[str],
        params: Optional[GenerationParams] = None,
    ) -> str:
        if credential is None or not credential.strip():
            raise CredentialError("Please add an API key in settings")

        p = params or self.params
        logger.info(
            f"Calling {type(self.provider).__name__} (model={p.model}, "
            f"temperature={p.temperature}, max_output_tokens={p.max_output_tokens})"
        )
        return self.provider.generate(prompt=prompt, credential=credential.strip(), params=p)

    def extract_drafts(
        self,
        text: str,
        credential: Optional[str],
        default_year: int,
        params: Optional[GenerationParams] = None,
    ) -> List[Any]:
        prompt = build_extraction_prompt(text, default_year)
        raw = self.generate_text(prompt, credential, params=params)
        return parse_drafts(raw)
