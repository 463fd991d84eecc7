from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from extraction.normalizer import normalize_drafts
from llm.llm_client import LLMClient
from llm.repair import parse_drafts
from llm.schemas import GenerationParams
from syllabus_deadlines.exceptions import EmptySyllabusError
from syllabus_deadlines.models import ExtractionResult

logger = logging.getLogger(__name__)


class DeadlineExtractor:
    """Syllabus text in, sorted deadline records out."""

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        default_year: Optional[int] = None,
        params: Optional[GenerationParams] = None,
    ):
        self.llm_client = llm_client or LLMClient()
        self.default_year = default_year or date.today().year
        self.params = params

    def extract(self, text: str, credential: Optional[str]) -> ExtractionResult:
        if not text or not text.strip():
            raise EmptySyllabusError("Please paste your syllabus")

        logger.info(f"Extracting deadlines from {len(text)} characters of syllabus text")
        drafts = self.llm_client.extract_drafts(
            text, credential, self.default_year, params=self.params
        )
        result = normalize_drafts(drafts, self.default_year)
        logger.info(
            f"Extracted {len(result.deadlines)} deadline(s), dropped {len(result.dropped)}"
        )
        return result

    def normalize(self, raw_text: str) -> ExtractionResult:
        """Run repair/parse/validate on already-fetched model output."""
        return normalize_drafts(parse_drafts(raw_text), self.default_year)
