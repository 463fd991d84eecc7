from __future__ import annotations

import json
from datetime import date

from llm.schemas import GenerationParams
from .base import LLMProvider


class MockProvider(LLMProvider):
    def generate(self, *, prompt: str, credential: str, params: GenerationParams) -> str:
        """
        Returns a canned answer shaped like a real model reply (fenced JSON).
        """
        year = date.today().year
        deadlines = [
            {
                "title": "Assignment 1",
                "date": f"{year}-01-22",
                "type": "assignment",
                "description": "Problem set on chapters 1-2",
            },
            {
                "title": "Midterm",
                "date": f"{year}-02-15",
                "type": "exam",
                "description": None,
            },
            {
                "title": "Final project",
                "date": f"{year}-04-30",
                "type": "project",
                "description": "Group project and report",
            },
        ]
        return "```json\n" + json.dumps(deadlines) + "\n```"
