from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_MODEL = "gemini-1.5-flash-latest"


class GenerationParams(BaseModel):
    """Knobs forwarded to the model API on every call."""

    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=2000, gt=0)
