from __future__ import annotations

import datetime
from datetime import date
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DeadlineType = Literal[
    "assignment", "exam", "quiz", "project", "presentation", "deadline", "other"
]

DEADLINE_TYPES: tuple[str, ...] = (
    "assignment",
    "exam",
    "quiz",
    "project",
    "presentation",
    "deadline",
    "other",
)

UrgencyLevel = Literal["overdue", "today", "soon", "later"]

# deadlines this close are flagged as "soon"
SOON_WINDOW_DAYS = 7


class Urgency(BaseModel):
    label: str
    level: UrgencyLevel


class DeadlineRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    date: datetime.date
    type: DeadlineType = "other"
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    def days_until(self, today: date) -> int:
        return (self.date - today).days

    def urgency(self, today: date) -> Urgency:
        """Countdown label shown next to each deadline."""
        diff = self.days_until(today)
        if diff < 0:
            return Urgency(label="Overdue", level="overdue")
        if diff == 0:
            return Urgency(label="Today!", level="today")
        level: UrgencyLevel = "soon" if diff <= SOON_WINDOW_DAYS else "later"
        return Urgency(label=f"{diff} days", level=level)


class DroppedDraft(BaseModel):
    """A draft the model produced that did not survive validation."""

    draft: Any = None
    reason: str


class ExtractionResult(BaseModel):
    deadlines: List[DeadlineRecord] = Field(default_factory=list)
    dropped: List[DroppedDraft] = Field(default_factory=list)


ProviderName = Literal["gemini", "openai", "mock"]


class AppSettings(BaseModel):
    """
    User-level settings persisted between sessions.
    Fields left as None fall back to environment configuration.
    """
    api_key: str = ""
    provider: Optional[ProviderName] = None
    model: Optional[str] = None
    default_year: Optional[int] = Field(default=None, ge=1900, le=9999)

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def masked_api_key(self) -> str:
        key = self.api_key.strip()
        if not key:
            return ""
        if len(key) <= 4:
            return "*" * len(key)
        return "*" * (len(key) - 4) + key[-4:]
