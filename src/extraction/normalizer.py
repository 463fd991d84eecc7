from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional, Tuple

from dateutil import parser as dparser

from syllabus_deadlines.models import (
    DEADLINE_TYPES,
    DeadlineRecord,
    DroppedDraft,
    ExtractionResult,
)

logger = logging.getLogger(__name__)


def parse_deadline_date(value: Any, default_year: int) -> date:
    """
    Parse a draft's date into a calendar date.

    A value without a year (e.g. "Jan 22") takes default_year. Raises
    ValueError when the value is missing or not a real calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("date is missing")

    # dateutil fills every missing field from the default. Parsing against two
    # defaults that differ in month and day shows whether the text named both;
    # only the year may be borrowed.
    text = value.strip()
    try:
        first = dparser.parse(text, default=datetime(default_year, 1, 1)).date()
        second = dparser.parse(text, default=datetime(default_year, 2, 2)).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"unparseable date {value!r}") from e

    if first != second:
        raise ValueError(f"date {value!r} has no month and day")
    return first


def coerce_type(value: Any) -> str:
    if isinstance(value, str):
        v = value.strip().lower()
        if v in DEADLINE_TYPES:
            return v
    return "other"


def _description(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def normalize_draft(draft: Any, default_year: int) -> Tuple[Optional[DeadlineRecord], Optional[str]]:
    """Return (record, None) for a valid draft, or (None, reason) otherwise."""
    if not isinstance(draft, dict):
        return None, "draft is not an object"

    title = draft.get("title")
    if not isinstance(title, str) or not title.strip():
        return None, "title is missing"

    try:
        when = parse_deadline_date(draft.get("date"), default_year)
    except ValueError as e:
        return None, str(e)

    record = DeadlineRecord(
        title=title,
        date=when,
        type=coerce_type(draft.get("type")),
        description=_description(draft.get("description")),
    )
    return record, None


def normalize_drafts(drafts: Iterable[Any], default_year: int) -> ExtractionResult:
    """
    Validate drafts into DeadlineRecords sorted by date.

    sorted() is stable, so deadlines on the same day keep the model's order.
    Invalid drafts end up in ``dropped`` together with the reason.
    """
    records = []
    dropped = []
    for draft in drafts:
        record, reason = normalize_draft(draft, default_year)
        if record is None:
            dropped.append(DroppedDraft(draft=draft, reason=reason or "invalid"))
            continue
        records.append(record)

    if dropped:
        logger.info(f"Dropped {len(dropped)} invalid deadline draft(s)")

    return ExtractionResult(
        deadlines=sorted(records, key=lambda r: r.date),
        dropped=dropped,
    )
