from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError

from storage.kv_store import KeyValueStore
from syllabus_deadlines.models import DeadlineRecord

logger = logging.getLogger(__name__)

DEADLINES_KEY = "deadlines"


class DeadlineStore:
    def __init__(self, kv: KeyValueStore, key: str = DEADLINES_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> List[DeadlineRecord]:
        """
        Load the saved deadlines. Returns an empty list if nothing is stored
        or the stored data is unreadable.
        """
        text = self.kv.load(self.key)
        if text is None:
            return []
        try:
            data = json.loads(text)
            if not isinstance(data, list):
                raise ValueError("stored deadlines are not a list")
            return [DeadlineRecord.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            logger.warning(f"No saved deadlines could be read ({e})")
            return []

    def save(self, records: List[DeadlineRecord]) -> None:
        data = [r.model_dump(mode="json") for r in records]
        self.kv.save(self.key, json.dumps(data, ensure_ascii=False, indent=2))

    def clear(self) -> None:
        self.kv.delete(self.key)

    def remove(self, index: int) -> DeadlineRecord:
        """Remove one saved deadline by position. Raises IndexError if out of range."""
        records = self.load()
        if index < 0 or index >= len(records):
            raise IndexError(f"No deadline at position {index}")
        removed = records.pop(index)
        self.save(records)
        return removed
