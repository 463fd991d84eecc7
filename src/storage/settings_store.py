from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from storage.kv_store import KeyValueStore
from syllabus_deadlines.exceptions import CredentialError
from syllabus_deadlines.models import AppSettings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


class SettingsStore:
    def __init__(self, kv: KeyValueStore, key: str = SETTINGS_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> AppSettings:
        text = self.kv.load(self.key)
        if text is None:
            return AppSettings()
        try:
            return AppSettings(**json.loads(text))
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings ({e})")
            return AppSettings()

    def save(self, settings: AppSettings) -> None:
        self.kv.save(
            self.key,
            json.dumps(settings.model_dump(), ensure_ascii=False, indent=2),
        )

    def set_api_key(self, api_key: str) -> AppSettings:
        key = (api_key or "").strip()
        if not key:
            raise CredentialError("API key must not be empty")
        settings = self.load().model_copy(update={"api_key": key})
        self.save(settings)
        return settings
