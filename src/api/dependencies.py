import os
from typing import Optional

from fastapi import Depends

from extraction.deadline_extractor import DeadlineExtractor
from llm.llm_client import LLMClient
from llm.providers.registry import PROVIDER_NAMES, default_model, get_provider
from llm.schemas import GenerationParams
from storage.deadline_store import DeadlineStore
from storage.kv_store import JsonFileKeyValueStore, KeyValueStore
from storage.settings_store import SettingsStore

# Configuration
DATA_DIR = os.getenv("DEADLINES_DATA_DIR", "data").strip()
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
LLM_MODEL = os.getenv("LLM_MODEL", "").strip()
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))
LLM_MAX_OUTPUT_TOKENS = int(os.getenv("LLM_MAX_OUTPUT_TOKENS", "2000"))
LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "30"))
DEFAULT_YEAR = int(os.getenv("DEFAULT_YEAR", "0")) or None

_kv_store: Optional[KeyValueStore] = None


def check_llm_provider(name: str = LLM_PROVIDER) -> None:
    """Fail fast on a misconfigured LLM_PROVIDER instead of on every extraction."""
    if name not in PROVIDER_NAMES:
        raise RuntimeError(
            f"LLM_PROVIDER={name!r} is not supported (expected one of {', '.join(PROVIDER_NAMES)})"
        )


def get_kv_store() -> KeyValueStore:
    global _kv_store
    if _kv_store is None:
        _kv_store = JsonFileKeyValueStore(DATA_DIR)
    return _kv_store


def get_deadline_store(kv: KeyValueStore = Depends(get_kv_store)) -> DeadlineStore:
    return DeadlineStore(kv)


def get_settings_store(kv: KeyValueStore = Depends(get_kv_store)) -> SettingsStore:
    return SettingsStore(kv)


def get_extractor(
    settings_store: SettingsStore = Depends(get_settings_store),
) -> DeadlineExtractor:
    """Build the pipeline from saved settings, falling back to the environment."""
    settings = settings_store.load()
    provider_name = settings.provider or LLM_PROVIDER
    params = GenerationParams(
        model=settings.model or LLM_MODEL or default_model(provider_name),
        temperature=LLM_TEMPERATURE,
        max_output_tokens=LLM_MAX_OUTPUT_TOKENS,
    )
    client = LLMClient(provider=get_provider(provider_name, timeout_s=LLM_TIMEOUT_S), params=params)
    return DeadlineExtractor(
        llm_client=client,
        default_year=settings.default_year or DEFAULT_YEAR,
        params=params,
    )
