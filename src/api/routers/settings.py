import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import get_settings_store
from storage.settings_store import SettingsStore
from syllabus_deadlines.exceptions import CredentialError
from syllabus_deadlines.models import AppSettings, ProviderName

router = APIRouter()
logger = logging.getLogger(__name__)


class ApiKeyIn(BaseModel):
    api_key: str


class SettingsIn(BaseModel):
    provider: Optional[ProviderName] = None
    model: Optional[str] = None
    default_year: Optional[int] = Field(default=None, ge=1900, le=9999)


def _settings_out(settings: AppSettings) -> dict:
    # never echo the key back
    return {
        "api_key": settings.masked_api_key(),
        "has_api_key": settings.has_api_key,
        "provider": settings.provider,
        "model": settings.model,
        "default_year": settings.default_year,
    }


@router.get("/settings")
async def get_settings(
    settings_store: SettingsStore = Depends(get_settings_store),
) -> dict:
    return _settings_out(settings_store.load())


@router.put("/settings/api-key")
async def save_api_key(
    payload: ApiKeyIn,
    settings_store: SettingsStore = Depends(get_settings_store),
) -> dict:
    try:
        settings = settings_store.set_api_key(payload.api_key)
    except CredentialError as e:
        raise HTTPException(status_code=400, detail={"error": "credential", "message": str(e)})
    logger.info("API key saved")
    return _settings_out(settings)


@router.put("/settings")
async def update_settings(
    payload: SettingsIn,
    settings_store: SettingsStore = Depends(get_settings_store),
) -> dict:
    """Update provider/model/default year. Null fields reset to the environment default."""
    settings = settings_store.load().model_copy(update=payload.model_dump())
    settings_store.save(settings)
    return _settings_out(settings)
