import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.dependencies import LLM_PROVIDER, get_deadline_store
from api.metrics import DEADLINES_STORED
from storage.deadline_store import DeadlineStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "llm_provider": LLM_PROVIDER,
    }


@router.get("/metrics")
async def metrics(
    deadline_store: DeadlineStore = Depends(get_deadline_store),
) -> Response:
    """
    Prometheus scrape endpoint.
    """
    DEADLINES_STORED.set(len(deadline_store.load()))

    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
