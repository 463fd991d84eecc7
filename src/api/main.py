import logging

from fastapi import FastAPI

from api.dependencies import LLM_PROVIDER, check_llm_provider
from api.routers import deadlines, ops, settings

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="syllabus-deadlines")

app.include_router(deadlines.router)
app.include_router(settings.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    check_llm_provider()
    logger.info(f"Using LLM provider {LLM_PROVIDER}")
