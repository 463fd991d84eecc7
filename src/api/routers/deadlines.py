import asyncio
import logging
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from api.dependencies import get_deadline_store, get_extractor, get_settings_store
from api.metrics import (
    REQUESTS_TOTAL,
    EXTRACTION_LATENCY_SECONDS,
    DEADLINES_EXTRACTED_TOTAL,
    DEADLINES_DROPPED_TOTAL,
    DEADLINES_STORED,
)
from extraction.deadline_extractor import DeadlineExtractor
from integration.calendar_export import DEFAULT_FILENAME, ICS_MEDIA_TYPE, build_ics
from storage.deadline_store import DeadlineStore
from storage.settings_store import SettingsStore
from syllabus_deadlines.exceptions import (
    CredentialError,
    EmptySyllabusError,
    MalformedResponseError,
    TransportError,
)
from syllabus_deadlines.models import DeadlineRecord

router = APIRouter()
logger = logging.getLogger(__name__)

# one extraction in flight per process
extraction_lock = asyncio.Lock()

PARSE_FAILED_MESSAGE = "Could not parse deadlines from the model response."


class ExtractIn(BaseModel):
    text: str
    api_key: Optional[str] = None


def _record_out(record: DeadlineRecord, today: date) -> dict:
    out = record.model_dump(mode="json")
    out["days_until"] = record.days_until(today)
    out["urgency"] = record.urgency(today).model_dump()
    return out


def _fail(endpoint: str, status: str, code: int, error: str, message: str) -> HTTPException:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    return HTTPException(status_code=code, detail={"error": error, "message": message})


@router.post("/deadlines/extract")
async def extract_deadlines(
    payload: ExtractIn,
    extractor: DeadlineExtractor = Depends(get_extractor),
    deadline_store: DeadlineStore = Depends(get_deadline_store),
    settings_store: SettingsStore = Depends(get_settings_store),
) -> dict:
    endpoint = "/deadlines/extract"
    if extraction_lock.locked():
        raise _fail(endpoint, "busy", 409, "busy", "An extraction is already running")

    credential = payload.api_key or settings_store.load().api_key

    async with extraction_lock:
        start = time.time()
        try:
            result = await asyncio.to_thread(extractor.extract, payload.text, credential)
        except CredentialError as e:
            raise _fail(endpoint, "credential", 400, "credential", str(e))
        except EmptySyllabusError as e:
            raise _fail(endpoint, "empty", 400, "empty_syllabus", str(e))
        except TransportError as e:
            logger.error(f"Model API call failed (status={e.status_code}): {e.message}")
            raise _fail(endpoint, "transport", 502, "transport", e.message)
        except MalformedResponseError as e:
            logger.error(f"Unparseable model response: {e.raw_text!r}")
            raise _fail(endpoint, "malformed", 502, "malformed_response", PARSE_FAILED_MESSAGE)
        finally:
            EXTRACTION_LATENCY_SECONDS.observe(time.time() - start)

    deadline_store.save(result.deadlines)
    DEADLINES_EXTRACTED_TOTAL.inc(len(result.deadlines))
    DEADLINES_DROPPED_TOTAL.inc(len(result.dropped))
    DEADLINES_STORED.set(len(result.deadlines))
    REQUESTS_TOTAL.labels(endpoint=endpoint, status="ok").inc()

    today = date.today()
    return {
        "deadlines": [_record_out(r, today) for r in result.deadlines],
        "dropped": [d.model_dump(mode="json") for d in result.dropped],
        "count": len(result.deadlines),
    }


@router.get("/deadlines")
async def list_deadlines(
    deadline_store: DeadlineStore = Depends(get_deadline_store),
) -> dict:
    """Saved deadlines with a countdown relative to today."""
    records = deadline_store.load()
    today = date.today()
    return {
        "deadlines": [_record_out(r, today) for r in records],
        "count": len(records),
    }


@router.delete("/deadlines")
async def clear_deadlines(
    deadline_store: DeadlineStore = Depends(get_deadline_store),
) -> dict:
    deadline_store.clear()
    DEADLINES_STORED.set(0)
    return {"status": "cleared"}


@router.delete("/deadlines/{index}")
async def remove_deadline(
    index: int,
    deadline_store: DeadlineStore = Depends(get_deadline_store),
) -> dict:
    try:
        removed = deadline_store.remove(index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"No deadline at position {index}")
    return {"status": "removed", "deadline": removed.model_dump(mode="json")}


@router.get("/deadlines/export.ics")
async def export_calendar(
    deadline_store: DeadlineStore = Depends(get_deadline_store),
) -> Response:
    ics = build_ics(deadline_store.load())
    return Response(
        content=ics,
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{DEFAULT_FILENAME}"'},
    )
