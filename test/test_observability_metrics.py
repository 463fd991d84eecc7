import importlib

from fastapi.testclient import TestClient

from api.dependencies import get_extractor, get_kv_store
from extraction.deadline_extractor import DeadlineExtractor
from llm.llm_client import LLMClient


def _import_app():
    # Import lazily so environment variables (if any) can be set before import.
    mod = importlib.import_module("api.main")
    return mod


def test_metrics_endpoint_exposes_prometheus_text(kv) -> None:
    mod = _import_app()
    mod.app.dependency_overrides[get_kv_store] = lambda: kv
    try:
        client = TestClient(mod.app)
        r = client.get("/metrics")
    finally:
        mod.app.dependency_overrides.clear()

    assert r.status_code == 200
    # Prometheus text exposition format content-type
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "deadlines_requests_total" in body
    assert "deadlines_extraction_latency_seconds" in body
    assert "deadlines_stored" in body


def test_extract_increments_request_counter(kv, fake_provider_factory) -> None:
    mod = _import_app()
    provider = fake_provider_factory('[{"title":"Essay","date":"2026-01-25"}]')
    mod.app.dependency_overrides[get_kv_store] = lambda: kv
    mod.app.dependency_overrides[get_extractor] = lambda: DeadlineExtractor(
        llm_client=LLMClient(provider=provider), default_year=2026
    )
    try:
        client = TestClient(mod.app)
        r = client.post("/deadlines/extract", json={"text": "Essay due Jan 25", "api_key": "key"})
        assert r.status_code == 200
        m = client.get("/metrics")
    finally:
        mod.app.dependency_overrides.clear()

    assert m.status_code == 200
    lines = m.text.splitlines()
    found = any(
        line.startswith('deadlines_requests_total{endpoint="/deadlines/extract",status="ok"}')
        for line in lines
    )
    assert found, "Expected deadlines_requests_total sample line for /deadlines/extract"

    # the gauge tracks what is saved right now
    stored = None
    for line in lines:
        if line.startswith("deadlines_stored "):
            stored = line.split(" ", 1)[1].strip()
            break
    assert stored is not None
    assert int(float(stored)) == 1
