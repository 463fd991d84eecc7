from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "deadlines_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

EXTRACTION_LATENCY_SECONDS = get_or_create_metric(
    "deadlines_extraction_latency_seconds",
    "Time spent in one extraction run, model call included",
    Histogram,
)

DEADLINES_EXTRACTED_TOTAL = get_or_create_metric(
    "deadlines_extracted_total", "Total deadlines extracted from syllabi", Counter
)

DEADLINES_DROPPED_TOTAL = get_or_create_metric(
    "deadlines_dropped_total", "Total model drafts rejected during validation", Counter
)

DEADLINES_STORED = get_or_create_metric(
    "deadlines_stored", "Deadlines currently saved", Gauge
)
