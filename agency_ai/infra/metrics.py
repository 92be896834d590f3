"""Prometheus metrics export."""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Request metrics
request_count = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

request_duration = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)

# LLM metrics
llm_calls_total = Counter(
    "llm_calls_total",
    "Total LLM API calls",
    ["provider", "model", "status"],  # status: success | timeout | upstream_error | empty_response
)

llm_call_duration = Histogram(
    "llm_call_duration_seconds",
    "LLM API call duration in seconds",
    ["provider", "model"],
)

# Generation metrics
generations_total = Counter(
    "generations_total",
    "Total generation tasks",
    ["task", "status"],
)

generation_fallbacks_total = Counter(
    "generation_fallbacks_total",
    "Deterministic defaults substituted for unparseable model output",
    ["task", "field"],
)

# Context aggregation
tenant_snapshot_duration = Histogram(
    "tenant_snapshot_duration_seconds",
    "Tenant snapshot aggregation duration in seconds",
)


def get_metrics_response() -> Response:
    """Get Prometheus metrics as HTTP response."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
