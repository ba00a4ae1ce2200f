from __future__ import annotations

import time

from fastapi import Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response

from src.app.settings import settings
from src.snippet.types import SnippetResult

REQUEST_COUNT = Counter(
    "snippet_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "snippet_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
SNIPPET_OUTCOMES = Counter(
    "snippet_requests_total",
    "Snippet requests by outcome",
    ["outcome"],
)
SNIPPET_PARAGRAPHS = Histogram(
    "snippet_paragraphs_selected",
    "Paragraphs joined into each built snippet",
    buckets=(1, 2, 3, 4, 6, 8, 12, 16),
)


def record_snippet(result: SnippetResult) -> None:
    """Count a snippet request as built or empty."""
    if not settings.metrics_enabled:
        return
    if result.text is None:
        SNIPPET_OUTCOMES.labels("empty").inc()
        return
    SNIPPET_OUTCOMES.labels("built").inc()
    SNIPPET_PARAGRAPHS.observe(len(result.paragraphs))


async def metrics_middleware(request: Request, call_next):
    if not settings.metrics_enabled or request.url.path == "/metrics":
        return await call_next(request)
    path = request.url.path
    start = time.monotonic()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        REQUEST_COUNT.labels(request.method, path, str(status)).inc()
        REQUEST_LATENCY.labels(request.method, path).observe(time.monotonic() - start)


def metrics_response() -> Response:
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
