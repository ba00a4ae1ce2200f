from __future__ import annotations

"""FastAPI application entrypoint for the keyword snippet service."""

import logging
import uuid
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from src.app.dependencies import get_snippet_options
from src.app.metrics import metrics_middleware, metrics_response, record_snippet
from src.app.schemas import SnippetParagraph, SnippetRequest, SnippetResponse
from src.app.settings import settings
from src.loaders.text import TextLoaderError, load_text_bytes
from src.snippet.context import build_snippet
from src.snippet.errors import KeywordLimitError, ScoringBudgetError, SnippetInvariantError
from src.snippet.types import SnippetResult

logger = logging.getLogger(__name__)

app = FastAPI(title="Keyword Snippets", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


def _safe_error_message(exc: Exception) -> str:
    """Return a safe error type name for logs and responses."""
    return type(exc).__name__


async def _read_upload_bytes(upload: UploadFile, max_bytes: int | None) -> bytes:
    """Stream upload bytes with a hard size limit."""
    if not max_bytes or max_bytes <= 0:
        return await upload.read()
    buffer = bytearray()
    while True:
        chunk = await upload.read(65536)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File exceeds maximum size of {max_bytes} bytes",
            )
    return bytes(buffer)


def _run_snippet(
    text: str,
    keywords: list[str],
    request_id: str,
    max_length: int | None = None,
    start_tag: str | None = None,
    end_tag: str | None = None,
) -> SnippetResponse:
    """Build a snippet and translate engine errors into HTTP errors."""
    try:
        result = build_snippet(
            text,
            keywords,
            max_length=max_length,
            start_tag=start_tag,
            end_tag=end_tag,
            options=get_snippet_options(),
        )
    except (KeywordLimitError, ScoringBudgetError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SnippetInvariantError as exc:
        logger.error(
            "snippet_invariant_failed",
            extra={"request_id": request_id, "error": _safe_error_message(exc)},
        )
        raise
    record_snippet(result)
    return _to_response(result, request_id)


def _to_response(result: SnippetResult, request_id: str) -> SnippetResponse:
    return SnippetResponse(
        text=result.text,
        html=result.html,
        keywords=list(result.keywords),
        matched_keywords=list(result.matched_keywords),
        missing_keywords=list(result.missing_keywords),
        paragraphs=[
            SnippetParagraph(order=para.order, text=para.text, keywords=list(para.keywords))
            for para in result.paragraphs
        ],
        request_id=request_id,
    )


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.post("/snippet", response_model=SnippetResponse)
async def snippet(request: SnippetRequest, http_request: Request) -> SnippetResponse:
    """Extract a highlighted snippet from the supplied text."""
    request_id = getattr(http_request.state, "request_id", str(uuid.uuid4()))
    max_bytes = settings.max_text_bytes
    if max_bytes > 0 and len(request.text.encode("utf-8")) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"Text exceeds maximum size of {max_bytes} bytes",
        )
    return await run_in_threadpool(
        _run_snippet,
        request.text,
        request.keywords,
        request_id,
        max_length=request.max_length,
        start_tag=request.start_tag,
        end_tag=request.end_tag,
    )


@app.post("/snippet/file", response_model=SnippetResponse)
async def snippet_file(
    http_request: Request,
    file: UploadFile = File(...),
    keywords: list[str] = Form(...),
    max_length: int | None = Form(default=None),
) -> SnippetResponse:
    """Extract a highlighted snippet from an uploaded text file."""
    request_id = getattr(http_request.state, "request_id", str(uuid.uuid4()))
    filename = file.filename or "upload"
    data = await _read_upload_bytes(file, settings.max_text_bytes)
    try:
        document = load_text_bytes(
            data,
            doc_id=Path(filename).stem,
            source=filename,
            max_bytes=settings.max_text_bytes,
        )
    except TextLoaderError as exc:
        logger.error(
            "file_load_failed",
            extra={"request_id": request_id, "source_name": filename, "error": _safe_error_message(exc)},
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return await run_in_threadpool(
        _run_snippet, document.content, keywords, request_id, max_length=max_length
    )
