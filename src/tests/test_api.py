from __future__ import annotations

import os

import httpx
import pytest

os.environ["SNIPPET_MAX_LENGTH"] = "80"
os.environ["SNIPPET_MAX_TEXT_BYTES"] = "1048576"

from src.app.dependencies import reset_options_cache
from src.app.main import app

pytestmark = pytest.mark.anyio

TEXT = (
    "Haskell is a purely functional programming language with lazy evaluation "
    "and a strong static type system.\n\n"
    "Erlang was designed for telecom systems and offers lightweight processes "
    "with message passing concurrency."
)


def get_client() -> httpx.AsyncClient:
    reset_options_cache()
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


async def test_health_endpoint() -> None:
    async with get_client() as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_snippet_endpoint_returns_text_and_html() -> None:
    async with get_client() as client:
        response = await client.post(
            "/snippet",
            json={"text": TEXT, "keywords": ["Haskell", "concurrency"]},
            headers={"X-Request-ID": "req-123"},
        )
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-123"
    payload = response.json()
    assert payload["text"] == "Haskell is a purely functional ... with message passing concurrency."
    assert payload["html"].startswith('<span class="quoted">Haskell</span>')
    assert payload["matched_keywords"] == ["haskell", "concurrency"]
    assert payload["missing_keywords"] == []
    assert [para["order"] for para in payload["paragraphs"]] == [0, 1]
    assert payload["request_id"] == "req-123"


async def test_snippet_endpoint_custom_delimiters() -> None:
    async with get_client() as client:
        response = await client.post(
            "/snippet",
            json={
                "text": "Just bite the bullet.",
                "keywords": ["bullet"],
                "start_tag": "<b>",
                "end_tag": "</b>",
            },
        )
    assert response.status_code == 200
    assert response.json()["html"] == "Just bite the <b>bullet</b>."


async def test_snippet_endpoint_without_match_returns_null() -> None:
    async with get_client() as client:
        response = await client.post("/snippet", json={"text": TEXT, "keywords": ["cobol"]})
    assert response.status_code == 200
    payload = response.json()
    assert payload["text"] is None
    assert payload["html"] is None
    assert payload["missing_keywords"] == ["cobol"]
    assert payload["request_id"]


async def test_snippet_endpoint_rejects_too_many_keywords() -> None:
    keywords = [f"word{idx}" for idx in range(40)]
    async with get_client() as client:
        response = await client.post("/snippet", json={"text": TEXT, "keywords": keywords})
    assert response.status_code == 400
    assert "Too many keywords" in response.json()["detail"]


async def test_snippet_file_endpoint() -> None:
    async with get_client() as client:
        response = await client.post(
            "/snippet/file",
            files={"file": ("languages.txt", TEXT.encode("utf-8"), "text/plain")},
            data={"keywords": ["lazy"], "max_length": "200"},
        )
    assert response.status_code == 200
    payload = response.json()
    assert payload["text"].startswith("Haskell is a purely functional")
    assert "<span class=\"quoted\">lazy</span>" in payload["html"]


async def test_metrics_endpoint_counts_snippets() -> None:
    async with get_client() as client:
        await client.post("/snippet", json={"text": TEXT, "keywords": ["erlang"]})
        response = await client.get("/metrics")
    assert response.status_code == 200
    assert "snippet_requests_total" in response.text
    assert "snippet_paragraphs_selected" in response.text


async def test_snippet_endpoint_rejects_oversize_text(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNIPPET_MAX_TEXT_BYTES", "64")
    async with get_client() as client:
        response = await client.post("/snippet", json={"text": TEXT, "keywords": ["haskell"]})
    assert response.status_code == 400
    assert "64 bytes" in response.json()["detail"]


async def test_snippet_file_endpoint_rejects_oversize_upload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNIPPET_MAX_TEXT_BYTES", "64")
    async with get_client() as client:
        response = await client.post(
            "/snippet/file",
            files={"file": ("languages.txt", TEXT.encode("utf-8"), "text/plain")},
            data={"keywords": ["lazy"]},
        )
    assert response.status_code == 400
    assert "64 bytes" in response.json()["detail"]


async def test_snippet_endpoint_rejects_scoring_over_budget(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNIPPET_MAX_SUBSET_EVALUATIONS", "10")
    async with get_client() as client:
        response = await client.post(
            "/snippet",
            json={"text": TEXT, "keywords": ["haskell", "erlang", "lazy", "telecom"]},
        )
    assert response.status_code == 400
    assert "keyword subsets" in response.json()["detail"]


async def test_metrics_endpoint_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNIPPET_METRICS_ENABLED", "false")
    async with get_client() as client:
        response = await client.get("/metrics")
    assert response.status_code == 404
