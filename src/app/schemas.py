from __future__ import annotations

from pydantic import BaseModel, Field


class SnippetRequest(BaseModel):
    text: str
    keywords: list[str] = Field(default_factory=list)
    max_length: int | None = Field(default=None, ge=1, le=10000)
    start_tag: str | None = None
    end_tag: str | None = None


class SnippetParagraph(BaseModel):
    order: int
    text: str
    keywords: list[str]


class SnippetResponse(BaseModel):
    text: str | None
    html: str | None
    keywords: list[str]
    matched_keywords: list[str]
    missing_keywords: list[str]
    paragraphs: list[SnippetParagraph] = Field(default_factory=list)
    request_id: str
