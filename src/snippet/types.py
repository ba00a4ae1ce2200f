from __future__ import annotations

"""Core data types for paragraphs, selections and snippets."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """Source document with metadata."""
    doc_id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Paragraph:
    """Normalized paragraph with its position in the source text."""
    order: int
    content: str


@dataclass(frozen=True)
class ScoredParagraph:
    """Paragraph with its subset score table."""
    paragraph: Paragraph
    score_table: dict[int, tuple[str, ...]]
    final_score: int
    best_keywords: tuple[str, ...]


@dataclass(frozen=True)
class SelectedParagraph:
    """Paragraph chosen to cover a subset of the keywords."""
    paragraph: Paragraph
    keywords: tuple[str, ...]
    score: int


@dataclass(frozen=True)
class TrimmedParagraph:
    """Windowed paragraph text ready for rendering."""
    order: int
    text: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class SnippetResult:
    """Plain and marked-up snippet with the keywords it covers."""
    text: str | None
    html: str | None
    keywords: tuple[str, ...]
    matched_keywords: tuple[str, ...]
    paragraphs: list[TrimmedParagraph]

    @property
    def missing_keywords(self) -> tuple[str, ...]:
        matched = set(self.matched_keywords)
        return tuple(keyword for keyword in self.keywords if keyword not in matched)
