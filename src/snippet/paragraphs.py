from __future__ import annotations

"""Paragraph splitting and whitespace normalization."""

import re

from src.snippet.types import Paragraph

_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINE_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def split_paragraphs(text: str) -> list[Paragraph]:
    """Split text on blank lines into ordered, normalized paragraphs."""
    if not text or not text.strip():
        return []
    paragraphs: list[Paragraph] = []
    for block in _BLANK_LINE_RE.split(text):
        content = normalize_text(block)
        if not content:
            continue
        paragraphs.append(Paragraph(order=len(paragraphs), content=content))
    return paragraphs
