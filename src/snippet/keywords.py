from __future__ import annotations

"""Keyword normalization and word-boundary matching."""

import re
from functools import lru_cache
from typing import Iterable

from src.snippet.errors import KeywordLimitError

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_keyword(keyword: str) -> str:
    """Lower-case a keyword and collapse its internal whitespace."""
    return _WHITESPACE_RE.sub(" ", keyword).strip().lower()


def normalize_keywords(keywords: Iterable[str], max_keywords: int | None = None) -> tuple[str, ...]:
    """Normalize keywords, dropping empty and repeated entries.

    The scorer enumerates every subset of the result, so the count is
    checked against ``max_keywords`` when one is given.
    """
    seen: set[str] = set()
    normalized: list[str] = []
    for keyword in keywords:
        cleaned = normalize_keyword(keyword)
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        normalized.append(cleaned)
    if max_keywords is not None and max_keywords > 0 and len(normalized) > max_keywords:
        raise KeywordLimitError(len(normalized), max_keywords)
    return tuple(normalized)


@lru_cache(maxsize=1024)
def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile a case-insensitive whole-word pattern for one keyword."""
    return re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)


def alternation_pattern(keywords: Iterable[str]) -> re.Pattern[str] | None:
    """Compile a single capturing pattern matching any of the keywords."""
    escaped = [re.escape(keyword) for keyword in keywords if keyword]
    if not escaped:
        return None
    return re.compile(rf"\b({'|'.join(escaped)})\b", re.IGNORECASE)


def matches(content: str, keyword: str) -> bool:
    """Return True when the keyword occurs as a whole word or phrase."""
    return keyword_pattern(keyword).search(content) is not None
