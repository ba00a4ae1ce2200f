from __future__ import annotations

"""Word-aligned context windows around keyword occurrences."""

import logging
import re
from bisect import bisect_left, bisect_right
from typing import Sequence

from src.snippet.errors import SnippetInvariantError
from src.snippet.keywords import keyword_pattern

logger = logging.getLogger(__name__)

ELLIPSIS = " ... "
_WORD_RE = re.compile(r"\S+")


def _marked_words(text: str, words: list[re.Match[str]], keywords: Sequence[str]) -> list[int]:
    """Return indices of words overlapped by any keyword occurrence."""
    starts = [word.start() for word in words]
    marked: set[int] = set()
    for keyword in keywords:
        found = False
        for match in keyword_pattern(keyword).finditer(text):
            found = True
            first = max(0, bisect_right(starts, match.start()) - 1)
            last = bisect_left(starts, match.end()) - 1
            marked.update(range(first, last + 1))
        if not found:
            raise SnippetInvariantError(f"Keyword {keyword!r} was assigned but is not in the text")
    return sorted(marked)


def _window(words: list[re.Match[str]], marked: list[int], radius: int) -> str:
    """Join the words within ``radius`` of a marked word, eliding the gaps."""
    if not marked:
        return ""
    last_index = len(words) - 1
    ranges: list[list[int]] = []
    for index in marked:
        low = max(0, index - radius)
        high = min(last_index, index + radius)
        if ranges and low <= ranges[-1][1] + 1:
            ranges[-1][1] = max(ranges[-1][1], high)
        else:
            ranges.append([low, high])
    return ELLIPSIS.join(
        " ".join(words[idx].group(0) for idx in range(low, high + 1)) for low, high in ranges
    )


def get_context(radius: int, text: str, keywords: Sequence[str]) -> str:
    """Return the keyword occurrences in ``text`` with ``radius`` words either side."""
    words = list(_WORD_RE.finditer(text))
    if not words:
        return ""
    return _window(words, _marked_words(text, words, keywords), max(0, radius))


def slim_paragraph(text: str, keywords: Sequence[str], max_length: float) -> str:
    """Shorten a paragraph to fit ``max_length`` while keeping its keywords.

    The widest context window that is strictly shorter than the budget wins.
    When even the bare keyword words do not fit, the keywords themselves are
    joined with an ellipsis.
    """
    content = text.strip()
    # A paragraph exactly at the budget is kept whole; windows must be shorter.
    if len(content) <= max_length:
        return content
    words = list(_WORD_RE.finditer(content))
    marked = _marked_words(content, words, keywords)
    for radius in range(len(words) // 2, -1, -1):
        trial = _window(words, marked, radius)
        if len(trial) < max_length:
            return trial
    logger.info(
        "paragraph_untrimmable",
        extra={"length": len(content), "max_length": max_length, "keywords": len(keywords)},
    )
    return ELLIPSIS.join(keywords)
