from __future__ import annotations

"""Greedy paragraph selection covering the keyword set."""

import logging
from typing import Sequence

from src.snippet.types import ScoredParagraph, SelectedParagraph

logger = logging.getLogger(__name__)


def _keyword_order(keyword: str) -> tuple[int, str]:
    return (-len(keyword), keyword)


def select_paragraphs(
    scored: Sequence[ScoredParagraph],
    keywords: Sequence[str],
) -> list[SelectedParagraph]:
    """Pick the highest scoring paragraphs until every keyword is covered.

    Each paragraph is credited with the part of its best keyword subset that
    is still uncovered. The result is returned in document order.
    """
    uncovered = set(keywords)
    selected: list[SelectedParagraph] = []
    ranked = sorted(scored, key=lambda item: item.final_score, reverse=True)
    for item in ranked:
        if not uncovered:
            break
        assigned = uncovered.intersection(item.best_keywords)
        if not assigned:
            continue
        uncovered -= assigned
        selected.append(
            SelectedParagraph(
                paragraph=item.paragraph,
                keywords=tuple(sorted(assigned, key=_keyword_order)),
                score=item.final_score,
            )
        )
    if uncovered and selected:
        logger.debug(
            "keywords_uncovered",
            extra={"uncovered": len(uncovered), "selected": len(selected)},
        )
    selected.sort(key=lambda item: item.paragraph.order)
    return selected
