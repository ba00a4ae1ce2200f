from __future__ import annotations

"""Keyword subset scoring for a single paragraph.

To decide which keywords "apply" to a paragraph, every non-empty subset of
the keyword set is scored. Subsets are produced by counting in binary over
the keyword indices, from the full set down to single keywords:

    a b c
    a b
    a   c
    a
      b c
      b
        c

Each matching keyword is worth ``1 + spaces in the paragraph``, so longer
paragraphs score higher per match. A subset is recorded at the index equal
to its score only when the score exceeds the subset size, and a subset seen
later replaces an earlier one with the same score.
"""

from typing import Iterator, Mapping, Sequence

from src.snippet.errors import ScoringBudgetError
from src.snippet.keywords import matches
from src.snippet.types import Paragraph, ScoredParagraph


def _subset(keywords: Sequence[str], mask: int) -> tuple[str, ...]:
    return tuple(keyword for bit, keyword in enumerate(keywords) if mask & (1 << bit))


def enumerate_subsets(keywords: Sequence[str]) -> Iterator[tuple[str, ...]]:
    """Yield every non-empty keyword subset, largest bitmask first."""
    for mask in range((1 << len(keywords)) - 1, 0, -1):
        yield _subset(keywords, mask)


def keyword_weights(content: str, keywords: Sequence[str]) -> dict[str, int]:
    """Return the match weight of each keyword in the paragraph content."""
    weight = 1 + content.count(" ")
    return {keyword: weight if matches(content, keyword) else 0 for keyword in keywords}


def subset_evaluations(matched_paragraphs: int, keyword_count: int) -> int:
    """Number of subsets scored for ``matched_paragraphs`` paragraphs."""
    return matched_paragraphs * ((1 << keyword_count) - 1)


def check_subset_budget(matched_paragraphs: int, keyword_count: int, limit: int | None) -> None:
    """Refuse to enumerate more subsets than ``limit`` across all paragraphs."""
    if limit is None or limit <= 0:
        return
    evaluations = subset_evaluations(matched_paragraphs, keyword_count)
    if evaluations > limit:
        raise ScoringBudgetError(evaluations, limit)


def score_paragraph(
    paragraph: Paragraph,
    keywords: Sequence[str],
    weights: Mapping[str, int] | None = None,
) -> ScoredParagraph:
    """Build the subset score table and best keyword subset for a paragraph."""
    if weights is None:
        weights = keyword_weights(paragraph.content, keywords)
    matched_mask = 0
    for bit, keyword in enumerate(keywords):
        if weights[keyword]:
            matched_mask |= 1 << bit
    # No subset can score when nothing matched.
    if not matched_mask:
        return ScoredParagraph(paragraph=paragraph, score_table={}, final_score=0, best_keywords=())
    # Every matching keyword carries the same paragraph-length weight.
    weight = 1 + paragraph.content.count(" ")
    masks: dict[int, int] = {}
    for mask in range((1 << len(keywords)) - 1, 0, -1):
        score = weight * (mask & matched_mask).bit_count()
        if score > mask.bit_count():
            masks[score] = mask
    if not masks:
        return ScoredParagraph(paragraph=paragraph, score_table={}, final_score=0, best_keywords=())
    score_table = {score: _subset(keywords, mask) for score, mask in masks.items()}
    final_score = max(score_table)
    return ScoredParagraph(
        paragraph=paragraph,
        score_table=score_table,
        final_score=final_score,
        best_keywords=score_table[final_score],
    )
