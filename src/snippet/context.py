from __future__ import annotations

"""Snippet assembly: locate search terms in a text and extract their context.

Given a piece of text and some search terms, ``SnippetContext`` finds the
paragraphs that best cover the terms, trims each of them to an equal share
of the length budget and joins them with an ellipsis. The result is
available as plain text or as escaped markup with the terms highlighted.

    context = SnippetContext(text, "bite", "bullet")
    context.as_text()
    context.as_html(start="<b>", end="</b>")
    context.keywords = ["foo", "bar"]  # recomputed on next access
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from src.snippet.highlights import DEFAULT_END_TAG, DEFAULT_START_TAG, render_highlights
from src.snippet.keywords import normalize_keywords
from src.snippet.paragraphs import split_paragraphs
from src.snippet.scoring import check_subset_budget, keyword_weights, score_paragraph
from src.snippet.selection import select_paragraphs
from src.snippet.types import Paragraph, SelectedParagraph, SnippetResult, TrimmedParagraph
from src.snippet.windowing import ELLIPSIS, slim_paragraph

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 80
DEFAULT_MAX_KEYWORDS = 10
DEFAULT_MAX_SUBSET_EVALUATIONS = 1_000_000


@dataclass(frozen=True)
class SnippetOptions:
    """Defaults applied when a call does not override them.

    ``max_keywords`` and ``max_subset_evaluations`` bound the subset
    enumeration done by the scorer; 0 disables either check.
    """
    max_length: int = DEFAULT_MAX_LENGTH
    start_tag: str = DEFAULT_START_TAG
    end_tag: str = DEFAULT_END_TAG
    max_keywords: int = DEFAULT_MAX_KEYWORDS
    max_subset_evaluations: int = DEFAULT_MAX_SUBSET_EVALUATIONS


class SnippetContext:
    """Snippet request over one text and a mutable keyword list."""

    def __init__(self, text: str, *keywords: str, options: SnippetOptions | None = None) -> None:
        self.text = text
        self.options = options or SnippetOptions()
        self._keywords: tuple[str, ...] = ()
        self._paragraphs: tuple[Paragraph, ...] | None = None
        self._selection: tuple[SelectedParagraph, ...] | None = None
        self._trimmed: dict[float, tuple[TrimmedParagraph, ...]] = {}
        self.set_keywords(*keywords)

    @property
    def keywords(self) -> tuple[str, ...]:
        """Normalized (lower-cased, whitespace-collapsed) keywords."""
        return self._keywords

    @keywords.setter
    def keywords(self, values: Iterable[str]) -> None:
        if isinstance(values, str):
            values = (values,)
        self.set_keywords(*values)

    def set_keywords(self, *keywords: str) -> tuple[str, ...]:
        """Replace the keywords and drop every result computed for the old ones.

        Calling it with no keywords clears the list, after which no snippet
        is produced until new keywords are set.
        """
        self._keywords = normalize_keywords(keywords, self.options.max_keywords)
        self._selection = None
        self._trimmed.clear()
        return self._keywords

    def paragraphs(self) -> list[Paragraph]:
        if self._paragraphs is None:
            self._paragraphs = tuple(split_paragraphs(self.text))
        return list(self._paragraphs)

    def selection(self) -> list[SelectedParagraph]:
        """Return the selected paragraphs, in document order."""
        if self._selection is None:
            self._selection = tuple(self._select())
        return list(self._selection)

    def _select(self) -> list[SelectedParagraph]:
        if not self._keywords:
            return []
        paragraphs = self.paragraphs()
        weights = [keyword_weights(paragraph.content, self._keywords) for paragraph in paragraphs]
        matched = sum(1 for weight in weights if any(weight.values()))
        check_subset_budget(matched, len(self._keywords), self.options.max_subset_evaluations)
        scored = [
            score_paragraph(paragraph, self._keywords, weight)
            for paragraph, weight in zip(paragraphs, weights)
        ]
        return select_paragraphs(scored, self._keywords)

    def paras(self, max_length: float | None = None) -> list[TrimmedParagraph]:
        """Return shortened paragraphs that fit together into ``max_length`` characters."""
        budget = max_length or self.options.max_length
        cached = self._trimmed.get(budget)
        if cached is None:
            selected = self.selection()
            trimmed: list[TrimmedParagraph] = []
            if selected:
                share = budget / len(selected)
                for item in selected:
                    trimmed.append(
                        TrimmedParagraph(
                            order=item.paragraph.order,
                            text=slim_paragraph(item.paragraph.content, item.keywords, share),
                            keywords=item.keywords,
                        )
                    )
            cached = self._trimmed[budget] = tuple(trimmed)
        return list(cached)

    def as_text(self, max_length: float | None = None) -> str | None:
        """Plain-text snippet, or None when no keyword occurs in the text."""
        paras = self.paras(max_length)
        if not paras:
            return None
        return ELLIPSIS.join(para.text for para in paras)

    def as_html(
        self,
        max_length: float | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> str | None:
        """Escaped snippet with keywords wrapped in ``start``/``end``."""
        paras = self.paras(max_length)
        if not paras:
            return None
        start_tag = start or self.options.start_tag
        end_tag = end or self.options.end_tag
        return ELLIPSIS.join(
            render_highlights(para.text, para.keywords, start_tag, end_tag) for para in paras
        )

    def matched_keywords(self) -> tuple[str, ...]:
        covered = {keyword for item in self.selection() for keyword in item.keywords}
        return tuple(keyword for keyword in self._keywords if keyword in covered)


def build_snippet(
    text: str,
    keywords: Iterable[str],
    max_length: int | None = None,
    start_tag: str | None = None,
    end_tag: str | None = None,
    options: SnippetOptions | None = None,
) -> SnippetResult:
    """Build plain and marked-up snippets for one text and keyword list."""
    context = SnippetContext(text, *keywords, options=options)
    paras = context.paras(max_length)
    result = SnippetResult(
        text=context.as_text(max_length),
        html=context.as_html(max_length, start=start_tag, end=end_tag),
        keywords=context.keywords,
        matched_keywords=context.matched_keywords(),
        paragraphs=paras,
    )
    if result.text is None:
        logger.info(
            "snippet_empty",
            extra={"keywords": len(result.keywords), "text_length": len(text)},
        )
    else:
        logger.info(
            "snippet_built",
            extra={
                "keywords": len(result.keywords),
                "matched": len(result.matched_keywords),
                "paragraphs": len(paras),
                "snippet_length": len(result.text),
            },
        )
    return result
