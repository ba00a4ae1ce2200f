from __future__ import annotations

from functools import lru_cache

from src.app.settings import settings
from src.snippet.context import SnippetOptions


@lru_cache
def get_snippet_options() -> SnippetOptions:
    return SnippetOptions(
        max_length=settings.max_length,
        start_tag=settings.start_tag,
        end_tag=settings.end_tag,
        max_keywords=settings.max_keywords,
        max_subset_evaluations=settings.max_subset_evaluations,
    )


def reset_options_cache() -> None:
    get_snippet_options.cache_clear()
