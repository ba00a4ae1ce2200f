from __future__ import annotations

"""Highlight markup for keywords in trimmed paragraphs."""

from typing import Sequence

from markupsafe import escape

from src.snippet.keywords import alternation_pattern

DEFAULT_START_TAG = '<span class="quoted">'
DEFAULT_END_TAG = "</span>"


def render_highlights(
    text: str,
    keywords: Sequence[str],
    start_tag: str | None = None,
    end_tag: str | None = None,
) -> str:
    """Escape ``text`` and wrap each keyword occurrence in the delimiters."""
    start_tag = start_tag or DEFAULT_START_TAG
    end_tag = end_tag or DEFAULT_END_TAG
    pattern = alternation_pattern(keywords)
    if pattern is None:
        return str(escape(text))
    output: list[str] = []
    # re.split keeps the captured keyword at every odd index.
    for idx, fragment in enumerate(pattern.split(text)):
        if not fragment:
            continue
        escaped = str(escape(fragment))
        if idx % 2:
            escaped = f"{start_tag}{escaped}{end_tag}"
        output.append(escaped)
    return "".join(output)
