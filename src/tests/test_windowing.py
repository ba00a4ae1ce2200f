from __future__ import annotations

"""Context window and paragraph trimming tests."""

import pytest

from src.snippet.errors import SnippetInvariantError
from src.snippet.windowing import get_context, slim_paragraph

FOX = "the quick brown fox jumped over the lazy dog"


def test_get_context_keeps_radius_words_either_side() -> None:
    assert get_context(1, FOX, ["fox"]) == "brown fox jumped"


def test_get_context_elides_gaps_between_occurrences() -> None:
    assert get_context(0, FOX, ["fox", "dog"]) == "fox ... dog"


def test_get_context_merges_overlapping_windows() -> None:
    assert get_context(2, FOX, ["fox", "the lazy"]) == "quick brown fox jumped over the lazy dog"


def test_get_context_keeps_whole_phrase() -> None:
    text = "we all say bite the bullet today and tomorrow"

    assert get_context(0, text, ["bite the bullet"]) == "bite the bullet"


def test_get_context_is_case_insensitive() -> None:
    assert get_context(0, "The Quick Brown Fox", ["fox"]) == "Fox"


def test_get_context_rejects_unlocatable_keyword() -> None:
    with pytest.raises(SnippetInvariantError):
        get_context(1, FOX, ["cat"])


def test_slim_paragraph_leaves_short_text_alone() -> None:
    assert slim_paragraph("  short text  ", ["short"], 80) == "short text"


def test_slim_paragraph_picks_widest_window_under_budget() -> None:
    text = "alpha " * 20 + "needle " + "omega " * 20

    slimmed = slim_paragraph(text, ["needle"], 30)

    assert slimmed == "alpha needle omega"
    assert len(slimmed) < 30


def test_slim_paragraph_falls_back_to_keywords() -> None:
    text = "x " * 30 + "longword1 " + "x " * 30 + "longword2"

    slimmed = slim_paragraph(text, ["longword1", "longword2"], 12)

    assert slimmed == "longword1 ... longword2"


def test_slim_paragraph_keeps_text_exactly_at_budget() -> None:
    text = "alpha needle omega"

    assert slim_paragraph(text, ["needle"], len(text)) == text
    assert slim_paragraph(text, ["needle"], len(text) - 1) == "needle"
