from __future__ import annotations

"""Exceptions raised by the snippet engine."""


class SnippetError(RuntimeError):
    """Base class for snippet engine errors."""
    pass


class KeywordLimitError(SnippetError, ValueError):
    """Raised when a keyword set is too large to enumerate subsets for."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Too many keywords: {count} (limit {limit})")
        self.count = count
        self.limit = limit


class SnippetInvariantError(SnippetError):
    """Raised when an internal invariant of the engine is violated."""
    pass


class ScoringBudgetError(SnippetError, ValueError):
    """Raised when scoring would enumerate too many keyword subsets."""

    def __init__(self, evaluations: int, limit: int) -> None:
        super().__init__(f"Too many keyword subsets to score: {evaluations} (limit {limit})")
        self.evaluations = evaluations
        self.limit = limit
