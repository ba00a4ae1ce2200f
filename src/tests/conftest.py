from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SNIPPET_METRICS_ENABLED", "true")
os.environ.setdefault("SNIPPET_MAX_LENGTH", "80")
os.environ.pop("SNIPPET_MAX_KEYWORDS", None)
os.environ.pop("SNIPPET_MAX_SUBSET_EVALUATIONS", None)
os.environ.pop("SNIPPET_MAX_TEXT_BYTES", None)
os.environ.pop("SNIPPET_START_TAG", None)
os.environ.pop("SNIPPET_END_TAG", None)


@pytest.fixture(autouse=True)
def fresh_snippet_options():
    """Rebuild cached snippet options around each test so env overrides apply."""
    from src.app.dependencies import reset_options_cache

    reset_options_cache()
    yield
    reset_options_cache()
