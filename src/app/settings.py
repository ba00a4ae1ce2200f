from __future__ import annotations

import os
from dataclasses import dataclass

try:
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - optional in minimal setups
    load_dotenv = None

if load_dotenv is not None:
    load_dotenv()


def _int_from_env(name: str, fallback: str) -> int:
    raw = os.getenv(name, fallback).strip()
    try:
        return int(raw)
    except ValueError:
        return int(fallback)


@dataclass(frozen=True)
class Settings:
    max_length: int = int(os.getenv("SNIPPET_MAX_LENGTH", "80"))
    start_tag: str = os.getenv("SNIPPET_START_TAG", '<span class="quoted">')
    end_tag: str = os.getenv("SNIPPET_END_TAG", "</span>")
    max_keywords_raw: str = os.getenv("SNIPPET_MAX_KEYWORDS", "10")
    max_subset_evaluations_raw: str = os.getenv("SNIPPET_MAX_SUBSET_EVALUATIONS", "1000000")
    max_text_bytes_raw: str = os.getenv("SNIPPET_MAX_TEXT_BYTES", "1048576")
    metrics_enabled_raw: str = os.getenv("SNIPPET_METRICS_ENABLED", "true")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def max_keywords(self) -> int:
        return _int_from_env("SNIPPET_MAX_KEYWORDS", self.max_keywords_raw)

    @property
    def max_subset_evaluations(self) -> int:
        return _int_from_env("SNIPPET_MAX_SUBSET_EVALUATIONS", self.max_subset_evaluations_raw)

    @property
    def max_text_bytes(self) -> int:
        return _int_from_env("SNIPPET_MAX_TEXT_BYTES", self.max_text_bytes_raw)

    @property
    def metrics_enabled(self) -> bool:
        raw = os.getenv("SNIPPET_METRICS_ENABLED", self.metrics_enabled_raw)
        return raw.strip().lower() in {"1", "true", "yes"}


settings = Settings()
