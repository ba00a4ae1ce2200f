from __future__ import annotations

"""Plain text loader for snippet sources."""

from pathlib import Path

from src.snippet.types import Document


class TextLoaderError(RuntimeError):
    """Raised when a text source cannot be loaded."""
    pass


def _check_size(size: int, max_bytes: int | None, source: str) -> None:
    if max_bytes and max_bytes > 0 and size > max_bytes:
        raise TextLoaderError(f"{source} exceeds maximum size of {max_bytes} bytes")


def load_text_file(path: Path, doc_id: str | None = None, max_bytes: int | None = None) -> Document:
    """Load a UTF-8 text file from disk into a Document."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise TextLoaderError(f"Unable to read {path}: {exc.strerror or exc}") from exc
    return load_text_bytes(data, doc_id=doc_id or path.stem, source=str(path), max_bytes=max_bytes)


def load_text_bytes(data: bytes, doc_id: str, source: str, max_bytes: int | None = None) -> Document:
    """Load plain text bytes into a Document."""
    _check_size(len(data), max_bytes, source)
    content = data.decode("utf-8", errors="ignore")
    return Document(doc_id=doc_id, content=content, metadata={"source": source})
