from __future__ import annotations

"""CLI utility to print a keyword snippet for a text file."""

import argparse
import sys
from pathlib import Path

from src.app.dependencies import get_snippet_options
from src.loaders.text import TextLoaderError, load_text_file
from src.snippet.context import SnippetContext
from src.snippet.errors import KeywordLimitError, ScoringBudgetError


def build_parser() -> argparse.ArgumentParser:
    options = get_snippet_options()
    parser = argparse.ArgumentParser(description="Print the context of search terms in a text file.")
    parser.add_argument("path", type=Path, help="Text file to search.")
    parser.add_argument("keywords", nargs="+", help="Keywords or quoted phrases.")
    parser.add_argument(
        "--max-length",
        type=int,
        default=options.max_length,
        help="Maximum snippet length in characters.",
    )
    parser.add_argument("--html", action="store_true", help="Print highlighted markup.")
    parser.add_argument("--start", default=options.start_tag, help="Highlight start delimiter.")
    parser.add_argument("--end", default=options.end_tag, help="Highlight end delimiter.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Print the snippet, returning 1 when none of the keywords occur."""
    args = build_parser().parse_args(argv)
    try:
        document = load_text_file(args.path)
        context = SnippetContext(document.content, *args.keywords, options=get_snippet_options())
    except (TextLoaderError, KeywordLimitError) as exc:
        raise SystemExit(str(exc)) from exc

    try:
        if args.html:
            output = context.as_html(args.max_length, start=args.start, end=args.end)
        else:
            output = context.as_text(args.max_length)
    except ScoringBudgetError as exc:
        raise SystemExit(str(exc)) from exc
    if output is None:
        print("No snippet: none of the keywords occur in the text.", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
