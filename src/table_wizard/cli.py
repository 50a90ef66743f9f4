"""Command-line entry point: extract tables from a PDF (or a token dump).

Usage:
    python -m table_wizard.cli invoice.pdf                        # JSON to stdout
    python -m table_wizard.cli invoice.pdf --format markdown      # markdown preview
    python -m table_wizard.cli tokens.json --output tables.json   # pre-decoded tokens
    python -m table_wizard.cli report.pdf --workers 4 --on-decode-error skip
"""

import argparse
import logging
import sys
from pathlib import Path

from table_wizard.config import load_config
from table_wizard.decoding import JsonTokenSource, PdfPlumberSource, TokenSource
from table_wizard.errors import ConfigError, DecodeUnavailable
from table_wizard.extract import extract_tables
from table_wizard.formatting import render_document_markdown, to_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconstruct tables from positioned text in a PDF.")
    parser.add_argument("path", type=Path, help="PDF file, or a JSON token dump")
    parser.add_argument("--tokens-json", action="store_true", help="treat PATH as a JSON token dump")
    parser.add_argument("--format", choices=["json", "markdown"], default="json", help="output format")
    parser.add_argument("--output", type=Path, default=None, help="write output here instead of stdout")
    parser.add_argument("--workers", type=int, default=None, help="threads for page reconstruction")
    parser.add_argument("--column-strategy", choices=["auto", "header", "cluster"], default=None)
    parser.add_argument("--on-decode-error", choices=["abort", "skip"], default=None)
    parser.add_argument("--progress", action="store_true", help="show a progress bar while decoding")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def open_source(path: Path, tokens_json: bool = False) -> TokenSource:
    """Pick a token source for *path* (JSON dumps by flag or by suffix)."""
    if tokens_json or path.suffix.lower() == ".json":
        return JsonTokenSource(path)
    return PdfPlumberSource(path)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.path.exists():
        logger.error("File not found: %s", args.path)
        return 1

    try:
        config = load_config(
            workers=args.workers,
            column_strategy=args.column_strategy,
            on_decode_error=args.on_decode_error,
        )
        with open_source(args.path, args.tokens_json) as source:
            result = extract_tables(source, config, show_progress=args.progress)
    except (ConfigError, DecodeUnavailable) as exc:
        logger.error("%s", exc)
        return 1

    rendered = render_document_markdown(result) if args.format == "markdown" else to_json(result)
    if args.output is not None:
        args.output.write_text(rendered + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(rendered + "\n")

    if result.found_tables:
        print(f"Extracted {len(result.tables)} table(s), {result.total_rows} rows", file=sys.stderr)
    else:
        print("No tables detected in this document.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
