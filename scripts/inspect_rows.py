"""Debug script: show how one PDF page is grouped into rows and tables.

Prints the estimated row tolerance, every row (anchor y, token count, text),
the header decision and column anchors, and the resulting tables.  Useful
when a table comes out with merged or split columns.

Usage:
  python scripts/inspect_rows.py path/to/file.pdf --page 2
"""

import argparse
import logging

from table_wizard.config import load_config
from table_wizard.decoding import PdfPlumberSource
from table_wizard.formatting import render_markdown
from table_wizard.reconstruction.columns import detect_columns
from table_wizard.reconstruction.normalize import normalize_token
from table_wizard.reconstruction.rows import estimate_row_tolerance, group_rows
from table_wizard.reconstruction.segmentation import potential_table_rows, segment_tables
from table_wizard.schema import coerce_tokens

# ─── Setup ────────────────────────────────────────────────────────────────────

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# ─── Main ─────────────────────────────────────────────────────────────────────


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("pdf")
    parser.add_argument("--page", type=int, default=1)
    args = parser.parse_args()

    config = load_config()
    with PdfPlumberSource(args.pdf) as source:
        page = source.read_page(args.page)

    tokens = [normalize_token(t) for t in coerce_tokens(page.tokens)]
    tolerance = estimate_row_tolerance(tokens, config)
    rows = group_rows(tokens, config, tolerance=tolerance)
    print(f"Page {args.page}: {len(tokens)} tokens, tolerance {tolerance:.2f}, {len(rows)} rows\n")

    for i, row in enumerate(rows):
        marker = " * " if row.qualifying_count >= config.min_row_tokens else "   "
        print(f"{marker}[{i:3d}] y={row.anchor_y:8.2f}  n={row.qualifying_count:2d}  {row.text[:100]}")
    print()

    candidates = potential_table_rows(rows, config)
    if len(candidates) >= 2:
        layout = detect_columns(candidates, config)
        print(f"Header: {layout.header}")
        print(f"Strategy: {layout.strategy.value}, anchors: {[round(a, 1) for a in layout.anchors]}\n")

    for i, table in enumerate(segment_tables(rows, config, page_number=args.page), start=1):
        print(render_markdown(table, title=f"Table {i}"))
        print()


if __name__ == "__main__":
    main()
