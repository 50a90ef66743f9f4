"""Table segmentation: split a page's aligned rows into discrete tables.

Anchors come from the potential table rows only (rows with enough tokens),
but every row of the page is then re-assigned against them, so a sparse row
inside a table becomes a sparse row of cells instead of being dropped.
Structurally blank rows separate one table from the next.
"""

import logging
from collections.abc import Sequence

from table_wizard.config import DEFAULT_CONFIG, ReconstructionConfig
from table_wizard.reconstruction.cells import assign_row, is_blank
from table_wizard.reconstruction.columns import detect_columns
from table_wizard.reconstruction.rows import Row
from table_wizard.schema import ExtractedTable

logger = logging.getLogger(__name__)


def potential_table_rows(rows: Sequence[Row], config: ReconstructionConfig = DEFAULT_CONFIG) -> list[Row]:
    """Return the rows carrying at least ``min_row_tokens`` non-empty tokens."""
    return [row for row in rows if row.qualifying_count >= config.min_row_tokens]


def split_on_blank_rows(
    aligned: Sequence[list[str]],
    min_rows: int = DEFAULT_CONFIG.min_table_rows,
) -> list[list[list[str]]]:
    """Group consecutive non-blank rows; keep only groups of at least *min_rows* rows.

    A blank row closes the group in progress.  A group that is still too short
    when it is closed is discarded, and leading blank rows are ignored.
    """
    groups: list[list[list[str]]] = []
    current: list[list[str]] = []
    for cells in aligned:
        if is_blank(cells):
            if len(current) >= min_rows:
                groups.append(current)
            elif current:
                logger.debug("Discarding %d-row fragment before blank row", len(current))
            current = []
            continue
        current.append(cells)
    if len(current) >= min_rows:
        groups.append(current)
    return groups


def segment_tables(
    rows: Sequence[Row],
    config: ReconstructionConfig = DEFAULT_CONFIG,
    page_number: int = 1,
) -> list[ExtractedTable]:
    """Turn a page's rows (top to bottom) into zero or more tables."""
    candidates = potential_table_rows(rows, config)
    if len(candidates) < 2:
        logger.debug("Page %d: %d potential table row(s), no tables", page_number, len(candidates))
        return []

    layout = detect_columns(candidates, config)
    if layout.column_count < config.min_table_columns:
        logger.debug("Page %d: only %d column(s) detected, no tables", page_number, layout.column_count)
        return []

    aligned = [assign_row(row, layout.anchors) for row in rows]
    groups = split_on_blank_rows(aligned, config.min_table_rows)

    tables = [
        ExtractedTable(
            page_number=page_number,
            index_on_page=i,
            column_strategy=layout.strategy.value,
            rows=group,
        )
        for i, group in enumerate(groups)
    ]
    logger.debug("Page %d: %d table(s), %d columns", page_number, len(tables), layout.column_count)
    return tables
