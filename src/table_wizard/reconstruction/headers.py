"""Header row classification.

Column anchors are normally taken from the header row, so picking the wrong
row misaligns every column.  A header is either the first candidate row or a
bold row whose x-positions do not line up with the row below it (a row that
lines up with its neighbour is data, whatever its font).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from table_wizard.config import DEFAULT_CONFIG, ReconstructionConfig
from table_wizard.reconstruction.rows import Row

logger = logging.getLogger(__name__)

HeaderReason = Literal["first_row", "bold_distinct", "default"]


@dataclass(frozen=True)
class HeaderDecision:
    """Which candidate row is the header, and why."""

    index: int
    reason: HeaderReason

    @property
    def confident(self) -> bool:
        return self.reason != "default"


def rows_align(row: Row, next_row: Row, config: ReconstructionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if *row* and *next_row* share a column structure.

    Rows align when their token counts differ by at most one and enough of
    the tokens in *row* have an x-origin close to some x-origin in *next_row*.
    """
    xs = [t.x for t in row.content_tokens]
    next_xs = [t.x for t in next_row.content_tokens]
    if abs(len(xs) - len(next_xs)) > 1:
        return False

    matching = sum(1 for x in xs if any(abs(x - nx) < config.header_align_distance for nx in next_xs))
    return matching >= min(len(xs), len(next_xs)) * config.header_align_fraction


def is_likely_header(rows: Sequence[Row], index: int, config: ReconstructionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if ``rows[index]`` looks like a header row."""
    if index == 0 and config.first_row_is_header:
        return True

    row = rows[index]
    if index + 1 < len(rows) and rows_align(row, rows[index + 1], config):
        return False
    return row.is_bold


def classify_header(rows: Sequence[Row], config: ReconstructionConfig = DEFAULT_CONFIG) -> HeaderDecision | None:
    """Pick the header among the first few candidate rows (None when there are no rows)."""
    if not rows:
        return None

    for i in range(min(len(rows), config.header_scan_depth)):
        if is_likely_header(rows, i, config):
            reason: HeaderReason = "first_row" if i == 0 and config.first_row_is_header else "bold_distinct"
            logger.debug("Header row %d (%s): %r", i, reason, rows[i].text)
            return HeaderDecision(index=i, reason=reason)

    return HeaderDecision(index=0, reason="default")
