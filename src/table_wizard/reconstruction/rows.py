"""Row grouping: cluster tokens into visual lines.

Line spacing varies a little with font rendering, so the vertical tolerance
is derived from the most common gap between distinct y-values on the page
rather than from the first or the average gap.  A single large gap (a title
followed by whitespace) then cannot inflate the tolerance.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from table_wizard.config import DEFAULT_CONFIG, ReconstructionConfig
from table_wizard.schema import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """Tokens sharing a vertical band, sorted left to right."""

    anchor_y: float
    tokens: tuple[Token, ...]

    @property
    def content_tokens(self) -> tuple[Token, ...]:
        """Tokens that carry text (whitespace-only tokens normalize to "")."""
        return tuple(t for t in self.tokens if t.text)

    @property
    def qualifying_count(self) -> int:
        return len(self.content_tokens)

    @property
    def is_bold(self) -> bool:
        return any(t.is_bold for t in self.content_tokens)

    @property
    def text(self) -> str:
        return " ".join(t.text for t in self.content_tokens)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_row_tolerance(tokens: Sequence[Token], config: ReconstructionConfig = DEFAULT_CONFIG) -> float:
    """Return the vertical distance within which two tokens share a row.

    Builds a histogram of rounded gaps between consecutive distinct y-values
    (ignoring gaps at or below the noise floor) and scales its mode.  Ties go
    to the gap size that reached the winning count first, scanning bottom-up.
    """
    if len(tokens) < 2:
        return config.default_row_tolerance

    ys = sorted({t.y for t in tokens})
    histogram: dict[int, int] = {}
    max_count = 0
    most_common: int | None = None
    for lower, upper in zip(ys, ys[1:]):
        diff = abs(upper - lower)
        if diff <= config.y_noise_floor:
            continue
        rounded = _round_half_up(diff)
        histogram[rounded] = histogram.get(rounded, 0) + 1
        if histogram[rounded] > max_count:
            max_count = histogram[rounded]
            most_common = rounded

    if most_common is None:
        return config.default_row_tolerance
    return most_common * config.row_spacing_factor


def group_rows(
    tokens: Sequence[Token],
    config: ReconstructionConfig = DEFAULT_CONFIG,
    tolerance: float | None = None,
) -> list[Row]:
    """Cluster *tokens* into rows ordered top to bottom.

    A token joins the current row while its y stays within *tolerance* of the
    row's first token; otherwise it opens a new row.  Pass *tolerance* to skip
    the estimate.
    """
    if not tokens:
        return []

    ordered = sorted(tokens, key=lambda t: t.y, reverse=True)
    if tolerance is None:
        tolerance = estimate_row_tolerance(ordered, config)

    groups: list[tuple[float, list[Token]]] = []
    current: list[Token] = []
    current_y = ordered[0].y
    for token in ordered:
        if abs(token.y - current_y) > tolerance:
            if current:
                groups.append((current_y, current))
            current = []
            current_y = token.y
        current.append(token)
    if current:
        groups.append((current_y, current))

    rows = [Row(anchor_y=y, tokens=tuple(sorted(members, key=lambda t: t.x))) for y, members in groups]
    logger.debug("Grouped %d tokens into %d rows (tolerance %.2f)", len(tokens), len(rows), tolerance)
    return rows
