"""Column anchor detection.

Two mutually exclusive strategies produce the anchors for a table:

  HEADER   -- one anchor per header token, at the token's horizontal center.
              Accurate when a header exists, since titles are usually well
              separated and sit over the true column centers.
  CLUSTER  -- sweep every token x-coordinate left to right and close a
              cluster whenever the gap exceeds ``column_gap``; each cluster's
              mean is an anchor.  Needed for borderless tables whose header
              cannot be trusted, where alignment is the only signal.
"""

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from table_wizard.config import DEFAULT_CONFIG, ReconstructionConfig
from table_wizard.reconstruction.headers import HeaderDecision, classify_header
from table_wizard.reconstruction.rows import Row

logger = logging.getLogger(__name__)


class ColumnStrategy(str, enum.Enum):
    HEADER = "header"
    CLUSTER = "cluster"


@dataclass(frozen=True)
class ColumnLayout:
    """Anchors for one table plus the decisions that produced them."""

    strategy: ColumnStrategy
    anchors: tuple[float, ...]
    header: HeaderDecision | None = None

    @property
    def column_count(self) -> int:
        return len(self.anchors)


def header_anchors(header_row: Row) -> list[float]:
    """Return the center x of each header token, left to right."""
    return [t.center_x for t in header_row.content_tokens]


def cluster_anchors(
    rows: Sequence[Row],
    gap: float = DEFAULT_CONFIG.column_gap,
    include_right_edges: bool = False,
) -> list[float]:
    """Cluster the x-coordinates of every token in *rows* and return the cluster means."""
    xs: list[float] = []
    for row in rows:
        for token in row.content_tokens:
            xs.append(token.x)
            if include_right_edges:
                xs.append(token.right_edge)
    if not xs:
        return []

    xs.sort()
    anchors: list[float] = []
    cluster = [xs[0]]
    for prev, x in zip(xs, xs[1:]):
        if x - prev > gap:
            anchors.append(sum(cluster) / len(cluster))
            cluster = []
        cluster.append(x)
    anchors.append(sum(cluster) / len(cluster))
    return anchors


def select_strategy(
    decision: HeaderDecision | None,
    rows: Sequence[Row],
    config: ReconstructionConfig = DEFAULT_CONFIG,
) -> ColumnStrategy:
    """Choose the anchor strategy from the configured mode and the header decision."""
    if config.column_strategy == "header":
        return ColumnStrategy.HEADER
    if config.column_strategy == "cluster":
        return ColumnStrategy.CLUSTER

    if decision is None or not decision.confident:
        return ColumnStrategy.CLUSTER
    if rows[decision.index].qualifying_count < config.min_table_columns:
        return ColumnStrategy.CLUSTER
    return ColumnStrategy.HEADER


def detect_columns(rows: Sequence[Row], config: ReconstructionConfig = DEFAULT_CONFIG) -> ColumnLayout:
    """Classify the header among *rows* and derive column anchors from it (or from clustering)."""
    decision = classify_header(rows, config)
    strategy = select_strategy(decision, rows, config)

    if strategy is ColumnStrategy.HEADER and decision is not None:
        anchors = header_anchors(rows[decision.index])
    else:
        strategy = ColumnStrategy.CLUSTER
        anchors = cluster_anchors(rows, config.column_gap, config.cluster_right_edges)

    logger.debug("Detected %d columns via %s strategy", len(anchors), strategy.value)
    return ColumnLayout(strategy=strategy, anchors=tuple(anchors), header=decision)
