"""Shared configuration for the table reconstruction pipeline.

Every heuristic constant used by the reconstruction engine lives here so the
row grouper, header classifier, column detector and segmenter agree on one set
of numbers.  Runtime knobs (column strategy, worker count, decode failure
policy) can be overridden from the environment or a project-level ``.env``.
"""

import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from table_wizard.errors import ConfigError

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


# ─── Row Grouping ────────────────────────────────────────────────────────────

# Vertical differences at or below this are rendering jitter, not line spacing
Y_NOISE_FLOOR = 1.0

# Row tolerance = most common line spacing * this factor
ROW_SPACING_FACTOR = 0.6

# Tolerance used when the page has too few tokens to estimate a spacing
DEFAULT_ROW_TOLERANCE = 5.0


# ─── Header / Column Detection ───────────────────────────────────────────────

# Only the first few candidate rows are considered for the header
HEADER_SCAN_DEPTH = 3

# Two x-origins within this distance count as aligned
HEADER_ALIGN_DISTANCE = 10.0

# Fraction of the shorter row's tokens that must align for two rows to match
HEADER_ALIGN_FRACTION = 0.7

# A gap wider than this between sorted x-coordinates starts a new column
COLUMN_GAP = 10.0


# ─── Table Thresholds ────────────────────────────────────────────────────────

# A row needs this many non-empty tokens to be a potential table row
MIN_ROW_TOKENS = 2

# An emitted table needs at least this many rows and columns
MIN_TABLE_ROWS = 2
MIN_TABLE_COLUMNS = 2


# ─── Runtime Settings ────────────────────────────────────────────────────────

ENV_PREFIX = "TABLE_WIZARD_"

ColumnStrategyName = Literal["auto", "header", "cluster"]
DecodeErrorPolicy = Literal["abort", "skip"]


class ReconstructionConfig(BaseModel):
    """Immutable bundle of every knob the reconstruction pipeline reads."""

    model_config = ConfigDict(frozen=True)

    y_noise_floor: float = Y_NOISE_FLOOR
    row_spacing_factor: float = Field(default=ROW_SPACING_FACTOR, gt=0)
    default_row_tolerance: float = Field(default=DEFAULT_ROW_TOLERANCE, gt=0)
    header_scan_depth: int = Field(default=HEADER_SCAN_DEPTH, ge=1)
    first_row_is_header: bool = True
    header_align_distance: float = HEADER_ALIGN_DISTANCE
    header_align_fraction: float = Field(default=HEADER_ALIGN_FRACTION, ge=0, le=1)
    column_gap: float = Field(default=COLUMN_GAP, gt=0)
    min_row_tokens: int = Field(default=MIN_ROW_TOKENS, ge=1)
    min_table_rows: int = Field(default=MIN_TABLE_ROWS, ge=2)
    min_table_columns: int = Field(default=MIN_TABLE_COLUMNS, ge=2)

    column_strategy: ColumnStrategyName = "auto"
    cluster_right_edges: bool = False
    workers: int = Field(default=1, ge=1)
    on_decode_error: DecodeErrorPolicy = "abort"


# Environment variable suffix -> config field
_ENV_FIELDS = {
    "COLUMN_STRATEGY": "column_strategy",
    "CLUSTER_RIGHT_EDGES": "cluster_right_edges",
    "FIRST_ROW_IS_HEADER": "first_row_is_header",
    "WORKERS": "workers",
    "ON_DECODE_ERROR": "on_decode_error",
    "COLUMN_GAP": "column_gap",
    "DEFAULT_ROW_TOLERANCE": "default_row_tolerance",
}


def load_config(**overrides) -> ReconstructionConfig:
    """Build a config from ``TABLE_WIZARD_*`` environment variables plus explicit overrides.

    Explicit keyword overrides win over the environment; ``None`` overrides are
    ignored so CLI flags that were not given fall through to the environment.
    """
    values: dict[str, object] = {}
    for suffix, field in _ENV_FIELDS.items():
        raw = os.getenv(ENV_PREFIX + suffix)
        if raw is not None and raw.strip():
            values[field] = raw.strip()
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ReconstructionConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid reconstruction settings: {exc}") from exc

    logger.debug("Loaded reconstruction config: %s", config)
    return config


DEFAULT_CONFIG = ReconstructionConfig()
