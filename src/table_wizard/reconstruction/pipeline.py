"""Per-page reconstruction: raw decoder tokens in, tables out.

Steps, in order:
  1. coerce     -- validate raw records into Tokens, skipping malformed ones
  2. normalize  -- clean token text (new tokens, inputs untouched)
  3. group      -- cluster tokens into rows with an adaptive tolerance
  4. segment    -- header, columns, cell assignment and table boundaries
"""

import logging
from collections.abc import Iterable, Mapping

from table_wizard.config import DEFAULT_CONFIG, ReconstructionConfig
from table_wizard.reconstruction.normalize import normalize_token
from table_wizard.reconstruction.rows import Row, group_rows
from table_wizard.reconstruction.segmentation import segment_tables
from table_wizard.schema import ExtractedTable, Token, coerce_tokens

logger = logging.getLogger(__name__)


def page_rows(raw_tokens: Iterable[Token | Mapping], config: ReconstructionConfig = DEFAULT_CONFIG) -> list[Row]:
    """Run steps 1-3 and return the page's rows, top to bottom."""
    tokens = [normalize_token(t) for t in coerce_tokens(raw_tokens)]
    return group_rows(tokens, config)


def reconstruct_page(
    raw_tokens: Iterable[Token | Mapping],
    config: ReconstructionConfig = DEFAULT_CONFIG,
    page_number: int = 1,
) -> list[ExtractedTable]:
    """Reconstruct every table on one page."""
    rows = page_rows(raw_tokens, config)
    tables = segment_tables(rows, config, page_number=page_number)
    logger.debug("Page %d: %d rows -> %d table(s)", page_number, len(rows), len(tables))
    return tables
