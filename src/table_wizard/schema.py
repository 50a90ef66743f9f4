"""Pydantic models for positioned tokens and extracted tables.

``Token`` is the input record handed over by a decoder; ``ExtractedTable`` and
``DocumentResult`` are the only structures that leave the pipeline.  The
model_validator on ``ExtractedTable`` guarantees the output contract: at
least two rows and two columns, and every row exactly ``column_count`` cells
wide.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from table_wizard.errors import MalformedToken

logger = logging.getLogger(__name__)


# ─── Tokens ──────────────────────────────────────────────────────────────────


class Token(BaseModel):
    """A fragment of text with its origin and size in page space.

    Coordinates use a bottom-left origin: larger ``y`` is higher on the page.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    width: float = Field(allow_inf_nan=False)
    height: float = Field(allow_inf_nan=False)
    font_name: str | None = None

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def is_bold(self) -> bool:
        return "bold" in (self.font_name or "").lower()


def coerce_token(raw: Token | Mapping) -> Token:
    """Build a Token from a decoder record.

    Accepts either flat ``x``/``y`` keys or a six-element affine ``transform``
    (x at index 4, y at index 5), ``text`` or ``str`` for the content, and
    ``font_name`` or ``fontName`` for the font descriptor.
    """
    if isinstance(raw, Token):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedToken(f"Token must be a mapping, got {type(raw).__name__}")

    transform = raw.get("transform")
    if transform is not None:
        if not isinstance(transform, (list, tuple)) or len(transform) < 6:
            raise MalformedToken(f"Token transform needs 6 entries: {transform!r}")
        x, y = transform[4], transform[5]
    else:
        x, y = raw.get("x"), raw.get("y")

    text = raw.get("text", raw.get("str", ""))
    try:
        return Token(
            text=text if text is not None else "",
            x=x,
            y=y,
            width=raw.get("width"),
            height=raw.get("height"),
            font_name=raw.get("font_name", raw.get("fontName")) or None,
        )
    except ValidationError as exc:
        raise MalformedToken(f"Invalid token {dict(raw)!r}: {exc.error_count()} field error(s)") from exc


def coerce_tokens(raw_tokens: Iterable[Token | Mapping]) -> list[Token]:
    """Coerce every record, skipping the malformed ones."""
    tokens: list[Token] = []
    skipped = 0
    for raw in raw_tokens:
        try:
            tokens.append(coerce_token(raw))
        except MalformedToken as exc:
            skipped += 1
            logger.debug("Skipping malformed token: %s", exc)
    if skipped:
        logger.debug("Skipped %d malformed token(s), kept %d", skipped, len(tokens))
    return tokens


# ─── Tables ──────────────────────────────────────────────────────────────────


class ExtractedTable(BaseModel):
    """One reconstructed table: a header/label row followed by data rows."""

    model_config = ConfigDict(frozen=True)

    page_number: int = Field(ge=1)
    index_on_page: int = Field(default=0, ge=0)
    column_strategy: Literal["header", "cluster"] = "header"
    rows: tuple[tuple[str, ...], ...]

    @model_validator(mode="after")
    def validate_shape(self) -> "ExtractedTable":
        """Ensure >= 2 rows, >= 2 columns, and equal row widths."""
        if len(self.rows) < 2:
            raise ValueError(f"Table has {len(self.rows)} row(s), expected at least 2")
        n_cols = len(self.rows[0])
        if n_cols < 2:
            raise ValueError(f"Table has {n_cols} column(s), expected at least 2")
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols}")
        return self

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0])

    @property
    def header(self) -> list[str]:
        return list(self.rows[0])

    def to_rows(self) -> list[list[str]]:
        """Return the cells as plain nested lists (a copy)."""
        return [list(row) for row in self.rows]


class DocumentResult(BaseModel):
    """All tables of a document, in page order."""

    tables: list[ExtractedTable] = Field(default_factory=list)
    page_count: int = Field(default=0, ge=0)
    skipped_pages: list[int] = Field(default_factory=list)

    @property
    def found_tables(self) -> bool:
        return bool(self.tables)

    @property
    def outcome(self) -> Literal["tables_found", "no_tables_found"]:
        return "tables_found" if self.tables else "no_tables_found"

    @property
    def total_rows(self) -> int:
        return sum(table.row_count for table in self.tables)

    def to_lists(self) -> list[list[list[str]]]:
        """Return the output contract: tables -> rows -> cell strings."""
        return [table.to_rows() for table in self.tables]
