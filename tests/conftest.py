"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from table_wizard.schema import Token

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


def make_token(text: str, x: float, y: float, width: float = 10.0, height: float = 8.0, font_name: str | None = None) -> Token:
    """Build a Token; *x* is the left edge, *y* the baseline (bottom-left origin)."""
    return Token(text=text, x=x, y=y, width=width, height=height, font_name=font_name)


def grid_tokens(cells: list[list[str]], centers: list[float], ys: list[float], width: float = 10.0) -> list[Token]:
    """Lay out *cells* row by row at the given column centers and row baselines."""
    tokens = []
    for row, y in zip(cells, ys):
        for text, center in zip(row, centers):
            if text:
                tokens.append(make_token(text, center - width / 2, y, width=width))
    return tokens


@pytest.fixture(autouse=True)
def _clear_table_wizard_env(monkeypatch):
    """Keep a developer's TABLE_WIZARD_* settings from leaking into tests."""
    for suffix in (
        "COLUMN_STRATEGY",
        "CLUSTER_RIGHT_EDGES",
        "FIRST_ROW_IS_HEADER",
        "WORKERS",
        "ON_DECODE_ERROR",
        "COLUMN_GAP",
        "DEFAULT_ROW_TOLERANCE",
    ):
        monkeypatch.delenv(f"TABLE_WIZARD_{suffix}", raising=False)
