"""Token sources: the document-decoding side of the pipeline.

A source hands out one page of raw token records at a time.  Records are
plain mappings with ``text``, ``x``, ``y``, ``width``, ``height`` and an
optional ``font_name``; y uses a bottom-left origin, so sources reading a
top-left coordinate system convert before handing tokens over.

Sources are context managers.  Opening a document that cannot be read, or
reading a page that fails to decode, raises DecodeUnavailable; what to do
about it is decided by the caller.
"""

import json
import logging
import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from table_wizard.errors import DecodeUnavailable

logger = logging.getLogger(__name__)


# ─── One-time Decoder Setup ──────────────────────────────────────────────────

# Module-level mutable state; flipped once by configure_decoder()
_DECODER_CONFIGURED = False


def configure_decoder() -> None:
    """Quiet pdfminer's per-object logging and warnings, once per process."""
    global _DECODER_CONFIGURED  # pylint: disable=global-statement
    if _DECODER_CONFIGURED:
        return
    logging.getLogger("pdfminer").setLevel(logging.ERROR)
    warnings.filterwarnings("ignore", module="pdfminer")
    _DECODER_CONFIGURED = True


# ─── Sources ─────────────────────────────────────────────────────────────────


@dataclass
class PageTokens:
    """Raw token records for one page (page numbers start at 1)."""

    page_number: int
    tokens: list[Mapping] = field(default_factory=list)


class TokenSource:
    """Base class: a document that yields raw token records page by page."""

    def __enter__(self) -> "TokenSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def page_count(self) -> int:
        raise NotImplementedError

    def read_page(self, page_number: int) -> PageTokens:
        raise NotImplementedError


class InMemorySource(TokenSource):
    """Pages of token records already held in memory."""

    def __init__(self, pages: Sequence[Sequence[Mapping]]):
        self._pages = [list(page) for page in pages]

    def page_count(self) -> int:
        return len(self._pages)

    def read_page(self, page_number: int) -> PageTokens:
        if not 1 <= page_number <= len(self._pages):
            raise DecodeUnavailable(f"No page {page_number} (document has {len(self._pages)})", page_number)
        return PageTokens(page_number=page_number, tokens=list(self._pages[page_number - 1]))


class JsonTokenSource(InMemorySource):
    """Token records dumped to JSON, either ``{"pages": [[...], ...]}`` or a bare list of pages."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        try:
            with open(self.path, "r", encoding="utf-8") as fopen:
                data = json.load(fopen)
        except (OSError, json.JSONDecodeError) as exc:
            raise DecodeUnavailable(f"Cannot read token dump {self.path}: {exc}") from exc

        pages = data.get("pages") if isinstance(data, dict) else data
        if not isinstance(pages, list) or not all(isinstance(page, list) for page in pages):
            raise DecodeUnavailable(f"Token dump {self.path} must hold a list of pages, each a list of tokens")
        super().__init__(pages)
        logger.info("Loaded %d page(s) of tokens from %s", len(pages), self.path)


class PdfPlumberSource(TokenSource):
    """Decode a PDF with pdfplumber, one word run per token.

    ``keep_blank_chars`` keeps multi-word runs such as "Unit Price" together;
    runs are split where the horizontal gap exceeds *x_tolerance*.
    """

    def __init__(self, path: str | Path, *, x_tolerance: float = 3.0, y_tolerance: float = 3.0):
        self.path = Path(path)
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance
        self._pdf = None

    def __enter__(self) -> "PdfPlumberSource":
        configure_decoder()
        try:
            self._pdf = pdfplumber.open(self.path)
        except (OSError, PDFSyntaxError, PdfminerException) as exc:
            raise DecodeUnavailable(f"Cannot open PDF {self.path}: {exc}") from exc
        logger.info("Opened %s (%d pages)", self.path, len(self._pdf.pages))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    def _require_open(self):
        if self._pdf is None:
            raise DecodeUnavailable(f"PDF {self.path} is not open; use the source as a context manager")
        return self._pdf

    def page_count(self) -> int:
        return len(self._require_open().pages)

    def read_page(self, page_number: int) -> PageTokens:
        pdf = self._require_open()
        if not 1 <= page_number <= len(pdf.pages):
            raise DecodeUnavailable(f"No page {page_number} in {self.path}", page_number)

        page = pdf.pages[page_number - 1]
        try:
            words = page.extract_words(
                x_tolerance=self.x_tolerance,
                y_tolerance=self.y_tolerance,
                keep_blank_chars=True,
                extra_attrs=["fontname", "size"],
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise DecodeUnavailable(f"Failed to decode page {page_number} of {self.path}: {exc}", page_number) from exc

        height = float(page.height)
        tokens = [word_to_token(word, height) for word in words]
        logger.debug("Page %d: decoded %d word runs", page_number, len(tokens))
        return PageTokens(page_number=page_number, tokens=tokens)


def word_to_token(word: Mapping, page_height: float) -> dict:
    """Convert a pdfplumber word (top-left origin) into a bottom-left token record."""
    return {
        "text": word.get("text", ""),
        "x": word.get("x0"),
        "y": page_height - word["bottom"] if word.get("bottom") is not None else None,
        "width": word["x1"] - word["x0"] if word.get("x0") is not None and word.get("x1") is not None else None,
        "height": word["bottom"] - word["top"] if word.get("top") is not None and word.get("bottom") is not None else None,
        "font_name": word.get("fontname"),
    }
