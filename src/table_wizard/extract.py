"""Document-level table extraction.

Decodes every page first (the only I/O-bound step), then reconstructs pages
either sequentially or on a thread pool.  Pages share no state, so results
are collected per page number and concatenated in page order, whatever order
the workers finish in.  Tables are never merged across a page break.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from table_wizard.config import ReconstructionConfig, load_config
from table_wizard.decoding import PageTokens, TokenSource
from table_wizard.errors import DecodeUnavailable
from table_wizard.reconstruction.pipeline import reconstruct_page
from table_wizard.schema import DocumentResult, ExtractedTable

logger = logging.getLogger(__name__)


def decode_pages(
    source: TokenSource,
    config: ReconstructionConfig,
    show_progress: bool = False,
) -> tuple[list[PageTokens], list[int]]:
    """Read every page from *source*.

    Returns ``(pages, skipped_page_numbers)``.  Under the ``abort`` policy the
    first DecodeUnavailable propagates and nothing is returned.
    """
    pages: list[PageTokens] = []
    skipped: list[int] = []
    numbers = range(1, source.page_count() + 1)
    for page_number in tqdm(numbers, desc="Decoding pages", disable=not show_progress):
        try:
            pages.append(source.read_page(page_number))
        except DecodeUnavailable as exc:
            if config.on_decode_error == "abort":
                raise
            logger.warning("Skipping page %d: %s", page_number, exc)
            skipped.append(page_number)
    return pages, skipped


def reconstruct_pages(pages: list[PageTokens], config: ReconstructionConfig) -> dict[int, list[ExtractedTable]]:
    """Reconstruct each page, keyed by page number."""
    if config.workers <= 1 or len(pages) <= 1:
        return {page.page_number: reconstruct_page(page.tokens, config, page.page_number) for page in pages}

    results: dict[int, list[ExtractedTable]] = {}
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = {
            executor.submit(reconstruct_page, page.tokens, config, page.page_number): page.page_number
            for page in pages
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results


def extract_tables(
    source: TokenSource,
    config: ReconstructionConfig | None = None,
    show_progress: bool = False,
) -> DocumentResult:
    """Extract every table from an open *source*, in page order."""
    config = config or load_config()
    page_count = source.page_count()
    pages, skipped = decode_pages(source, config, show_progress)
    per_page = reconstruct_pages(pages, config)

    tables = [table for page_number in sorted(per_page) for table in per_page[page_number]]
    result = DocumentResult(tables=tables, page_count=page_count, skipped_pages=skipped)

    if result.found_tables:
        logger.info("Extracted %d table(s), %d rows, from %d page(s)", len(tables), result.total_rows, page_count)
    else:
        logger.info("No tables found in %d page(s)", page_count)
    return result
