"""Markdown and JSON rendering of extracted tables for previews and CLI output."""

from table_wizard.schema import DocumentResult, ExtractedTable


def _escape_cell(cell: str) -> str:
    return cell.replace("|", "\\|")


def render_markdown(table: ExtractedTable, title: str | None = None) -> str:
    """Convert an ExtractedTable into a markdown table; the first row becomes the header."""
    lines: list[str] = []
    if title:
        lines.extend([f"**{title}**", ""])

    # Column header row + separator
    lines.append("| " + " | ".join(_escape_cell(c) for c in table.header) + " |")
    lines.append("| " + " | ".join(["---"] * table.column_count) + " |")

    for row in table.rows[1:]:
        lines.append("| " + " | ".join(_escape_cell(c) for c in row) + " |")

    return "\n".join(lines)


def render_document_markdown(result: DocumentResult) -> str:
    """Render every table in *result*, titled by position and source page."""
    blocks = [
        render_markdown(table, title=f"Table {i} (page {table.page_number})")
        for i, table in enumerate(result.tables, start=1)
    ]
    return "\n\n".join(blocks)


def to_json(result: DocumentResult, indent: int | None = 2) -> str:
    """Serialize *result* with its tables, page count and skipped pages."""
    return result.model_dump_json(indent=indent)
