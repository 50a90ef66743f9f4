"""Cell assignment: map each token in a row onto its nearest column anchor."""

from collections.abc import Sequence

from table_wizard.reconstruction.rows import Row


def nearest_anchor(x: float, anchors: Sequence[float]) -> int:
    """Return the index of the anchor closest to *x* (the leftmost wins ties)."""
    if not anchors:
        raise ValueError("Cannot assign a cell without column anchors")

    best_index = 0
    best_distance = float("inf")
    for i, anchor in enumerate(anchors):
        distance = abs(x - anchor)
        if distance < best_distance:
            best_distance = distance
            best_index = i
    return min(best_index, len(anchors) - 1)


def assign_row(row: Row, anchors: Sequence[float]) -> list[str]:
    """Return one cell string per anchor for *row*; unused columns stay empty."""
    cells = [""] * len(anchors)
    for token in row.content_tokens:
        col = nearest_anchor(token.center_x, anchors)
        cells[col] = f"{cells[col]} {token.text}" if cells[col] else token.text
    return [cell.strip() for cell in cells]


def is_blank(cells: Sequence[str]) -> bool:
    """A row whose cells are all empty is a structural separator."""
    return not any(cells)
