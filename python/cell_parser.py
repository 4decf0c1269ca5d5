"""
Cell layout parsing for tests and demos.

Describes a small map as text, row by row, instead of building cells by hand.
"""

from __future__ import annotations

from cell_codec import CellLike, as_cell
from cell_store import Cells, get_filled_segments, is_simple_cell, set_cell, set_segments
from segment_types import Point, coerce_segment

__all__ = ["format_cell", "parse_cells"]

_VALID_FORMATS = (
    "  Valid formats:\n"
    "    - '_' or empty string (multiple spaces): no cell\n"
    "    - '#': full cell\n"
    "    - Segment names joined by '+': segment cell (e.g., 'n+ne+e')\n"
    "    - Any of the above (except empty) with ':color' suffix (e.g., '#:red', 'sw+w:blue')"
)


def parse_cells(layout: str, default_color: str = "gray", origin: Point = Point(0, 0)) -> Cells:
    """
    Parse a cell layout from a compact string format.

    Format:
    - Rows separated by |
    - Cells separated by single spaces; row index is y, column index is x
    - Cell token:
      * '_' or empty string (from multiple adjacent spaces): no cell
      * '#': full cell
      * Segment names joined by '+': segment cell with those segments filled
        Examples: "n" -> {n}, "nw+n+ne" -> {nw, n, ne}
        Listing all 8 segments yields a full cell.
      * Optional ':color' suffix on any painted token: "#:red", "se+s:blue"

    Example:
        "# # #|# _ sw+w:red"
        Creates:
        - Full gray cells at (0,0), (1,0), (2,0), (0,1)
        - A red segment cell at (2,1) with {sw, w}

    Args:
        layout: Layout string
        default_color: Color for tokens without a ':color' suffix
        origin: Coordinate of the first cell of the first row

    Returns:
        Cells in row-major order

    Raises:
        ValueError: If a token is not a valid cell description
    """
    cells: Cells = ()

    for row_idx, row_str in enumerate(layout.split("|")):
        for col_idx, token in enumerate(row_str.split(" ")):
            if not token or token == "_":
                continue

            point = Point(origin.x + col_idx, origin.y + row_idx)
            body, separator, color = token.partition(":")

            def fail(reason: str) -> ValueError:
                return ValueError(
                    f"Invalid cell token: '{token}'\n"
                    f"  Reason: {reason}\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"{_VALID_FORMATS}"
                )

            if separator and not color:
                raise fail("empty color after ':'")
            color = color or default_color

            if body == "#":
                cells = set_cell(cells, point, color)
                continue

            names = body.split("+")
            unknown = [name for name in names if coerce_segment(name) is None]
            if unknown:
                raise fail(f"unknown segment name(s) {', '.join(repr(n) for n in unknown)}")

            cells = set_segments(cells, point, names, color)

    return cells


def format_cell(cell: CellLike | None) -> str:
    """Inverse of a single parse_cells token (always with an explicit color)."""
    cell = as_cell(cell)
    if cell is None:
        return "_"
    if is_simple_cell(cell):
        body = "#"
    else:
        body = "+".join(s.value for s in get_filled_segments(cell))
    return f"{body}:{cell.color}"
