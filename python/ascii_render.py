"""
ASCII rendering for segment cell maps.

Each cell is drawn as a 3x3 character glyph. The eight outer positions sit on
the eight center-to-boundary edges of the cell, so each shows the fill state
of the two segments meeting there; the middle position shows whether the cell
has any fill.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from border_calculator import borders_for_cells
from cell_codec import CellLike, cells_from_records
from cell_store import get_filled_segments
from segment_topology import SEGMENT_INTERNAL_ADJACENCY, VERTEX_RATIOS
from segment_types import Cell, CellKey, Point

logger = logging.getLogger(__name__)

ColorFn = Callable[[str], Callable[[str], str]]

BOTH = "█"
ONE = "▒"
NONE = "·"

# Cell colors that map directly onto terminal colors
_CHALK_COLORS = {"red", "green", "yellow", "blue", "magenta", "cyan", "white"}


def default_color_fn(color: str) -> Callable[[str], str]:
    """Colorizer for a cell color name; unknown colors render uncolored."""
    name = color.lower()
    if name in _CHALK_COLORS:
        return getattr(chalk, name)
    return lambda s: s


def render_cell_glyph(cell: Cell | None) -> tuple[str, str, str]:
    """
    Render a single cell as three rows of three characters.

    Example for a cell with {nw, n, ne, e} filled:
        ▒██
        ·▒█
        ··▒
    """
    rows = [[NONE] * 3 for _ in range(3)]
    filled = set(get_filled_segments(cell))

    for edge in SEGMENT_INTERNAL_ADJACENCY:
        x_ratio, y_ratio = VERTEX_RATIOS[edge.to_vertex]
        count = sum(1 for s in edge.segments if s in filled)
        rows[int(y_ratio * 2)][int(x_ratio * 2)] = BOTH if count == 2 else ONE if count == 1 else NONE

    if len(filled) == 8:
        rows[1][1] = BOTH
    elif filled:
        rows[1][1] = ONE

    return ("".join(rows[0]), "".join(rows[1]), "".join(rows[2]))


def compute_bounds(cells: Iterable[Cell]) -> tuple[int, int, int, int] | None:
    """Inclusive (min_x, min_y, max_x, max_y) of the cells, or None when there are none."""
    cell_list = list(cells)
    if not cell_list:
        return None
    xs = [c.x for c in cell_list]
    ys = [c.y for c in cell_list]
    return (min(xs), min(ys), max(xs), max(ys))


def render_cells(
    cells: Iterable[CellLike],
    bounds: tuple[int, int, int, int] | None = None,
    highlight: Iterable[Point] | None = None,
    cursor: Point | None = None,
    color_fn: ColorFn | None = None,
    title: str = "map",
) -> str:
    """
    Render cells inside a box.

    Args:
        cells: Cells to draw (typed cells or stored records)
        bounds: Inclusive (min_x, min_y, max_x, max_y); defaults to the cell extent
        highlight: Cells drawn on a white background (e.g. a fill preview)
        cursor: Cell drawn on a blue background
        color_fn: Returns a colorizer for a cell color
        title: Text centered in the top border

    Returns:
        Rendered multi-line string
    """
    snapshot = cells_from_records(cells)
    if bounds is None:
        bounds = compute_bounds(snapshot)
    if bounds is None:
        return f"({title}: empty)"
    if color_fn is None:
        color_fn = default_color_fn

    min_x, min_y, max_x, max_y = bounds
    by_key: dict[CellKey, Cell] = {(c.x, c.y): c for c in snapshot}
    highlighted = {(p.x, p.y) for p in highlight or ()}

    cols = max_x - min_x + 1
    inner_width = cols * 3
    label = f" {title} "
    if len(label) <= inner_width:
        start = (inner_width - len(label)) // 2
        top = "┌" + "─" * start + label + "─" * (inner_width - start - len(label)) + "┐"
    else:
        top = "┌" + "─" * inner_width + "┐"

    lines = [top]
    for y in range(min_y, max_y + 1):
        glyph_rows: list[list[str]] = [[], [], []]
        for x in range(min_x, max_x + 1):
            cell = by_key.get((x, y))
            glyph = render_cell_glyph(cell)
            for i, part in enumerate(glyph):
                if cursor is not None and (cursor.x, cursor.y) == (x, y):
                    part = chalk.bgBlue.white(part)
                elif (x, y) in highlighted:
                    part = chalk.bgWhite.black(part)
                elif cell is not None:
                    part = color_fn(cell.color)(part)
                glyph_rows[i].append(part)
        for row in glyph_rows:
            lines.append("│" + "".join(row) + "│")
    lines.append("└" + "─" * inner_width + "┘")

    logger.debug("Rendered %d cells in %dx%d bounds", len(snapshot), cols, max_y - min_y + 1)
    return "\n".join(lines)


def render_borders(cells: Iterable[CellLike]) -> str:
    """List the borders of every partially filled cell, one cell per line."""
    lines: list[str] = []
    for (x, y), borders in sorted(borders_for_cells(cells).items(), key=lambda kv: (kv[0][1], kv[0][0])):
        internal = ", ".join(f"{b.from_vertex.value}-{b.to_vertex.value}" for b in borders.internal)
        external = ", ".join(
            f"{b.segment.value}->{b.neighbor_segment.value}@({b.neighbor.x},{b.neighbor.y})"
            for b in borders.external
        )
        lines.append(f"({x}, {y}) internal: [{internal}] external: [{external}]")
    return "\n".join(lines)
