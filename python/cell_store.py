"""
Pure operations on a sequence of cells.

Every modifying operation takes a cell sequence and returns a new tuple; the
input is never mutated. Cells may be given as typed cells or as stored
records, and malformed entries are dropped from the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from cell_codec import CellLike, as_cell, cells_from_records
from segment_types import (
    ALL_SEGMENTS,
    SEGMENT_NAMES,
    Cell,
    FullCell,
    Point,
    Segment,
    SegmentCell,
    coerce_segment,
    coerce_segments,
    normalize_cell,
)

logger = logging.getLogger(__name__)

Cells = tuple[Cell, ...]


@dataclass(frozen=True)
class CellUpdate:
    """A full-cell paint for set_cells()."""

    point: Point
    color: str
    opacity: float | None = None


# =============================================================================
# Queries
# =============================================================================


def _find(cells: Sequence[Cell], point: Point) -> int:
    for i, cell in enumerate(cells):
        if cell.x == point.x and cell.y == point.y:
            return i
    return -1


def get_cell_at(cells: Iterable[CellLike], point: Point) -> Cell | None:
    """Return the cell at a coordinate, or None."""
    for value in cells:
        cell = as_cell(value)
        if cell is not None and cell.x == point.x and cell.y == point.y:
            return cell
    return None


def cell_exists(cells: Iterable[CellLike], point: Point) -> bool:
    return get_cell_at(cells, point) is not None


def has_segments(cell: CellLike | None) -> bool:
    """True only for a partially filled cell."""
    return isinstance(as_cell(cell), SegmentCell)


def is_simple_cell(cell: CellLike | None) -> bool:
    """True only for a completely filled cell."""
    return isinstance(as_cell(cell), FullCell)


def get_filled_segments(cell: CellLike | None) -> tuple[Segment, ...]:
    """
    Filled segments of a cell in clockwise order from nw.

    A full cell reports all 8 segments; a missing cell reports none.
    """
    match as_cell(cell):
        case FullCell():
            return SEGMENT_NAMES
        case SegmentCell(segments=segments):
            return tuple(s for s in SEGMENT_NAMES if s in segments)
        case _:
            return ()


def get_cell_fill(cell: CellLike | None) -> str | None:
    """Color of a cell, or None for a missing cell."""
    live = as_cell(cell)
    return live.color if live is not None else None


# =============================================================================
# Full Cell Modification
# =============================================================================


def set_cell(
    cells: Iterable[CellLike], point: Point, color: str, opacity: float | None = None
) -> Cells:
    """Replace or insert a full cell at a coordinate."""
    current = list(cells_from_records(cells))
    new_cell = FullCell(point.x, point.y, color, opacity)
    index = _find(current, point)
    if index == -1:
        current.append(new_cell)
    else:
        current[index] = new_cell
    return tuple(current)


def remove_cell(cells: Iterable[CellLike], point: Point) -> Cells:
    """Remove whatever cell occupies a coordinate."""
    return tuple(
        cell for cell in cells_from_records(cells)
        if not (cell.x == point.x and cell.y == point.y)
    )


def set_cells(cells: Iterable[CellLike], updates: Iterable[CellUpdate]) -> Cells:
    """
    Apply several full-cell paints in one pass.

    Existing cells keep their position in the sequence; new cells are appended
    in update order. A later update to the same coordinate wins.
    """
    by_key: dict[tuple[int, int], Cell] = {}
    for cell in cells_from_records(cells):
        by_key[(cell.x, cell.y)] = cell
    for update in updates:
        key = (update.point.x, update.point.y)
        by_key[key] = FullCell(update.point.x, update.point.y, update.color, update.opacity)
    return tuple(by_key.values())


def remove_cells(cells: Iterable[CellLike], points: Iterable[Point]) -> Cells:
    """Remove every cell at the given coordinates."""
    keys = {(p.x, p.y) for p in points}
    return tuple(cell for cell in cells_from_records(cells) if (cell.x, cell.y) not in keys)


def remove_cells_in_bounds(
    cells: Iterable[CellLike], x1: int, y1: int, x2: int, y2: int
) -> Cells:
    """Remove every cell inside an inclusive rectangle given by any two corners."""
    min_x, max_x = min(x1, x2), max(x1, x2)
    min_y, max_y = min(y1, y2), max(y1, y2)
    return tuple(
        cell for cell in cells_from_records(cells)
        if not (min_x <= cell.x <= max_x and min_y <= cell.y <= max_y)
    )


# =============================================================================
# Segment Modification
# =============================================================================


def set_segments(
    cells: Iterable[CellLike],
    point: Point,
    segments: Iterable[Segment | str],
    color: str,
    opacity: float | None = None,
) -> Cells:
    """
    Fill segments of a cell and recolor the whole cell.

    The segments are merged into any existing segment set, the cell takes the
    new color and opacity, and a cell with all 8 segments collapses to a full
    cell. Painting onto a full cell only changes its color. Unknown segment
    names are ignored.

    Args:
        cells: Current cell sequence
        point: Coordinate of the cell to paint
        segments: Segments to fill
        color: New color for the whole cell
        opacity: New opacity for the whole cell

    Returns:
        New cell sequence
    """
    segment_list = list(segments)
    valid = coerce_segments(segment_list)
    if any(coerce_segment(s) is None for s in segment_list):
        logger.debug("set_segments ignoring unknown segments in %r", segment_list)

    current = list(cells_from_records(cells))
    index = _find(current, point)

    if index == -1:
        if not valid:
            return tuple(current)
        current.append(_painted(point, valid, color, opacity))
        return tuple(current)

    match current[index]:
        case FullCell():
            current[index] = FullCell(point.x, point.y, color, opacity)
        case SegmentCell(segments=existing):
            current[index] = _painted(point, existing | valid, color, opacity)
    return tuple(current)


def remove_segments(
    cells: Iterable[CellLike], point: Point, segments: Iterable[Segment | str]
) -> Cells:
    """
    Clear segments of a cell.

    A full cell is treated as having all 8 segments before the subtraction.
    A cell left with no segments is removed. Unknown names are ignored.
    """
    removed = coerce_segments(segments)
    current = list(cells_from_records(cells))
    index = _find(current, point)
    if index == -1 or not removed:
        return tuple(current)

    cell = current[index]
    existing = cell.segments if isinstance(cell, SegmentCell) else ALL_SEGMENTS

    remaining = normalize_cell(
        SegmentCell(cell.x, cell.y, existing - removed, cell.color, cell.opacity)
    )
    if remaining is None:
        del current[index]
    else:
        current[index] = remaining
    return tuple(current)


def _painted(
    point: Point, segments: frozenset[Segment], color: str, opacity: float | None
) -> Cell:
    if segments >= ALL_SEGMENTS:
        return FullCell(point.x, point.y, color, opacity)
    return SegmentCell(point.x, point.y, segments, color, opacity)
