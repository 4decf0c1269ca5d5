"""
Coordinate lookup over a cell sequence.

The index is a plain dict rebuilt from a snapshot of the cells. It is a cache:
rebuild it after every batch of modifications instead of holding on to it.
"""

from __future__ import annotations

from typing import Iterable

from cell_codec import CellLike, as_cell
from segment_types import Cell, CellKey, FullCell, Point, Segment, SegmentCell

CellIndex = dict[CellKey, Cell]


def cell_key(point: Point) -> CellKey:
    return (point.x, point.y)


def build_index(cells: Iterable[CellLike]) -> CellIndex:
    """Build an O(1) coordinate lookup. A later cell at the same coordinate wins."""
    index: CellIndex = {}
    for value in cells:
        cell = as_cell(value)
        if cell is not None:
            index[(cell.x, cell.y)] = cell
    return index


def lookup(index: CellIndex, x: int, y: int) -> Cell | None:
    return index.get((x, y))


def is_painted(index: CellIndex, x: int, y: int) -> bool:
    """True if a full cell or a cell with any filled segment sits at (x, y)."""
    match index.get((x, y)):
        case FullCell():
            return True
        case SegmentCell(segments=segments):
            return bool(segments)
        case _:
            return False


def neighbor_segment_filled(index: CellIndex, x: int, y: int, segment: Segment) -> bool:
    """
    Check whether a segment of the cell at (x, y) is filled.

    A missing cell has nothing filled; a full cell has every segment filled.
    """
    match index.get((x, y)):
        case FullCell():
            return True
        case SegmentCell(segments=segments):
            return segment in segments
        case _:
            return False
