"""
Border calculation for partially filled cells.

Borders are drawn wherever filled meets empty:
- Internal borders run from the cell center to a boundary point, between a
  filled and an empty segment of the same cell.
- External borders run along the cell boundary, where a filled segment faces
  an empty segment (or no cell at all) in the neighboring cell.

Each side of a shared edge is evaluated independently, so the same physical
edge may be reported by both cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from cell_codec import CellLike, as_cell, cells_from_records
from cell_index import CellIndex, build_index, neighbor_segment_filled
from cell_store import get_filled_segments
from segment_topology import (
    SEGMENT_CROSS_CELL_ADJACENCY,
    SEGMENT_INTERNAL_ADJACENCY,
    outer_edge,
)
from segment_types import CellKey, FullCell, Point, Segment, SegmentCell, Vertex


@dataclass(frozen=True)
class InternalBorder:
    """A center-to-boundary line between a filled and an empty segment."""

    from_vertex: Vertex
    to_vertex: Vertex
    segments: tuple[Segment, Segment]


@dataclass(frozen=True)
class ExternalBorder:
    """A boundary line where a filled segment meets empty space."""

    segment: Segment
    neighbor_segment: Segment
    neighbor: Point

    @property
    def vertices(self) -> tuple[Vertex, Vertex]:
        """The two boundary vertices of the segment's outer edge."""
        return outer_edge(self.segment)


@dataclass(frozen=True)
class SegmentBorders:
    internal: tuple[InternalBorder, ...]
    external: tuple[ExternalBorder, ...]


def get_internal_borders(cell: CellLike) -> tuple[InternalBorder, ...]:
    """Internal edges whose two segments differ in fill state."""
    cell = as_cell(cell)
    if cell is None or isinstance(cell, FullCell):
        return ()

    filled = set(get_filled_segments(cell))
    borders: list[InternalBorder] = []
    for edge in SEGMENT_INTERNAL_ADJACENCY:
        first, second = edge.segments
        if (first in filled) != (second in filled):
            borders.append(InternalBorder(edge.from_vertex, edge.to_vertex, edge.segments))
    return tuple(borders)


def get_external_borders(cell: CellLike, index: CellIndex) -> tuple[ExternalBorder, ...]:
    """
    Outer edges of filled segments that face nothing filled.

    A border is drawn when there is no neighbor cell, or when the neighbor is
    partially filled and its touching segment is empty. A full neighbor never
    needs a border.
    """
    cell = as_cell(cell)
    if cell is None:
        return ()

    borders: list[ExternalBorder] = []
    for segment in get_filled_segments(cell):
        adjacency = SEGMENT_CROSS_CELL_ADJACENCY[segment]
        nx = cell.x + adjacency.dx
        ny = cell.y + adjacency.dy
        if not neighbor_segment_filled(index, nx, ny, adjacency.neighbor_segment):
            borders.append(ExternalBorder(segment, adjacency.neighbor_segment, Point(nx, ny)))
    return tuple(borders)


def get_segment_borders(cell: CellLike, index: CellIndex) -> SegmentBorders:
    """All borders (internal and external) for a cell."""
    cell = as_cell(cell)
    if cell is None:
        return SegmentBorders(internal=(), external=())
    return SegmentBorders(
        internal=get_internal_borders(cell),
        external=get_external_borders(cell, index),
    )


def borders_for_cells(cells: Iterable[CellLike]) -> dict[CellKey, SegmentBorders]:
    """Borders of every partially filled cell, using a single index."""
    snapshot = cells_from_records(cells)
    index = build_index(snapshot)
    return {
        (cell.x, cell.y): get_segment_borders(cell, index)
        for cell in snapshot
        if isinstance(cell, SegmentCell)
    }
