"""
Static topology of the 8-segment cell subdivision.

    TL ----TM---- TR
    |\\  nw | n  /|
    | \\    |   / |
    |  \\   |  /  |
    | w \\  | / ne|
   LM------C------RM
    | sw /  | \\ e |
    |  /    |  \\  |
    | /     |   \\ |
    |/  s   | se \\|
    BL ----BM---- BR

All tables are read-only and shared for the lifetime of the process.
Vertex positions are ratios of the cell width/height so that any cell size
can be applied by the caller.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from segment_types import Corner, DiagonalDirection, Segment, Vertex


@dataclass(frozen=True)
class InternalEdge:
    """An edge from the cell center to a boundary point, shared by two segments."""

    from_vertex: Vertex
    to_vertex: Vertex
    segments: tuple[Segment, Segment]


@dataclass(frozen=True)
class CrossCellAdjacency:
    """The neighbor cell and segment touched across a segment's outer edge."""

    dx: int
    dy: int
    neighbor_segment: Segment


@dataclass(frozen=True)
class ExternalEdge:
    """Which half of which cell edge a segment lies on."""

    edge: str  # "top", "right", "bottom" or "left"
    half: str  # "first" is the left or top half, "second" the right or bottom


@dataclass(frozen=True)
class NeighborOffset:
    dx: int
    dy: int


# =============================================================================
# Segment Tables
# =============================================================================


VERTEX_RATIOS: Mapping[Vertex, tuple[float, float]] = MappingProxyType({
    Vertex.TL: (0.0, 0.0),
    Vertex.TR: (1.0, 0.0),
    Vertex.BR: (1.0, 1.0),
    Vertex.BL: (0.0, 1.0),
    Vertex.TM: (0.5, 0.0),
    Vertex.RM: (1.0, 0.5),
    Vertex.BM: (0.5, 1.0),
    Vertex.LM: (0.0, 0.5),
    Vertex.C: (0.5, 0.5),
})

# [center, first boundary vertex, second boundary vertex], clockwise
SEGMENT_TRIANGLES: Mapping[Segment, tuple[Vertex, Vertex, Vertex]] = MappingProxyType({
    Segment.NW: (Vertex.C, Vertex.TL, Vertex.TM),
    Segment.N: (Vertex.C, Vertex.TM, Vertex.TR),
    Segment.NE: (Vertex.C, Vertex.TR, Vertex.RM),
    Segment.E: (Vertex.C, Vertex.RM, Vertex.BR),
    Segment.SE: (Vertex.C, Vertex.BR, Vertex.BM),
    Segment.S: (Vertex.C, Vertex.BM, Vertex.BL),
    Segment.SW: (Vertex.C, Vertex.BL, Vertex.LM),
    Segment.W: (Vertex.C, Vertex.LM, Vertex.TL),
})

SEGMENT_INTERNAL_ADJACENCY: tuple[InternalEdge, ...] = (
    InternalEdge(Vertex.C, Vertex.TL, (Segment.W, Segment.NW)),
    InternalEdge(Vertex.C, Vertex.TM, (Segment.NW, Segment.N)),
    InternalEdge(Vertex.C, Vertex.TR, (Segment.N, Segment.NE)),
    InternalEdge(Vertex.C, Vertex.RM, (Segment.NE, Segment.E)),
    InternalEdge(Vertex.C, Vertex.BR, (Segment.E, Segment.SE)),
    InternalEdge(Vertex.C, Vertex.BM, (Segment.SE, Segment.S)),
    InternalEdge(Vertex.C, Vertex.BL, (Segment.S, Segment.SW)),
    InternalEdge(Vertex.C, Vertex.LM, (Segment.SW, Segment.W)),
)

SEGMENT_CROSS_CELL_ADJACENCY: Mapping[Segment, CrossCellAdjacency] = MappingProxyType({
    Segment.NW: CrossCellAdjacency(0, -1, Segment.S),
    Segment.N: CrossCellAdjacency(0, -1, Segment.SE),
    Segment.NE: CrossCellAdjacency(1, 0, Segment.W),
    Segment.E: CrossCellAdjacency(1, 0, Segment.SW),
    Segment.SE: CrossCellAdjacency(0, 1, Segment.N),
    Segment.S: CrossCellAdjacency(0, 1, Segment.NW),
    Segment.SW: CrossCellAdjacency(-1, 0, Segment.E),
    Segment.W: CrossCellAdjacency(-1, 0, Segment.NE),
})

SEGMENT_EXTERNAL_EDGES: Mapping[Segment, ExternalEdge] = MappingProxyType({
    Segment.NW: ExternalEdge("top", "first"),
    Segment.N: ExternalEdge("top", "second"),
    Segment.NE: ExternalEdge("right", "first"),
    Segment.E: ExternalEdge("right", "second"),
    Segment.SE: ExternalEdge("bottom", "second"),
    Segment.S: ExternalEdge("bottom", "first"),
    Segment.SW: ExternalEdge("left", "second"),
    Segment.W: ExternalEdge("left", "first"),
})


# =============================================================================
# Diagonal Fill Tables
# =============================================================================


# The 4 segments that draw a diagonal border through each corner
CORNER_SEGMENT_FILL: Mapping[Corner, tuple[Segment, Segment, Segment, Segment]] = MappingProxyType({
    Corner.TL: (Segment.N, Segment.NW, Segment.W, Segment.SW),
    Corner.TR: (Segment.NW, Segment.N, Segment.NE, Segment.E),
    Corner.BR: (Segment.NE, Segment.E, Segment.SE, Segment.S),
    Corner.BL: (Segment.SE, Segment.S, Segment.SW, Segment.W),
})

# Both neighbors must be painted for the corner to be concave
CORNER_NEIGHBOR_CHECKS: Mapping[Corner, tuple[NeighborOffset, NeighborOffset]] = MappingProxyType({
    Corner.TL: (NeighborOffset(0, -1), NeighborOffset(-1, 0)),
    Corner.TR: (NeighborOffset(0, -1), NeighborOffset(1, 0)),
    Corner.BR: (NeighborOffset(0, 1), NeighborOffset(1, 0)),
    Corner.BL: (NeighborOffset(0, 1), NeighborOffset(-1, 0)),
})

# TL and BR share a direction, as do TR and BL. This mirrors the fill
# orientation of the corner segments rather than the corner positions.
CORNER_DIAGONAL_DIRECTION: Mapping[Corner, DiagonalDirection] = MappingProxyType({
    Corner.TL: DiagonalDirection.TR_BL,
    Corner.BR: DiagonalDirection.TR_BL,
    Corner.TR: DiagonalDirection.TL_BR,
    Corner.BL: DiagonalDirection.TL_BR,
})


# =============================================================================
# Lookups
# =============================================================================


def vertex_position(
    vertex: Vertex, left: float, top: float, width: float, height: float
) -> tuple[float, float]:
    """Absolute position of a vertex for a cell at (left, top) of the given size."""
    x_ratio, y_ratio = VERTEX_RATIOS[vertex]
    return (left + x_ratio * width, top + y_ratio * height)


def triangle_points(
    segment: Segment, left: float, top: float, width: float, height: float
) -> tuple[tuple[float, float], ...]:
    """The three absolute triangle points of a segment, center first."""
    return tuple(
        vertex_position(v, left, top, width, height) for v in SEGMENT_TRIANGLES[segment]
    )


def outer_edge(segment: Segment) -> tuple[Vertex, Vertex]:
    """The two boundary vertices forming a segment's edge on the cell border."""
    _, first, second = SEGMENT_TRIANGLES[segment]
    return (first, second)


def segment_at_position(local_x: float, local_y: float) -> Segment:
    """
    Determine which segment contains a point inside a cell.

    Args:
        local_x: Horizontal position within the cell (0 = left, 1 = right)
        local_y: Vertical position within the cell (0 = top, 1 = bottom)

    Returns:
        The segment whose triangle holds the point. Points exactly on a
        shared edge resolve counter-clockwise.
    """
    dx = local_x - 0.5
    dy = local_y - 0.5

    # 0 degrees points east, counter-clockwise; screen y grows downwards
    angle = math.degrees(math.atan2(-dy, dx)) % 360

    # Each triangle spans 45 degrees between two boundary points
    return _SEGMENTS_BY_SLICE[int(angle // 45) % 8]


_SEGMENTS_BY_SLICE: tuple[Segment, ...] = (
    Segment.NE,  # 0-45: RM to TR
    Segment.N,
    Segment.NW,
    Segment.W,
    Segment.SW,
    Segment.S,
    Segment.SE,
    Segment.E,  # 315-360: BR to RM
)
