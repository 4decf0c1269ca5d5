"""
Shared type definitions for the segment painting system.

A cell is either filled completely (FullCell) or split into up to eight
triangular segments radiating from its center (SegmentCell).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Segment(Enum):
    """Triangular cell segment, clockwise from the top-left."""

    NW = "nw"  # Center, top-left corner, top midpoint
    N = "n"  # Center, top midpoint, top-right corner
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"


SEGMENT_NAMES: tuple[Segment, ...] = tuple(Segment)
ALL_SEGMENTS: frozenset[Segment] = frozenset(Segment)


class Vertex(Enum):
    """Named points of a cell used to build segment triangles."""

    TL = "TL"
    TR = "TR"
    BR = "BR"
    BL = "BL"
    TM = "TM"  # Top midpoint
    RM = "RM"
    BM = "BM"
    LM = "LM"
    C = "C"  # Center


class Corner(Enum):
    """Cell corner targeted by the diagonal fill tool."""

    TL = "TL"
    TR = "TR"
    BR = "BR"
    BL = "BL"


class DiagonalDirection(Enum):
    """Family of 45 degree lines."""

    TL_BR = "TL-BR"  # Descending to the right (dx, dy same sign)
    TR_BL = "TR-BL"  # Descending to the left (dx, dy opposite sign)


def coerce_segment(value: Segment | str) -> Segment | None:
    """Return the Segment for a name, or None if it is not a segment name."""
    if isinstance(value, Segment):
        return value
    try:
        return Segment(value)
    except ValueError:
        return None


def coerce_segments(values: Iterable[Segment | str]) -> frozenset[Segment]:
    """Convert names to Segments, silently dropping anything unknown."""
    result: set[Segment] = set()
    for value in values:
        segment = coerce_segment(value)
        if segment is not None:
            result.add(segment)
    return frozenset(result)


def coerce_corner(value: Corner | str) -> Corner | None:
    """Return the Corner for a name, or None if it is not a corner name."""
    if isinstance(value, Corner):
        return value
    try:
        return Corner(value)
    except ValueError:
        return None


# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True)
class Point:
    """An integer grid coordinate."""

    x: int
    y: int


CellKey = tuple[int, int]


# =============================================================================
# Cells
# =============================================================================


@dataclass(frozen=True)
class FullCell:
    """A completely filled cell."""

    x: int
    y: int
    color: str
    opacity: float | None = None


@dataclass(frozen=True)
class SegmentCell:
    """A partially filled cell. Only filled segments are stored."""

    x: int
    y: int
    segments: frozenset[Segment]
    color: str
    opacity: float | None = None


Cell = FullCell | SegmentCell


def normalize_cell(cell: Cell) -> Cell | None:
    """
    Restore the segment invariants of a cell.

    A segment cell with every segment filled collapses to a full cell with the
    same color and opacity; a segment cell with nothing filled returns None
    (the cell should be removed). Full cells are returned unchanged.
    """
    match cell:
        case SegmentCell(x=x, y=y, segments=segments, color=color, opacity=opacity):
            if not segments:
                return None
            if segments >= ALL_SEGMENTS:
                return FullCell(x, y, color, opacity)
            return cell
        case _:
            return cell
