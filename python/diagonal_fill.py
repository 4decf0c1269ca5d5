"""
Diagonal fill: filling the gaps of a staircase with one clean 45 degree edge.

A concave corner is an empty cell whose two neighbors on one corner are both
painted. Filling the corner's 4 segments turns the step into a diagonal. A
fill stroke starts at one concave corner and extends along the 45 degree line
that corner's segments produce, filling every valid corner on the way.

Coordinate conventions:
- Cell coordinates are integer (x, y) grid positions.
- Local coordinates are 0-1 within a cell, (0, 0) top-left, (1, 1) bottom-right.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from cell_codec import CellLike, cells_from_records
from cell_index import CellIndex, build_index, is_painted, lookup
from cell_store import Cells, set_segments
from segment_topology import (
    CORNER_DIAGONAL_DIRECTION,
    CORNER_NEIGHBOR_CHECKS,
    CORNER_SEGMENT_FILL,
)
from segment_types import Cell, Corner, DiagonalDirection, Point, Segment, coerce_corner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FillRules:
    """Tunables for the diagonal fill tool."""

    search_radius: int = 2  # Ring radius for nearest-corner snapping
    touch_snap_radius: int = 3  # Ring radius used when a touch misses the diagonal
    confirm_distance: float = 1.5  # Touch confirm tap distance from the locked end, in cells
    default_opacity: float = 1.0  # Opacity used when the inherited cell has none


@dataclass(frozen=True)
class CornerPoint:
    """A cell coordinate together with the corner being filled."""

    x: int
    y: int
    corner: Corner


@dataclass(frozen=True)
class PathValidation:
    """Result of projecting a drag target onto the fill diagonal."""

    valid: bool
    end_x: int
    end_y: int
    cell_count: int


@dataclass(frozen=True)
class InheritedColor:
    color: str
    opacity: float


CORNER_ORDER: tuple[Corner, ...] = (Corner.TL, Corner.TR, Corner.BR, Corner.BL)


# =============================================================================
# Corner Detection
# =============================================================================


def get_nearest_corner(local_x: float, local_y: float) -> Corner:
    """Classify a local position into the quadrant of its nearest corner."""
    is_left = local_x < 0.5
    is_top = local_y < 0.5

    if is_top and is_left:
        return Corner.TL
    if is_top:
        return Corner.TR
    if not is_left:
        return Corner.BR
    return Corner.BL


def get_local_position(
    world_x: float, world_y: float, cell_x: int, cell_y: int, cell_size: float
) -> tuple[float, float]:
    """Position of a world point inside a cell, clamped to 0-1 on each axis."""
    local_x = (world_x - cell_x * cell_size) / cell_size
    local_y = (world_y - cell_y * cell_size) / cell_size
    return (max(0.0, min(1.0, local_x)), max(0.0, min(1.0, local_y)))


# =============================================================================
# Cell State Helpers
# =============================================================================


def cell_is_painted(index: CellIndex, x: int, y: int) -> bool:
    return is_painted(index, x, y)


def cell_is_empty(index: CellIndex, x: int, y: int) -> bool:
    return not is_painted(index, x, y)


def get_cell(index: CellIndex, x: int, y: int) -> Cell | None:
    return lookup(index, x, y)


# =============================================================================
# Concave Corner Validation
# =============================================================================


def is_valid_concave_corner(index: CellIndex, x: int, y: int, corner: Corner | str) -> bool:
    """
    Check whether (x, y) is a fillable concave corner.

    The cell itself must be empty and both neighbors of the corner must be
    painted. Unknown corner names are never valid.
    """
    resolved = coerce_corner(corner)
    if resolved is None:
        return False
    if is_painted(index, x, y):
        return False
    return all(
        is_painted(index, x + offset.dx, y + offset.dy)
        for offset in CORNER_NEIGHBOR_CHECKS[resolved]
    )


def find_valid_corner_for_cell(
    index: CellIndex, x: int, y: int, preferred: Corner | None = None
) -> Corner | None:
    """Return the preferred corner if valid, otherwise the first valid corner of the cell."""
    if preferred is not None and is_valid_concave_corner(index, x, y, preferred):
        return preferred
    for corner in CORNER_ORDER:
        if corner != preferred and is_valid_concave_corner(index, x, y, corner):
            return corner
    return None


def find_nearest_valid_corner(
    index: CellIndex,
    x: int,
    y: int,
    corner: Corner,
    search_radius: int | None = None,
    rules: FillRules | None = None,
) -> CornerPoint | None:
    """
    Find the closest cell where the given corner type is valid.

    The target itself is checked first, then square rings of radius 1, 2, ...
    up to search_radius. The first ring holding any match wins, and within
    that ring the match with the smallest Euclidean distance is returned
    (ties resolve to the first found scanning rows top to bottom).

    Args:
        index: Cell lookup
        x, y: Target coordinate
        corner: Corner type that must be valid
        search_radius: Largest ring to search (defaults to rules.search_radius)
        rules: Fill tunables

    Returns:
        The nearest valid corner, or None if nothing within the radius is valid
    """
    if search_radius is None:
        search_radius = (rules or FillRules()).search_radius

    if is_valid_concave_corner(index, x, y, corner):
        return CornerPoint(x, y, corner)

    for radius in range(1, search_radius + 1):
        nearest: CornerPoint | None = None
        nearest_dist = math.inf

        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                # Only cells on this ring
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                if is_valid_concave_corner(index, x + dx, y + dy, corner):
                    dist = math.sqrt(dx * dx + dy * dy)
                    if dist < nearest_dist:
                        nearest_dist = dist
                        nearest = CornerPoint(x + dx, y + dy, corner)

        if nearest is not None:
            return nearest

    return None


# =============================================================================
# Diagonal Path Calculation
# =============================================================================


def is_valid_45_diagonal(start_x: int, start_y: int, end_x: int, end_y: int) -> bool:
    """True if the two points differ and lie on a common 45 degree line."""
    dx = abs(end_x - start_x)
    dy = abs(end_y - start_y)
    return dx == dy and dx > 0


def get_diagonal_direction(
    start_x: int, start_y: int, end_x: int, end_y: int
) -> DiagonalDirection | None:
    """Direction family of the line from start to end, or None if not a 45 degree line."""
    if not is_valid_45_diagonal(start_x, start_y, end_x, end_y):
        return None

    dx = end_x - start_x
    dy = end_y - start_y
    if (dx > 0) == (dy > 0):
        return DiagonalDirection.TL_BR
    return DiagonalDirection.TR_BL


def corner_matches_diagonal(corner: Corner, direction: DiagonalDirection) -> bool:
    return CORNER_DIAGONAL_DIRECTION[corner] == direction


def get_cells_along_diagonal(
    start_x: int, start_y: int, end_x: int, end_y: int
) -> tuple[Point, ...]:
    """
    Every cell on the 45 degree line from start to end, inclusive.

    Equal start and end give the start alone; any other non-diagonal pair
    gives nothing.
    """
    if not is_valid_45_diagonal(start_x, start_y, end_x, end_y):
        if start_x == end_x and start_y == end_y:
            return (Point(start_x, start_y),)
        return ()

    step_x = 1 if end_x > start_x else -1
    step_y = 1 if end_y > start_y else -1
    steps = abs(end_x - start_x)
    return tuple(Point(start_x + i * step_x, start_y + i * step_y) for i in range(steps + 1))


def get_valid_corners_along_diagonal(
    index: CellIndex, start_x: int, start_y: int, end_x: int, end_y: int, corner: Corner
) -> tuple[CornerPoint, ...]:
    """Cells on the diagonal where the corner type is currently fillable."""
    return tuple(
        CornerPoint(p.x, p.y, corner)
        for p in get_cells_along_diagonal(start_x, start_y, end_x, end_y)
        if is_valid_concave_corner(index, p.x, p.y, corner)
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def snap_to_diagonal(start: CornerPoint, target_x: int, target_y: int) -> Point:
    """
    Project a target onto the 45 degree line through start for the start corner.

    TL-BR lines satisfy y - x = const, TR-BL lines satisfy y + x = const. The
    projection is rounded half-up to the nearest grid point.
    """
    dx = target_x - start.x
    dy = target_y - start.y

    if CORNER_DIAGONAL_DIRECTION[start.corner] == DiagonalDirection.TL_BR:
        t = (dy - dx) / 2
        return Point(_round_half_up(target_x + t), _round_half_up(target_y - t))

    t = (dx + dy) / 2
    return Point(_round_half_up(target_x - t), _round_half_up(target_y - t))


def validate_diagonal_path(
    index: CellIndex, start: CornerPoint | None, target_x: int, target_y: int
) -> PathValidation | None:
    """
    Work out how far a fill stroke reaches toward a drag target.

    The target is snapped onto the start corner's diagonal. If it snaps back
    to the start, or the snapped line does not run in the corner's direction,
    the path is the start cell alone. Otherwise the result covers every valid
    corner between start and the snapped point, ending at the furthest one.

    Returns:
        The path end and number of fillable cells, or None if nothing is fillable
    """
    if start is None:
        return None

    def start_only() -> PathValidation | None:
        if is_valid_concave_corner(index, start.x, start.y, start.corner):
            return PathValidation(True, start.x, start.y, 1)
        return None

    if target_x == start.x and target_y == start.y:
        return start_only()

    snapped = snap_to_diagonal(start, target_x, target_y)
    if snapped.x == start.x and snapped.y == start.y:
        return start_only()

    direction = get_diagonal_direction(start.x, start.y, snapped.x, snapped.y)
    if direction is None or not corner_matches_diagonal(start.corner, direction):
        logger.debug(
            "Path from (%d, %d) %s toward (%d, %d) collapsed to start",
            start.x, start.y, start.corner.value, snapped.x, snapped.y,
        )
        return start_only()

    valid_corners = get_valid_corners_along_diagonal(
        index, start.x, start.y, snapped.x, snapped.y, start.corner
    )
    if not valid_corners:
        return None

    last = valid_corners[-1]
    return PathValidation(True, last.x, last.y, len(valid_corners))


# =============================================================================
# Color Inheritance
# =============================================================================


def get_inherited_color(
    index: CellIndex, x: int, y: int, corner: Corner, rules: FillRules | None = None
) -> InheritedColor | None:
    """Color of the first existing neighbor in the corner's neighbor list."""
    rules = rules or FillRules()
    for offset in CORNER_NEIGHBOR_CHECKS[corner]:
        cell = lookup(index, x + offset.dx, y + offset.dy)
        if cell is not None:
            opacity = cell.opacity if cell.opacity is not None else rules.default_opacity
            return InheritedColor(cell.color, opacity)
    return None


# =============================================================================
# Segment Fill
# =============================================================================


def get_segments_for_corner(corner: Corner | str) -> tuple[Segment, ...]:
    """The 4 segments that draw the diagonal for a corner; empty for unknown names."""
    resolved = coerce_corner(corner)
    if resolved is None:
        return ()
    return CORNER_SEGMENT_FILL[resolved]


def apply_diagonal_fill(
    cells: Iterable[CellLike],
    start: CornerPoint,
    end: Point,
    rules: FillRules | None = None,
) -> Cells:
    """
    Commit a fill stroke from start to end.

    Every valid corner on the diagonal receives the start corner's 4 segments
    in the color inherited at the start corner. The cells are returned
    unchanged if no corner is valid or there is no color to inherit.
    """
    snapshot = cells_from_records(cells)
    index = build_index(snapshot)

    valid_corners = get_valid_corners_along_diagonal(
        index, start.x, start.y, end.x, end.y, start.corner
    )
    if not valid_corners:
        return snapshot

    inherited = get_inherited_color(index, start.x, start.y, start.corner, rules)
    if inherited is None:
        return snapshot

    segments = get_segments_for_corner(start.corner)
    updated = snapshot
    for target in valid_corners:
        updated = set_segments(
            updated, Point(target.x, target.y), segments, inherited.color, inherited.opacity
        )

    logger.info(
        "Diagonal fill %s from (%d, %d) to (%d, %d): %d cells",
        start.corner.value, start.x, start.y, end.x, end.y, len(valid_corners),
    )
    return updated
