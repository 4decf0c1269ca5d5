"""
Diagonal fill stroke as an explicit state machine.

    Idle --click on a concave corner--> Dragging(start)
    Dragging --move--> Dragging(start, preview_end)
    Dragging --click (mouse)--> Committed
    Dragging --click (touch)--> EndLocked(start, end)
    EndLocked --tap near end / confirm--> Committed
    EndLocked --tap elsewhere--> Dragging(start)
    EndLocked --click (mouse)--> Committed, resolved from start like Dragging
    any active state --cancel--> Cancelled

Every transition is a pure function of the current state and the unchanged
base cells; the base cells are only replaced by a Committed state.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from cell_codec import CellLike, cells_from_records
from cell_index import CellIndex, build_index
from cell_store import Cells
from diagonal_fill import (
    CornerPoint,
    FillRules,
    apply_diagonal_fill,
    find_nearest_valid_corner,
    find_valid_corner_for_cell,
    get_nearest_corner,
    validate_diagonal_path,
)
from segment_types import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No stroke in progress."""

    pass


@dataclass(frozen=True)
class Dragging:
    """A start corner is chosen; preview_end tracks the pointer."""

    start: CornerPoint
    preview_end: Point | None = None


@dataclass(frozen=True)
class EndLocked:
    """Touch input chose an end; waiting for a confirming tap."""

    start: CornerPoint
    end: Point


@dataclass(frozen=True)
class Committed:
    """The stroke was applied."""

    cells: Cells
    start: CornerPoint
    end: Point


@dataclass(frozen=True)
class Cancelled:
    """The stroke was abandoned without touching the cells."""

    pass


DragState = Idle | Dragging | EndLocked | Committed | Cancelled


def reset() -> DragState:
    return Idle()


def is_active(state: DragState) -> bool:
    return isinstance(state, (Dragging, EndLocked))


def handle_click(
    state: DragState,
    cells: Iterable[CellLike],
    x: int,
    y: int,
    local_x: float = 0.5,
    local_y: float = 0.5,
    is_touch: bool = False,
    rules: FillRules | None = None,
) -> DragState:
    """
    Advance the stroke for a click or tap on cell (x, y).

    Args:
        state: Current drag state
        cells: Base cells (unchanged until the stroke commits)
        x, y: Clicked cell
        local_x, local_y: Click position within the cell, used to pick the start corner
        is_touch: Touch input locks the end and waits for confirmation
        rules: Fill tunables

    Returns:
        The next state; the same state if the click did nothing
    """
    rules = rules or FillRules()
    snapshot = cells_from_records(cells)
    index = build_index(snapshot)

    match state:
        case Idle():
            hint = get_nearest_corner(local_x, local_y)
            corner = find_valid_corner_for_cell(index, x, y, hint)
            if corner is None:
                return state
            logger.debug("Diagonal fill started at (%d, %d) %s", x, y, corner.value)
            return Dragging(CornerPoint(x, y, corner))

        case EndLocked(start=start, end=end):
            if not is_touch:
                # Mouse input ignores the lock and resolves the path from start
                return _extend(state, snapshot, index, start, x, y, is_touch, rules)
            if math.hypot(x - end.x, y - end.y) <= rules.confirm_distance:
                return _commit(snapshot, start, end, rules)
            return Dragging(start)

        case Dragging(start=start):
            return _extend(state, snapshot, index, start, x, y, is_touch, rules)

        case _:
            return state


def handle_move(state: DragState, cells: Iterable[CellLike], x: int, y: int) -> DragState:
    """Update the preview end of a stroke in progress."""
    if not isinstance(state, Dragging):
        return state

    validation = validate_diagonal_path(build_index(cells), state.start, x, y)
    if validation is not None and validation.valid:
        preview = Point(validation.end_x, validation.end_y)
    else:
        preview = None

    if preview == state.preview_end:
        return state
    return Dragging(state.start, preview)


def confirm(state: DragState, cells: Iterable[CellLike], rules: FillRules | None = None) -> DragState:
    """Commit a locked stroke."""
    if not isinstance(state, EndLocked):
        return state
    return _commit(cells_from_records(cells), state.start, state.end, rules or FillRules())


def cancel(state: DragState) -> DragState:
    """Abandon an active stroke."""
    if not is_active(state):
        return state
    logger.debug("Diagonal fill cancelled")
    return Cancelled()


def _commit(cells: Cells, start: CornerPoint, end: Point, rules: FillRules) -> Committed:
    return Committed(apply_diagonal_fill(cells, start, end, rules), start, end)


def _extend(
    state: DragState,
    cells: Cells,
    index: CellIndex,
    start: CornerPoint,
    x: int,
    y: int,
    is_touch: bool,
    rules: FillRules,
) -> DragState:
    validation = validate_diagonal_path(index, start, x, y)
    if (validation is None or not validation.valid) and is_touch:
        snapped = find_nearest_valid_corner(index, x, y, start.corner, rules.touch_snap_radius)
        if snapped is not None:
            validation = validate_diagonal_path(index, start, snapped.x, snapped.y)

    if validation is None or not validation.valid:
        return state

    end = Point(validation.end_x, validation.end_y)
    if is_touch:
        return EndLocked(start, end)
    return _commit(cells, start, end, rules)
