"""
Conversion between stored cell records and typed cells.

Stored shapes:
    full cell:    {"x": 1, "y": 2, "color": "#c0c0c0", "opacity": 0.5}
    segment cell: {"x": 1, "y": 2, "segments": {"n": True, "ne": True}, "color": "#c0c0c0"}

Records and typed cells are accepted interchangeably by every read path via
as_cell().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from segment_types import (
    SEGMENT_NAMES,
    Cell,
    FullCell,
    SegmentCell,
    coerce_segments,
    normalize_cell,
)

__all__ = ["as_cell", "cell_from_record", "cell_to_record", "cells_from_records", "cells_to_records"]

logger = logging.getLogger(__name__)

CellLike = Cell | Mapping[str, Any]


def cell_from_record(record: Mapping[str, Any]) -> Cell | None:
    """
    Build a typed cell from a stored record.

    Returns None for records that cannot describe a live cell: missing or
    non-integer coordinates, a missing color, a non-numeric opacity, segments
    that are neither a map nor a list of names, or nothing filled. A segment map with every segment filled yields a FullCell.
    """
    x = record.get("x")
    y = record.get("y")
    color = record.get("color")
    if not _is_int(x) or not _is_int(y) or not isinstance(color, str):
        logger.debug("Ignoring malformed cell record: %r", record)
        return None

    opacity = record.get("opacity")
    if opacity is not None:
        if not _is_number(opacity):
            logger.debug("Ignoring cell record with bad opacity: %r", record)
            return None
        opacity = float(opacity)

    raw_segments = record.get("segments")
    if raw_segments is None:
        return FullCell(x, y, color, opacity)

    if isinstance(raw_segments, Mapping):
        names = [name for name, filled in raw_segments.items() if filled]
    elif isinstance(raw_segments, Iterable) and not isinstance(raw_segments, (str, bytes)):
        names = list(raw_segments)
    else:
        logger.debug("Ignoring cell record with bad segments: %r", record)
        return None

    cell = normalize_cell(SegmentCell(x, y, coerce_segments(names), color, opacity))
    if cell is None:
        logger.debug("Ignoring segment record with nothing filled at (%s, %s)", x, y)
    return cell


def cell_to_record(cell: Cell) -> dict[str, Any]:
    """Convert a typed cell to its stored record shape."""
    record: dict[str, Any] = {"x": cell.x, "y": cell.y}
    if isinstance(cell, SegmentCell):
        record["segments"] = {s.value: True for s in SEGMENT_NAMES if s in cell.segments}
    record["color"] = cell.color
    if cell.opacity is not None:
        record["opacity"] = cell.opacity
    return record


def as_cell(value: CellLike | None) -> Cell | None:
    """Coerce a typed cell or a stored record to a normalized typed cell."""
    match value:
        case None:
            return None
        case FullCell() | SegmentCell():
            return normalize_cell(value)
        case Mapping():
            return cell_from_record(value)
        case _:
            logger.debug("Ignoring unsupported cell value: %r", value)
            return None


def cells_from_records(records: Iterable[CellLike]) -> tuple[Cell, ...]:
    """Coerce a stored cell sequence, dropping anything that is not a live cell."""
    cells: list[Cell] = []
    for record in records:
        cell = as_cell(record)
        if cell is not None:
            cells.append(cell)
    return tuple(cells)


def cells_to_records(cells: Iterable[CellLike]) -> list[dict[str, Any]]:
    """Convert cells to the stored record shape."""
    return [cell_to_record(cell) for cell in cells_from_records(cells)]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
