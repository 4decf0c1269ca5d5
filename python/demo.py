"""
Demonstration scripts for the segment painting system.
"""

import logging

from ascii_render import render_borders, render_cells
from cell_codec import cells_to_records
from cell_index import build_index
from cell_parser import parse_cells
from cell_store import remove_segments, set_segments
from diagonal_fill import (
    CornerPoint,
    apply_diagonal_fill,
    get_valid_corners_along_diagonal,
    validate_diagonal_path,
)
from segment_types import Corner, Point


def demo() -> None:
    """Demonstrate segment painting and normalization."""
    cells = parse_cells("# # #|# _ #|# # #", default_color="blue")

    print("=" * 40)
    print("Room with an empty center:")
    print("=" * 40)
    print(render_cells(cells))
    print()

    cells = set_segments(cells, Point(1, 1), ["nw", "n", "ne", "e"], "red")
    print("=" * 40)
    print("Center painted with {nw, n, ne, e} in red:")
    print("=" * 40)
    print(render_cells(cells))
    print()

    cells = set_segments(cells, Point(1, 1), ["se", "s", "sw", "w"], "red")
    print("=" * 40)
    print("Remaining segments painted (collapses to a full cell):")
    print("=" * 40)
    print(render_cells(cells))
    print(cells_to_records(cells)[-1])
    print()

    cells = remove_segments(cells, Point(1, 1), ["se", "s"])
    print("=" * 40)
    print("{se, s} cleared again:")
    print("=" * 40)
    print(render_cells(cells))
    print(cells_to_records(cells)[-1])


def border_demo() -> None:
    """Demonstrate border derivation for partially filled cells."""
    cells = parse_cells("_ # _|_ nw+n+ne+e _|_ _ _")

    print("=" * 40)
    print("Segment cell below a full cell:")
    print("=" * 40)
    print(render_cells(cells))
    print(render_borders(cells))
    print()

    cells = parse_cells("se+s+sw _|ne+e _")
    print("=" * 40)
    print("Two segment cells touching:")
    print("=" * 40)
    print(render_cells(cells))
    print(render_borders(cells))


def diagonal_fill_demo() -> None:
    """Demonstrate a diagonal fill stroke along a staircase."""
    cells = parse_cells(
        "# # # # # #|"
        "# _ _ _ _ #|"
        "# # _ _ _ #|"
        "# # # _ _ #|"
        "# # # # _ #|"
        "# # # # # #",
        default_color="green",
    )
    start = CornerPoint(1, 1, Corner.BL)
    index = build_index(cells)

    print("=" * 40)
    print("Staircase:")
    print("=" * 40)
    print(render_cells(cells))
    print()

    for target in (Point(2, 2), Point(3, 3), Point(6, 5)):
        validation = validate_diagonal_path(index, start, target.x, target.y)
        print(f"Drag to ({target.x}, {target.y}): {validation}")
    print()

    validation = validate_diagonal_path(index, start, 4, 4)
    end = Point(validation.end_x, validation.end_y) if validation else Point(start.x, start.y)
    preview = get_valid_corners_along_diagonal(index, start.x, start.y, end.x, end.y, start.corner)

    print("=" * 40)
    print("Preview of the stroke:")
    print("=" * 40)
    print(render_cells(cells, highlight=[Point(c.x, c.y) for c in preview]))
    print()

    filled = apply_diagonal_fill(cells, start, end)
    print("=" * 40)
    print("After committing:")
    print("=" * 40)
    print(render_cells(filled))
    print(render_borders(filled))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    demo()
    print()
    border_demo()
    print()
    diagonal_fill_demo()
