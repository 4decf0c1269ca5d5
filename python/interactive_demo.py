"""
Interactive demo for segment painting and the diagonal fill tool.
Move a cursor over a small map and paint, erase, or drag diagonal fills
with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_cells
from cell_index import build_index
from cell_parser import parse_cells
from cell_store import Cells, get_cell_at, remove_cell, remove_segments, set_cell, set_segments
from diagonal_fill import get_valid_corners_along_diagonal
from drag_session import (
    Cancelled,
    Committed,
    Dragging,
    DragState,
    EndLocked,
    Idle,
    cancel,
    handle_click,
    handle_move,
    reset,
)
from segment_topology import segment_at_position
from segment_types import Corner, Point, SegmentCell

# Local click position used for each corner when starting a stroke
CORNER_LOCAL_POSITIONS: dict[Corner, tuple[float, float]] = {
    Corner.TL: (0.25, 0.25),
    Corner.TR: (0.75, 0.25),
    Corner.BR: (0.75, 0.75),
    Corner.BL: (0.25, 0.75),
}

# Segment picked by the segment brush for each corner
CORNER_BRUSH_POSITIONS: dict[Corner, tuple[float, float]] = {
    Corner.TL: (0.2, 0.1),
    Corner.TR: (0.9, 0.2),
    Corner.BR: (0.8, 0.9),
    Corner.BL: (0.1, 0.8),
}


class InteractiveDemo:
    """Interactive demo for painting and diagonal fill."""

    def __init__(self, cells: Cells, width: int, height: int, color: str = "cyan") -> None:
        self.cells = cells
        self.original_cells = cells  # Keep a copy of the original state
        self.bounds = (0, 0, width - 1, height - 1)
        self.color = color
        self.cursor = Point(0, 0)
        self.corner = Corner.TL
        self.session: DragState = reset()
        self.console = Console()
        self.status_message = "Ready"

    def preview_cells(self) -> list[Point]:
        """Cells that the current stroke would fill."""
        match self.session:
            case Dragging(start=start, preview_end=end) if end is not None:
                pass
            case EndLocked(start=start, end=end):
                pass
            case _:
                return []
        index = build_index(self.cells)
        return [
            Point(c.x, c.y)
            for c in get_valid_corners_along_diagonal(index, start.x, start.y, end.x, end.y, start.corner)
        ]

    def generate_display(self) -> Panel:
        """Generate the current display with map and status."""
        map_text = render_cells(
            self.cells,
            bounds=self.bounds,
            highlight=self.preview_cells(),
            cursor=self.cursor,
            title="map",
        )

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"({self.cursor.x}, {self.cursor.y})  ")
        status.append("Corner: ", style="bold")
        status.append(f"{self.corner.value}  ")
        status.append("Tool: ", style="bold")
        status.append(f"{type(self.session).__name__}\n")

        cell = get_cell_at(self.cells, self.cursor)
        cell_str = (
            "Empty" if cell is None
            else f"Segments({', '.join(sorted(s.value for s in cell.segments))})" if isinstance(cell, SegmentCell)
            else "Full"
        )
        status.append("Current Cell: ", style="bold")
        status.append(f"{cell_str}\n\n")

        status.append(Text.from_ansi(map_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D - Move cursor\n")
        status.append("  C       - Cycle corner (TL, TR, BR, BL)\n")
        status.append("  F       - Fill cell    X - Erase cell\n")
        status.append("  B       - Paint segment at corner    V - Clear it\n")
        status.append("  G       - Start / finish diagonal fill at cursor\n")
        status.append("  Z       - Cancel diagonal fill\n")
        status.append("  R       - Reset map    Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Segment Paint Interactive Demo", border_style="green", width=80)

    def move_cursor(self, dx: int, dy: int) -> None:
        min_x, min_y, max_x, max_y = self.bounds
        self.cursor = Point(
            max(min_x, min(max_x, self.cursor.x + dx)),
            max(min_y, min(max_y, self.cursor.y + dy)),
        )
        self.session = handle_move(self.session, self.cells, self.cursor.x, self.cursor.y)

    def brush_segment(self, erase: bool = False) -> None:
        local_x, local_y = CORNER_BRUSH_POSITIONS[self.corner]
        segment = segment_at_position(local_x, local_y)
        if erase:
            self.cells = remove_segments(self.cells, self.cursor, [segment])
            self.status_message = f"Cleared segment {segment.value}"
        else:
            self.cells = set_segments(self.cells, self.cursor, [segment], self.color)
            self.status_message = f"Painted segment {segment.value}"

    def diagonal_fill(self) -> None:
        """Advance the diagonal fill stroke at the cursor."""
        if isinstance(self.session, (Committed, Cancelled)):
            self.session = reset()

        local_x, local_y = CORNER_LOCAL_POSITIONS[self.corner]
        previous = self.session
        self.session = handle_click(
            self.session, self.cells, self.cursor.x, self.cursor.y, local_x, local_y
        )

        match self.session:
            case Committed(cells=cells, start=start, end=end):
                self.cells = cells
                self.status_message = (
                    f"✓ Filled {start.corner.value} corners from ({start.x}, {start.y}) to ({end.x}, {end.y})"
                )
                self.session = reset()
            case Dragging(start=start) if previous is not self.session:
                self.status_message = (
                    f"Started at ({start.x}, {start.y}) {start.corner.value} - move along the diagonal"
                )
            case Idle():
                self.status_message = "✗ No concave corner here"
            case _:
                self.status_message = "✗ No fillable corner along that diagonal"

    def cancel_fill(self) -> None:
        self.session = cancel(self.session)
        self.status_message = "Diagonal fill cancelled"
        self.session = reset()

    def reset_map(self) -> None:
        """Reset the map to its original state."""
        self.cells = self.original_cells
        self.session = reset()
        self.status_message = "Map reset to original state"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey().lower()

                    if key == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == 'r':
                        self.reset_map()
                    elif key == 'w':
                        self.move_cursor(0, -1)
                    elif key == 's':
                        self.move_cursor(0, 1)
                    elif key == 'a':
                        self.move_cursor(-1, 0)
                    elif key == 'd':
                        self.move_cursor(1, 0)
                    elif key == 'c':
                        corners = list(Corner)
                        self.corner = corners[(corners.index(self.corner) + 1) % len(corners)]
                    elif key == 'f':
                        self.cells = set_cell(self.cells, self.cursor, self.color)
                        self.status_message = "Filled cell"
                    elif key == 'x':
                        self.cells = remove_cell(self.cells, self.cursor)
                        self.status_message = "Erased cell"
                    elif key == 'b':
                        self.brush_segment()
                    elif key == 'v':
                        self.brush_segment(erase=True)
                    elif key == 'g':
                        self.diagonal_fill()
                    elif key == 'z':
                        self.cancel_fill()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    staircase=(
        "# # # # # # # #|"
        "# _ _ _ _ _ _ #|"
        "# # _ _ _ _ _ #|"
        "# # # _ _ _ _ #|"
        "# # # # _ _ _ #|"
        "# # # # # _ _ #|"
        "# # # # # # # #"
    ),
    room=(
        "# # # # # # #|"
        "# _ _ _ _ _ #|"
        "# _ nw+n+ne+e _ _ #|"
        "# _ _ _ _ _ #|"
        "# # # # # # #"
    ),
)


def main(layout: str) -> None:
    """Run interactive demo with a sample map."""
    rows = layout.split("|")
    width = max(len(row.split(" ")) for row in rows)
    cells = parse_cells(layout, default_color="blue")
    demo = InteractiveDemo(cells, width, len(rows))
    demo.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

        print('Running from IDE - rendering initial state')
        print()
        print(render_cells(parse_cells(LAYOUTS['staircase'])))
    else:
        main(LAYOUTS[sys.argv[1] if len(sys.argv) > 1 else 'staircase'])
