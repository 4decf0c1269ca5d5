"""Tests for ascii_render module."""

from ascii_render import compute_bounds, render_borders, render_cell_glyph, render_cells
from cell_parser import parse_cells
from segment_types import FullCell, Segment, SegmentCell


def plain(color: str):
    return lambda s: s


class TestRenderCellGlyph:
    """Tests for single cell glyphs."""

    def test_empty(self) -> None:
        assert render_cell_glyph(None) == ("···", "···", "···")

    def test_full(self) -> None:
        assert render_cell_glyph(FullCell(0, 0, "red")) == ("███", "███", "███")

    def test_quarter_ring(self) -> None:
        cell = SegmentCell(0, 0, frozenset({Segment.NW, Segment.N, Segment.NE, Segment.E}), "red")
        assert render_cell_glyph(cell) == ("▒██", "·▒█", "··▒")

    def test_single_segment(self) -> None:
        cell = SegmentCell(0, 0, frozenset({Segment.N}), "red")
        assert render_cell_glyph(cell) == ("·▒▒", "·▒·", "···")


class TestRenderCells:
    """Tests for map rendering."""

    def test_empty_map(self) -> None:
        assert render_cells(()) == "(map: empty)"
        assert render_cells((), title="level") == "(level: empty)"

    def test_box_and_glyphs(self) -> None:
        rendered = render_cells(parse_cells("# n"), color_fn=plain)
        assert rendered.split("\n") == [
            "┌ map ─┐",
            "│███·▒▒│",
            "│███·▒·│",
            "│███···│",
            "└──────┘",
        ]

    def test_bounds_include_empty_cells(self) -> None:
        rendered = render_cells(parse_cells("#"), bounds=(0, 0, 1, 1), color_fn=plain)
        lines = rendered.split("\n")
        assert len(lines) == 8
        assert lines[4] == "│······│"

    def test_accepts_records(self) -> None:
        rendered = render_cells([{"x": 0, "y": 0, "color": "red"}], color_fn=plain, title="m")
        assert "███" in rendered

    def test_compute_bounds(self) -> None:
        cells = parse_cells("_ #|# _")
        assert compute_bounds(cells) == (0, 0, 1, 1)
        assert compute_bounds(()) is None


class TestRenderBorders:
    """Tests for the border listing."""

    def test_single_segment(self) -> None:
        assert render_borders(parse_cells("n")) == (
            "(0, 0) internal: [C-TM, C-TR] external: [n->se@(0,-1)]"
        )

    def test_full_cells_not_listed(self) -> None:
        assert render_borders(parse_cells("# #")) == ""

    def test_sorted_by_row(self) -> None:
        lines = render_borders(parse_cells("_ s|n _")).split("\n")
        assert [line.split(" internal")[0] for line in lines] == ["(1, 0)", "(0, 1)"]
