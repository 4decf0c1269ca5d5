"""Tests for cell_parser module."""

import pytest

from cell_parser import format_cell, parse_cells
from segment_types import FullCell, Point, Segment, SegmentCell


class TestParseCells:
    """Tests for parse_cells function."""

    def test_full_cells(self) -> None:
        """Test parsing full cells."""
        cells = parse_cells("# #|_ #")
        assert cells == (
            FullCell(0, 0, "gray"),
            FullCell(1, 0, "gray"),
            FullCell(1, 1, "gray"),
        )

    def test_segment_cells(self) -> None:
        """Test parsing segment cells."""
        cells = parse_cells("n+ne sw")
        assert cells == (
            SegmentCell(0, 0, frozenset({Segment.N, Segment.NE}), "gray"),
            SegmentCell(1, 0, frozenset({Segment.SW}), "gray"),
        )

    def test_colors(self) -> None:
        """Test color suffixes and the default color."""
        cells = parse_cells("#:red se+s:blue #", default_color="green")
        assert [c.color for c in cells] == ["red", "blue", "green"]

    def test_empty_tokens(self) -> None:
        """Test that '_' and empty tokens leave gaps."""
        cells = parse_cells("#  #|_ _ #")
        assert [(c.x, c.y) for c in cells] == [(0, 0), (2, 0), (2, 1)]

    def test_origin(self) -> None:
        """Test offsetting the layout."""
        cells = parse_cells("# #", origin=Point(-2, 5))
        assert [(c.x, c.y) for c in cells] == [(-2, 5), (-1, 5)]

    def test_all_segments_collapse(self) -> None:
        """Test that listing every segment yields a full cell."""
        cells = parse_cells("nw+n+ne+e+se+s+sw+w:red")
        assert cells == (FullCell(0, 0, "red"),)

    def test_empty_layout(self) -> None:
        assert parse_cells("") == ()


class TestParseErrors:
    """Tests for invalid layouts."""

    def test_unknown_segment(self) -> None:
        """Test error message for an unknown segment name."""
        with pytest.raises(ValueError) as exc_info:
            parse_cells("# n+up|#")

        message = str(exc_info.value)
        assert "Invalid cell token: 'n+up'" in message
        assert "unknown segment name(s) 'up'" in message
        assert 'Row 0: "# n+up"' in message
        assert "Position: column 1" in message
        assert "Valid formats:" in message

    def test_empty_color(self) -> None:
        """Test error message for a dangling color separator."""
        with pytest.raises(ValueError) as exc_info:
            parse_cells("_|#:")

        message = str(exc_info.value)
        assert "empty color after ':'" in message
        assert 'Row 1: "#:"' in message

    def test_trailing_plus(self) -> None:
        with pytest.raises(ValueError, match="unknown segment name"):
            parse_cells("n+")


class TestFormatCell:
    """Tests for format_cell function."""

    def test_full_cell(self) -> None:
        assert format_cell(FullCell(0, 0, "red")) == "#:red"

    def test_segment_cell(self) -> None:
        """Segments are written in clockwise order."""
        cell = SegmentCell(0, 0, frozenset({Segment.W, Segment.N}), "blue")
        assert format_cell(cell) == "n+w:blue"

    def test_parses_back(self) -> None:
        cell = SegmentCell(0, 0, frozenset({Segment.SE, Segment.S}), "blue")
        assert parse_cells(format_cell(cell)) == (cell,)

    def test_record(self) -> None:
        record = {"x": 0, "y": 0, "segments": {"ne": True, "n": True}, "color": "red"}
        assert format_cell(record) == "n+ne:red"

    def test_missing_cell(self) -> None:
        assert format_cell(None) == "_"
        assert format_cell({"x": 0, "y": 0, "segments": {}, "color": "red"}) == "_"
