"""Tests for segment_topology module."""

import pytest

from segment_topology import (
    CORNER_DIAGONAL_DIRECTION,
    CORNER_NEIGHBOR_CHECKS,
    CORNER_SEGMENT_FILL,
    SEGMENT_CROSS_CELL_ADJACENCY,
    SEGMENT_EXTERNAL_EDGES,
    SEGMENT_INTERNAL_ADJACENCY,
    SEGMENT_TRIANGLES,
    VERTEX_RATIOS,
    outer_edge,
    segment_at_position,
    triangle_points,
    vertex_position,
)
from segment_types import SEGMENT_NAMES, Corner, DiagonalDirection, Segment, Vertex


class TestSegmentTables:
    """Tests for the segment subdivision tables."""

    def test_segment_order(self) -> None:
        """Segments run clockwise from the top-left."""
        assert [s.value for s in SEGMENT_NAMES] == ["nw", "n", "ne", "e", "se", "s", "sw", "w"]

    def test_every_triangle_starts_at_center(self) -> None:
        """Each triangle is center plus two boundary points."""
        assert set(SEGMENT_TRIANGLES) == set(Segment)
        for center, first, second in SEGMENT_TRIANGLES.values():
            assert center == Vertex.C
            assert first != Vertex.C and second != Vertex.C

    def test_triangles_tile_the_boundary(self) -> None:
        """Consecutive triangles share a boundary point, going all the way around."""
        for i, segment in enumerate(SEGMENT_NAMES):
            following = SEGMENT_NAMES[(i + 1) % 8]
            assert SEGMENT_TRIANGLES[segment][2] == SEGMENT_TRIANGLES[following][1]

    def test_vertex_ratios_within_cell(self) -> None:
        """All vertices lie in the unit square."""
        for x_ratio, y_ratio in VERTEX_RATIOS.values():
            assert 0 <= x_ratio <= 1
            assert 0 <= y_ratio <= 1

    def test_tables_are_read_only(self) -> None:
        """The tables cannot be modified."""
        with pytest.raises(TypeError):
            SEGMENT_TRIANGLES[Segment.N] = (Vertex.C, Vertex.TL, Vertex.TR)  # type: ignore[index]
        with pytest.raises(TypeError):
            SEGMENT_CROSS_CELL_ADJACENCY[Segment.N] = None  # type: ignore[index]


class TestInternalAdjacency:
    """Tests for the internal adjacency table."""

    def test_eight_edges_from_center(self) -> None:
        """One edge per boundary point, all starting at the center."""
        assert len(SEGMENT_INTERNAL_ADJACENCY) == 8
        assert {e.from_vertex for e in SEGMENT_INTERNAL_ADJACENCY} == {Vertex.C}
        assert len({e.to_vertex for e in SEGMENT_INTERNAL_ADJACENCY}) == 8

    def test_top_left_edge_shared_by_w_and_nw(self) -> None:
        """The center to top-left edge lies between w and nw."""
        edge = next(e for e in SEGMENT_INTERNAL_ADJACENCY if e.to_vertex == Vertex.TL)
        assert set(edge.segments) == {Segment.W, Segment.NW}

    def test_edges_match_triangles(self) -> None:
        """Both segments of an edge have the edge's boundary point in their triangle."""
        for edge in SEGMENT_INTERNAL_ADJACENCY:
            for segment in edge.segments:
                assert edge.to_vertex in SEGMENT_TRIANGLES[segment]

    def test_each_segment_on_two_edges(self) -> None:
        """Every segment borders exactly two internal edges."""
        for segment in Segment:
            count = sum(1 for e in SEGMENT_INTERNAL_ADJACENCY if segment in e.segments)
            assert count == 2


class TestCrossCellAdjacency:
    """Tests for the cross-cell adjacency table."""

    def test_ne_touches_right_neighbor_w(self) -> None:
        """Segment ne touches the w segment of the cell to the right."""
        adjacency = SEGMENT_CROSS_CELL_ADJACENCY[Segment.NE]
        assert (adjacency.dx, adjacency.dy) == (1, 0)
        assert adjacency.neighbor_segment == Segment.W

    def test_table_is_bijective(self) -> None:
        """No two segments touch the same neighbor segment."""
        targets = {
            (a.dx, a.dy, a.neighbor_segment) for a in SEGMENT_CROSS_CELL_ADJACENCY.values()
        }
        assert len(targets) == 8

    @pytest.mark.parametrize("segment", list(Segment))
    def test_inverse_entry_exists(self, segment: Segment) -> None:
        """The neighbor's segment points back under the opposite offset."""
        adjacency = SEGMENT_CROSS_CELL_ADJACENCY[segment]
        inverse = SEGMENT_CROSS_CELL_ADJACENCY[adjacency.neighbor_segment]
        assert (inverse.dx, inverse.dy) == (-adjacency.dx, -adjacency.dy)
        assert inverse.neighbor_segment == segment

    @pytest.mark.parametrize("segment", list(Segment))
    def test_shared_edge_coincides(self, segment: Segment) -> None:
        """Both sides of a shared edge describe the same physical line."""
        adjacency = SEGMENT_CROSS_CELL_ADJACENCY[segment]
        here = {vertex_position(v, 0, 0, 1, 1) for v in outer_edge(segment)}
        there = {
            vertex_position(v, adjacency.dx, adjacency.dy, 1, 1)
            for v in outer_edge(adjacency.neighbor_segment)
        }
        assert here == there

    def test_external_edges_agree_with_offsets(self) -> None:
        """The edge a segment lies on points toward its neighbor."""
        offsets = {"top": (0, -1), "right": (1, 0), "bottom": (0, 1), "left": (-1, 0)}
        for segment, edge in SEGMENT_EXTERNAL_EDGES.items():
            adjacency = SEGMENT_CROSS_CELL_ADJACENCY[segment]
            assert offsets[edge.edge] == (adjacency.dx, adjacency.dy)


class TestCornerTables:
    """Tests for the diagonal fill tables."""

    def test_tl_segments(self) -> None:
        """TL fills n, nw, w and sw."""
        assert CORNER_SEGMENT_FILL[Corner.TL] == (Segment.N, Segment.NW, Segment.W, Segment.SW)

    def test_each_corner_fills_half_a_cell(self) -> None:
        """Every corner fills four distinct segments."""
        for segments in CORNER_SEGMENT_FILL.values():
            assert len(set(segments)) == 4

    def test_tl_neighbors(self) -> None:
        """TL requires the cells above and to the left."""
        offsets = [(o.dx, o.dy) for o in CORNER_NEIGHBOR_CHECKS[Corner.TL]]
        assert offsets == [(0, -1), (-1, 0)]

    def test_diagonal_direction_mapping(self) -> None:
        """TL and BR share TR-BL; TR and BL share TL-BR."""
        assert CORNER_DIAGONAL_DIRECTION[Corner.TL] == DiagonalDirection.TR_BL
        assert CORNER_DIAGONAL_DIRECTION[Corner.BR] == DiagonalDirection.TR_BL
        assert CORNER_DIAGONAL_DIRECTION[Corner.TR] == DiagonalDirection.TL_BR
        assert CORNER_DIAGONAL_DIRECTION[Corner.BL] == DiagonalDirection.TL_BR


class TestGeometryLookups:
    """Tests for vertex and triangle positions."""

    def test_vertex_position_scales(self) -> None:
        """Ratios are applied to the cell size and offset."""
        assert vertex_position(Vertex.C, 10, 20, 40, 40) == (30.0, 40.0)
        assert vertex_position(Vertex.BR, 10, 20, 40, 40) == (50.0, 60.0)

    def test_triangle_points(self) -> None:
        """Triangle points come out center first."""
        points = triangle_points(Segment.N, 0, 0, 2, 2)
        assert points == ((1.0, 1.0), (1.0, 0.0), (2.0, 0.0))

    @pytest.mark.parametrize(
        "local, expected",
        [
            ((0.4, 0.05), Segment.NW),
            ((0.6, 0.05), Segment.N),
            ((0.95, 0.4), Segment.NE),
            ((0.95, 0.6), Segment.E),
            ((0.6, 0.95), Segment.SE),
            ((0.4, 0.95), Segment.S),
            ((0.05, 0.6), Segment.SW),
            ((0.05, 0.4), Segment.W),
        ],
    )
    def test_segment_at_position(self, local: tuple[float, float], expected: Segment) -> None:
        """A point resolves to the triangle drawn around it."""
        assert segment_at_position(*local) == expected
