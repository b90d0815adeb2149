"""Tests for GeometryOps polygon primitives"""
import math

import pytest

from massing.core import GeometryError
from massing.components.geometry import GeometryOps, Point2D

UNIT_SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
SQUARE_10 = [(0, 0), (10, 0), (10, 10), (0, 10)]


class TestAreaAndPerimeter:

    def test_unit_square_area(self):
        assert GeometryOps.polygon_area(UNIT_SQUARE) == pytest.approx(1.0)

    def test_unit_square_perimeter(self):
        assert GeometryOps.total_perimeter(UNIT_SQUARE) == pytest.approx(4.0)

    def test_area_ignores_winding(self):
        assert GeometryOps.polygon_area(list(reversed(UNIT_SQUARE))) == pytest.approx(1.0)

    def test_signed_area_positive_for_counter_clockwise(self):
        assert GeometryOps.signed_area(UNIT_SQUARE) > 0
        assert GeometryOps.signed_area(list(reversed(UNIT_SQUARE))) < 0

    def test_degenerate_polygon_has_zero_area(self):
        assert GeometryOps.polygon_area([(0, 0), (1, 1)]) == 0.0

    def test_side_lengths_wrap_last_to_first(self):
        sides = GeometryOps.side_lengths([(0, 0), (3, 0), (3, 4)])

        assert [s.length for s in sides] == pytest.approx([3.0, 4.0, 5.0])
        assert sides[-1].start_index == 2
        assert sides[-1].end_index == 0
        assert sides[-1].end_point == (0.0, 0.0)


class TestPointInPolygon:

    @pytest.mark.parametrize("x", [0.5, 2.5, 5.0, 7.5, 9.5])
    @pytest.mark.parametrize("y", [0.5, 5.0, 9.5])
    def test_strictly_inside_points(self, x, y):
        assert GeometryOps.point_in_polygon((x, y), SQUARE_10)

    @pytest.mark.parametrize("point", [(-1, 5), (11, 5), (5, -1), (5, 11), (-3, -3), (15, 20)])
    def test_points_outside_bounding_box(self, point):
        assert not GeometryOps.point_in_polygon(point, SQUARE_10)

    def test_accepts_point2d(self):
        assert GeometryOps.point_in_polygon(Point2D(5, 5), SQUARE_10)

    def test_concave_notch_is_outside(self):
        u_shape = [(0, 0), (10, 0), (10, 10), (7, 10), (7, 3), (3, 3), (3, 10), (0, 10)]
        assert not GeometryOps.point_in_polygon((5, 6), u_shape)
        assert GeometryOps.point_in_polygon((1, 6), u_shape)

    def test_low_edges_count_as_inside(self):
        assert GeometryOps.point_in_polygon((0, 5), SQUARE_10)
        assert GeometryOps.point_in_polygon((5, 0), SQUARE_10)

    def test_high_edges_count_as_outside(self):
        assert not GeometryOps.point_in_polygon((10, 5), SQUARE_10)
        assert not GeometryOps.point_in_polygon((5, 10), SQUARE_10)
        assert not GeometryOps.point_in_polygon((10, 10), SQUARE_10)

    def test_polygon_inside(self):
        assert GeometryOps.is_polygon_inside([(2, 2), (4, 2), (4, 4), (2, 4)], SQUARE_10)
        assert not GeometryOps.is_polygon_inside([(20, 20), (22, 20), (22, 22), (20, 22)], SQUARE_10)
        assert not GeometryOps.is_polygon_inside([(8, 8), (12, 8), (12, 12), (8, 12)], SQUARE_10)


class TestCentroidAndBounds:

    def test_centroid_is_vertex_mean(self):
        assert GeometryOps.centroid(SQUARE_10) == Point2D(5.0, 5.0)

    def test_centroid_not_area_weighted(self):
        # Extra vertex on one edge pulls the mean but not the area centroid
        centroid = GeometryOps.centroid([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)])
        assert centroid.x == pytest.approx(5.0)
        assert centroid.y == pytest.approx(4.0)

    def test_centroid_of_empty_polygon_raises(self):
        with pytest.raises(GeometryError):
            GeometryOps.centroid([])

    def test_bounding_box(self):
        assert GeometryOps.bounding_box([(3, -1), (7, 2), (-2, 5)]) == (-2.0, -1.0, 7.0, 5.0)


class TestDedupe:

    def test_drops_points_within_epsilon_of_successor(self):
        points = [(0, 0), (0, 0.0005), (1, 0), (1, 1), (0, 0)]
        assert GeometryOps.dedupe_consecutive(points) == ((0.0, 0.0005), (1.0, 0.0), (1.0, 1.0))

    def test_keeps_distinct_points(self):
        assert GeometryOps.dedupe_consecutive(UNIT_SQUARE) == tuple((float(x), float(y)) for x, y in UNIT_SQUARE)

    def test_custom_epsilon(self):
        assert len(GeometryOps.dedupe_consecutive([(0, 0), (0.5, 0), (5, 5)], epsilon=1.0)) == 2


class TestShapeConstruction:

    def test_rectangle_from_any_corner_order(self):
        expected = ((0.0, 0.0), (4.0, 0.0), (4.0, 3.0), (0.0, 3.0))
        assert GeometryOps.rectangle_vertices(Point2D(0, 0), Point2D(4, 3)) == expected
        assert GeometryOps.rectangle_vertices(Point2D(4, 3), Point2D(0, 0)) == expected

    def test_circle_vertices(self):
        ring = GeometryOps.circle_vertices(Point2D(1, 2), 5.0)

        assert len(ring) == 32
        assert ring[0] == pytest.approx((6.0, 2.0))
        assert ring[8] == pytest.approx((1.0, 7.0))
        for x, y in ring:
            assert math.hypot(x - 1, y - 2) == pytest.approx(5.0)

    def test_edge_normal(self):
        normal = GeometryOps.edge_normal(SQUARE_10, 1)
        assert normal.x == pytest.approx(-1.0)
        assert normal.y == pytest.approx(0.0)

    def test_edge_normal_wraps(self):
        normal = GeometryOps.edge_normal(SQUARE_10, 3)
        assert normal.x == pytest.approx(0.0)
        assert normal.y == pytest.approx(-1.0)

    def test_zero_length_edge_has_no_normal(self):
        assert GeometryOps.edge_normal([(0, 0), (0, 0), (5, 5)], 0) is None

    def test_displace_edge_moves_only_its_two_vertices(self):
        moved = GeometryOps.displace_edge(SQUARE_10, 1, Point2D(1.0, 0.0), 2.5)
        assert moved == ((0.0, 0.0), (12.5, 0.0), (12.5, 10.0), (0.0, 10.0))

    def test_nearest_edge(self):
        assert GeometryOps.nearest_edge(SQUARE_10, Point2D(5, -1)) == 0
        assert GeometryOps.nearest_edge(SQUARE_10, Point2D(11, 5)) == 1
        assert GeometryOps.nearest_edge(SQUARE_10, Point2D(5, 9)) == 2

    def test_nearest_edge_needs_two_vertices(self):
        with pytest.raises(GeometryError):
            GeometryOps.nearest_edge([(0, 0)], Point2D(1, 1))

    def test_is_simple(self):
        assert GeometryOps.is_simple(SQUARE_10)
        assert not GeometryOps.is_simple([(0, 0), (10, 10), (10, 0), (0, 10)])

    def test_buffer_grows_polygon(self):
        ring = GeometryOps.buffer(SQUARE_10, 1.0)
        min_x, min_y, max_x, max_y = GeometryOps.bounding_box(ring)

        assert min_x == pytest.approx(-1.0)
        assert min_y == pytest.approx(-1.0)
        assert max_x == pytest.approx(11.0)
        assert max_y == pytest.approx(11.0)
        assert ring[0] != ring[-1]
