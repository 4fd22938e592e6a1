import math

import pytest

from uav_flyover_graph.geometry import (
    TAU,
    Point,
    generate_random_obstacles,
    generate_random_polygon,
    normalize_angle,
    reflex_vertices,
    reverse_polarity,
    segment_circle_intersections,
    segment_intersects_circle,
)


class TestAngles:
    @pytest.mark.parametrize(
        "angle,expected",
        [(-math.pi / 2, 3 * math.pi / 2), (5 * math.pi / 2, math.pi / 2), (TAU, 0.0), (0.0, 0.0)],
    )
    def test_positive_range(self, angle, expected):
        result = normalize_angle(True, angle)
        assert result == pytest.approx(expected, abs=1e-12)
        assert 0 <= result < TAU

    @pytest.mark.parametrize(
        "angle,expected",
        [(math.pi / 2, -3 * math.pi / 2), (-5 * math.pi / 2, -math.pi / 2), (0.0, 0.0)],
    )
    def test_negative_range(self, angle, expected):
        result = normalize_angle(False, angle)
        assert result == pytest.approx(expected, abs=1e-12)
        assert -TAU < result <= 0

    def test_reverse_polarity_flips_sign_family(self):
        assert reverse_polarity(math.pi / 2) == pytest.approx(-3 * math.pi / 2)
        assert reverse_polarity(-math.pi / 2) == pytest.approx(3 * math.pi / 2)

    def test_reverse_polarity_keeps_direction(self):
        for angle in (0.3, 2.0, -1.1, -4.0):
            flipped = reverse_polarity(angle)
            assert math.cos(flipped) == pytest.approx(math.cos(angle))
            assert math.sin(flipped) == pytest.approx(math.sin(angle))


class TestSegmentCircle:
    def test_segment_through_center(self):
        assert segment_intersects_circle(Point(-10, 0), Point(10, 0), Point(0, 0), 1)

    def test_tangent_segment_does_not_intersect(self):
        assert not segment_intersects_circle(Point(-10, 1), Point(10, 1), Point(0, 0), 1)

    def test_segment_stopping_short(self):
        assert not segment_intersects_circle(Point(-10, 0), Point(-2, 0), Point(0, 0), 1)

    def test_endpoint_inside(self):
        assert segment_intersects_circle(Point(-10, 0), Point(0.5, 0), Point(0, 0), 1)

    def test_crossings_through_circle(self):
        hits = segment_circle_intersections(Point(-2, 0), Point(2, 0), Point(0, 0), 1)
        assert [(h.x, h.y) for h in hits] == [
            (pytest.approx(-1.0), pytest.approx(0.0)),
            (pytest.approx(1.0), pytest.approx(0.0)),
        ]

    def test_single_crossing_from_inside(self):
        hits = segment_circle_intersections(Point(0, 0), Point(2, 0), Point(0, 0), 1)
        assert len(hits) == 1
        assert hits[0].x == pytest.approx(1.0)

    def test_no_crossing(self):
        assert segment_circle_intersections(Point(-2, 5), Point(2, 5), Point(0, 0), 1) == []


class TestPolygons:
    L_SHAPE = [Point(-5, -5), Point(5, -5), Point(5, 0), Point(0, 0), Point(0, 5), Point(-5, 5)]

    def test_reflex_corner_counter_clockwise(self):
        assert reflex_vertices(self.L_SHAPE) == [3]

    def test_reflex_corner_clockwise(self):
        reversed_shape = self.L_SHAPE[::-1]
        assert [reversed_shape[i] for i in reflex_vertices(reversed_shape)] == [Point(0, 0)]

    def test_convex_polygon_has_no_reflex_corner(self):
        square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        assert reflex_vertices(square) == []

    def test_random_polygon_vertex_count(self):
        points = generate_random_polygon((0, 0), 100, 0.3, 0.3, 7)
        assert len(points) == 7
        assert all(50 <= math.hypot(x, y) <= 200 for x, y in points)

    def test_random_obstacles_do_not_overlap(self):
        circles = generate_random_obstacles(6, 200, 5, 20, 40)
        for i, (x1, y1, r1, _) in enumerate(circles):
            for x2, y2, r2, _ in circles[i + 1:]:
                assert math.hypot(x1 - x2, y1 - y2) > r1 + r2
