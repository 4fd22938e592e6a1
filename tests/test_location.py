import math

import pytest

from uav_flyover_graph.errors import ConfigurationError, InsufficientBoundary
from uav_flyover_graph.geometry import Point
from uav_flyover_graph.location import Location, find_origin, project, unproject


class TestFindOrigin:
    def test_min_latitude_and_longitude(self):
        flyzone = [
            Location.from_degrees(10, 20),
            Location.from_degrees(11, 21),
            Location.from_degrees(10.5, 22),
        ]
        origin = find_origin([flyzone])
        assert origin.lat_degree() == pytest.approx(10)
        assert origin.lon_degree() == pytest.approx(20)
        assert origin.alt == 0

    def test_spans_every_flyzone(self):
        first = [Location.from_degrees(10, 20), Location.from_degrees(11, 21), Location.from_degrees(10.5, 22)]
        second = [Location.from_degrees(9, 23), Location.from_degrees(9.5, 24), Location.from_degrees(9, 25)]
        origin = find_origin([first, second])
        assert origin.lat_degree() == pytest.approx(9)
        assert origin.lon_degree() == pytest.approx(20)

    def test_antimeridian_uses_max_longitude(self):
        flyzone = [
            Location.from_degrees(-10, 179),
            Location.from_degrees(-11, -179),
            Location.from_degrees(-10.5, 178),
        ]
        origin = find_origin([flyzone])
        assert origin.lat_degree() == pytest.approx(-11)
        assert origin.lon_degree() == pytest.approx(179)

    def test_requires_a_flyzone(self):
        with pytest.raises(InsufficientBoundary):
            find_origin([])

    def test_requires_three_points(self):
        flyzone = [Location.from_degrees(10, 20), Location.from_degrees(11, 21)]
        with pytest.raises(ConfigurationError):
            find_origin([flyzone])


class TestProjection:
    def test_origin_projects_to_zero(self, center):
        p = project(center, center)
        assert p.x == pytest.approx(0, abs=1e-6)
        assert p.y == pytest.approx(0, abs=1e-6)

    def test_north_offset_in_meters(self, center):
        north = Location.from_degrees(center.lat_degree() + 0.01, center.lon_degree(), 12.0)
        p = project(north, center)
        assert p.x == pytest.approx(0, abs=1e-6)
        assert p.y == pytest.approx(1109, rel=0.01)
        assert p.z == 12.0

    def test_unproject_round_trip(self, center):
        location = unproject(Point(250, -120, 5.0), center)
        p = project(location, center)
        assert (p.x, p.y, p.z) == (pytest.approx(250), pytest.approx(-120), 5.0)

    def test_distances_preserved_near_origin(self, local, center):
        a = project(local(-200, 0), center)
        b = project(local(200, 0), center)
        assert a.distance(b) == pytest.approx(400, rel=1e-6)

    def test_degree_accessors(self):
        location = Location.from_radians(math.pi / 4, -math.pi / 2)
        assert location.lat_degree() == pytest.approx(45)
        assert location.lon_degree() == pytest.approx(-90)
