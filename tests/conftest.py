"""
Pytest configuration and fixtures for the tangent graph tests.

Fixtures provide common test data:
- A geodetic center and a helper placing locations in meters around it
- Square and L-shaped flyzones
- Planar nodes and validators for the geometry-only tests
"""

import pytest

from uav_flyover_graph.geometry import Point
from uav_flyover_graph.location import Location, Obstacle, unproject
from uav_flyover_graph.node import Node
from uav_flyover_graph.visibility import PathValidator


@pytest.fixture
def center():
    return Location.from_degrees(32.88, -117.23)


@pytest.fixture
def local(center):
    """Location `x` meters east and `y` meters north of the center."""
    def _local(x, y, alt=0.0):
        return unproject(Point(x, y, alt), center)
    return _local


@pytest.fixture
def square_flyzone(local):
    """1 km square flyzone around the center."""
    return [local(-500, -500), local(500, -500), local(500, 500), local(-500, 500)]


@pytest.fixture
def l_flyzone(local):
    """L-shaped flyzone with a single concave corner at the center."""
    return [
        local(-500, -500),
        local(500, -500),
        local(500, 0),
        local(0, 0),
        local(0, 500),
        local(-500, 500),
    ]


@pytest.fixture
def three_obstacles(local):
    """Two obstacles on the x axis with a tall one between them."""
    return [
        Obstacle(local(-200, 0), 20, 30),
        Obstacle(local(200, 0), 20, 10),
        Obstacle(local(0, 0), 15, 50),
    ]


@pytest.fixture
def planar_square():
    return [Point(-100, -100), Point(100, -100), Point(100, 100), Point(-100, 100)]


@pytest.fixture
def open_validator(planar_square):
    """Validator with a wide flyzone and no obstacles."""
    return PathValidator([planar_square], [])


@pytest.fixture
def make_node():
    def _make(x, y, radius, height=0.0, index=0):
        return Node(index=index, origin=Point(x, y, height), radius=radius, height=height)
    return _make
