import logging
from dataclasses import dataclass

from shapely.geometry import LinearRing, LineString, Polygon
from shapely.geometry import Point as ShapelyPoint
from shapely.prepared import prep

from .geometry import segment_intersects_circle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathValidity:
    """
    Outcome of checking a straight segment: either Invalid (blocked by the
    flyzone boundary) or Flyover with the altitude needed to clear every
    obstacle the segment crosses. A threshold of 0 is an unobstructed path.
    """

    valid: bool
    threshold: float = 0.0

    @classmethod
    def invalid(cls):
        return cls(False)

    @classmethod
    def flyover(cls, threshold):
        return cls(True, threshold)

    def __bool__(self):
        return self.valid


@dataclass(frozen=True)
class ProjectedObstacle:
    center: object  # geometry.Point
    radius: float
    height: float

    @property
    def bounds(self):
        c = self.center
        return (c.x - self.radius, c.y - self.radius, c.x + self.radius, c.y + self.radius)


class PathValidator:
    def __init__(self, flyzones, obstacles, obstacle_policy="flyover"):
        """
        :param flyzones: projected boundary polygons, each a list of geometry.Point
        :param obstacles: list of ProjectedObstacle (raw footprint, no buffer)
        :param obstacle_policy: "flyover" raises the threshold on an obstacle
            hit, "block" makes the hit invalidate the path
        """
        self.obstacles = list(obstacles)
        self.obstacle_policy = obstacle_policy
        self.rings = []
        self.areas = []
        for points in flyzones:
            coords = [p.to_xy() for p in points]
            self.rings.append(prep(LinearRing(coords)))
            self.areas.append(prep(Polygon(coords)))

    def crosses_boundary(self, line):
        return any(ring.intersects(line) for ring in self.rings)

    def inside_flyzone(self, point):
        return any(area.contains(point) for area in self.areas)

    def validate(self, a, b):
        logger.debug("validating path: %s, %s", a, b)
        line = LineString([a.to_xy(), b.to_xy()])
        if self.crosses_boundary(line) or not self.inside_flyzone(ShapelyPoint(a.to_xy())):
            logger.debug("false due to flyzone")
            return PathValidity.invalid()

        lx_min, lx_max = min(a.x, b.x), max(a.x, b.x)
        ly_min, ly_max = min(a.y, b.y), max(a.y, b.y)
        max_height = 0.0
        for obstacle in self.obstacles:
            ox_min, oy_min, ox_max, oy_max = obstacle.bounds
            if lx_max < ox_min or lx_min > ox_max or ly_max < oy_min or ly_min > oy_max:
                continue
            if not segment_intersects_circle(a, b, obstacle.center, obstacle.radius):
                continue
            logger.debug("found intersection at height %s with obstacle %s", obstacle.height, obstacle)
            if self.obstacle_policy == "block":
                return PathValidity.invalid()
            max_height = max(max_height, obstacle.height)

        logger.debug("path valid with threshold %s", max_height)
        return PathValidity.flyover(max_height)
