import logging
import math

from .geometry import TAU, reflex_vertices, segment_circle_intersections

logger = logging.getLogger(__name__)


def flyzone_edges(points):
    """Consecutive boundary edges, closing the polygon last -> first."""
    n = len(points)
    for i in range(n):
        yield points[i], points[(i + 1) % n]


def flyzone_sentinel_angles(node, flyzones):
    """
    Angles in [0, 2pi) where a flyzone edge crosses the node's circle. A
    sentinel there marks where the ring stops being open sky and runs into
    the boundary.
    """
    angles = []
    if node.radius <= 0:
        return angles
    for points in flyzones:
        for p1, p2 in flyzone_edges(points):
            for hit in segment_circle_intersections(p1, p2, node.origin, node.radius):
                angle = math.atan2(hit.y - node.origin.y, hit.x - node.origin.x) % TAU
                if not any(math.isclose(angle, a, abs_tol=1e-9) for a in angles):
                    angles.append(angle)
    return sorted(angles)


def virtualize_flyzone(points):
    """Centers for the virtual nodes of one flyzone: its reflex corners."""
    corners = [points[i] for i in reflex_vertices(points)]
    logger.debug("Virtualized flyzone into %d corner nodes", len(corners))
    return corners
