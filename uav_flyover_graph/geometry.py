import math
import random
from dataclasses import dataclass

import numpy as np
from shapely.geometry import LinearRing

TAU = 2 * math.pi
# segments grazing a circle within this many meters only touch it
CONTACT_TOL = 1e-6


@dataclass(frozen=True)
class Point:
    x: float  # meters east of origin
    y: float  # meters north of origin
    z: float = 0.0

    def distance(self, other):
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_xy(self):
        return (self.x, self.y)


def normalize_angle(positive, angle):
    """
    Wrap an angle into [0, 2pi) when positive, otherwise into (-2pi, 0].
    The sign of the result marks which side of a node a tangent leaves from.
    """
    if positive:
        a = angle % TAU
        return 0.0 if a >= TAU else a
    a = math.fmod(angle, TAU)
    if a > 0:
        a -= TAU
    return a


def reverse_polarity(angle):
    return angle - TAU if angle > 0 else angle + TAU


def segment_intersects_circle(a, b, center, radius):
    """
    Perpendicular distance test: True when the closest point of segment a-b
    lies inside the circle by more than CONTACT_TOL, so a tangent touching
    the outline (the endpoint on its own obstacle) does not count.
    """
    p1 = np.array(a.to_xy())
    p2 = np.array(b.to_xy())
    c = np.array(center.to_xy())
    d = p2 - p1
    seg_len_sq = np.dot(d, d)
    if seg_len_sq < 1e-12:
        closest = p1
    else:
        t = np.clip(np.dot(c - p1, d) / seg_len_sq, 0.0, 1.0)
        closest = p1 + t * d
    return np.linalg.norm(c - closest) < radius - CONTACT_TOL


def segment_circle_intersections(a, b, center, radius):
    """Points where segment a-b crosses the circle outline (0, 1 or 2)."""
    p1 = np.array(a.to_xy())
    d = np.array(b.to_xy()) - p1
    f = p1 - np.array(center.to_xy())
    qa = np.dot(d, d)
    if qa < 1e-12 or radius <= 0:
        return []
    qb = 2 * np.dot(f, d)
    qc = np.dot(f, f) - radius ** 2
    disc = qb ** 2 - 4 * qa * qc
    if disc < 0:
        return []
    root = math.sqrt(disc)
    hits = []
    for t in sorted({(-qb - root) / (2 * qa), (-qb + root) / (2 * qa)}):
        if 0.0 <= t <= 1.0:
            x, y = p1 + t * d
            hits.append(Point(float(x), float(y)))
    return hits


def reflex_vertices(points):
    """
    Indices of polygon vertices whose interior angle exceeds pi, i.e. corners
    of the boundary that poke into the flyable area.
    """
    n = len(points)
    ccw = LinearRing([p.to_xy() for p in points]).is_ccw
    reflex = []
    for i in range(n):
        prev, cur, nxt = points[i - 1], points[i], points[(i + 1) % n]
        cross = (cur.x - prev.x) * (nxt.y - cur.y) - (cur.y - prev.y) * (nxt.x - cur.x)
        if (cross < 0) if ccw else (cross > 0):
            reflex.append(i)
    return reflex


def generate_random_polygon(center, avg_radius, irregularity, spikeyness, num_verts):
    """
    Generate a random irregular polygon as a list of (x, y) vertices.
    :param center: (x, y) center of the polygon
    :param avg_radius: Average radius
    :param irregularity: [0, 1] Variance of the angle steps
    :param spikeyness: [0, 1] Variance of the radius
    :param num_verts: Number of vertices
    """
    irregularity = np.clip(irregularity, 0, 1) * 2 * np.pi / num_verts
    spikeyness = np.clip(spikeyness, 0, 1) * avg_radius
    angle_steps = []
    lower = (2 * np.pi / num_verts) - irregularity
    upper = (2 * np.pi / num_verts) + irregularity
    sum_steps = 0
    for _ in range(num_verts):
        tmp = random.uniform(lower, upper)
        angle_steps.append(tmp)
        sum_steps += tmp
    k = sum_steps / (2 * np.pi)
    angle_steps = [x / k for x in angle_steps]
    points = []
    angle = random.uniform(0, 2 * np.pi)
    for i in range(num_verts):
        r_i = np.clip(random.gauss(avg_radius, spikeyness), avg_radius / 2, 2 * avg_radius)
        x = center[0] + r_i * np.cos(angle)
        y = center[1] + r_i * np.sin(angle)
        points.append((float(x), float(y)))
        angle += angle_steps[i]
    return points


def generate_random_obstacles(count, extent, min_radius, max_radius, max_height, attempts=200):
    """
    Scatter non-overlapping circles as (x, y, radius, height) tuples inside
    a square of half-width `extent` centred on the origin.
    """
    circles = []
    tries = 0
    while len(circles) < count and tries < count * attempts:
        tries += 1
        r = random.uniform(min_radius, max_radius)
        x = random.uniform(-extent + r, extent - r)
        y = random.uniform(-extent + r, extent - r)
        if any(math.hypot(x - cx, y - cy) <= r + cr for cx, cy, cr, _ in circles):
            continue
        circles.append((x, y, r, random.uniform(0, max_height)))
    return circles
