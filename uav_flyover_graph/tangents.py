import logging
import math
from math import pi as PI

from .errors import InvalidGeometry
from .geometry import TAU, normalize_angle

logger = logging.getLogger(__name__)

EPS = 1e-9


def _law_of_cosines(r_near, r_far, dist):
    """Angle at the near center between the center line and a circle crossing."""
    if r_near <= 0:
        return None
    c = (r_near ** 2 + dist ** 2 - r_far ** 2) / (2 * r_near * dist)
    if c < -1 - EPS or c > 1 + EPS:
        return None
    return math.acos(min(1.0, max(-1.0, c)))


def tangent_candidates(a, b):
    """
    Enumerate tangent angle pairs between the circles of nodes a and b.

    Returns (candidates, sentinels). Each candidate is (alpha, beta): alpha is
    the angle on a, beta the angle on b. Outer tangents come first, then the
    inner ones when the circles are disjoint. When inner tangents do not
    exist, sentinels is a list of up to four (alpha, beta) pairs sitting where
    the circles meet; otherwise it is None.

    One tangent of each family is normalized into [0, 2pi) and the other into
    (-2pi, 0] so that the two sides of a node stay distinguishable.
    """
    c1, c2 = a.origin, b.origin
    r1, r2 = a.radius, b.radius
    dist = c1.distance(c2)
    if dist <= EPS:
        raise InvalidGeometry(
            f"Nodes {a.index} and {b.index} share the center ({c1.x}, {c1.y})"
        )

    # theta1 and theta2 represent the normalized center line angle,
    # theta1 in [0, 2pi) from a toward b and theta2 pointing back
    theta = math.atan2(c2.y - c1.y, c2.x - c1.x)
    theta1 = theta if theta >= 0 else theta + TAU
    theta2 = theta1 + PI
    logger.debug(
        "x1:%s, y1:%s, r1:%s, x2:%s, y2:%s, r2:%s", c1.x, c1.y, r1, c2.x, c2.y, r2
    )

    if abs(r1 - r2) > dist + EPS:
        logger.debug("node %s nests inside node %s, no tangent", a.index, b.index)
        return [], []

    # gamma2 is the angle between the center line and the outer tangents;
    # the formula assumes r1 >= r2, so take the complement otherwise
    gamma2 = math.acos(min(1.0, abs(r1 - r2) / dist))
    if r2 > r1:
        gamma2 = PI - gamma2

    candidates = [
        (
            normalize_angle(True, theta1 - gamma2),
            normalize_angle(True, theta2 + PI - gamma2),
        ),
        (
            normalize_angle(False, theta1 - TAU + gamma2),
            normalize_angle(False, theta2 - 3 * PI + gamma2),
        ),
    ]

    sentinels = None
    if r1 != 0 and r2 != 0 and dist > r1 + r2:
        gamma1 = math.acos(abs(r1 + r2) / dist)
        logger.debug("gamma1: %s, gamma2: %s", math.degrees(gamma1), math.degrees(gamma2))
        candidates += [
            # inner left tangent
            (
                normalize_angle(True, theta1 - gamma1),
                normalize_angle(False, theta2 - TAU - gamma1),
            ),
            # inner right tangent
            (
                normalize_angle(False, theta1 - TAU + gamma1),
                normalize_angle(True, theta2 + gamma1),
            ),
        ]
    else:
        sentinels = []
        theta_s = _law_of_cosines(r1, r2, dist)
        phi_s = _law_of_cosines(r2, r1, dist)
        # every angle on a zero-radius node lands on its center
        if r2 == 0 and theta_s is not None:
            phi_s = 0.0
        if r1 == 0 and phi_s is not None:
            theta_s = 0.0
        if theta_s is not None and phi_s is not None:
            # where the circles meet, reflected into both sign families
            sentinels = [
                (theta1 + theta_s, theta1 + PI - phi_s),
                (theta1 - theta_s, theta1 + PI + phi_s),
                (theta1 - TAU + theta_s, theta1 - PI + phi_s),
                (theta1 + TAU - theta_s, theta1 - PI - phi_s),
            ]
            sentinels = [(_wrap(s_a), _wrap(s_b)) for s_a, s_b in sentinels]
    return candidates, sentinels


def _wrap(angle):
    # keep sentinel angles inside (-2pi, 2pi)
    if angle >= TAU:
        return angle - TAU
    if angle <= -TAU:
        return angle + TAU
    return angle


def find_path(a, b, validator):
    """
    Generate all valid tangent paths between two nodes.

    Returns (paths, sentinels) where each path is
    (alpha, beta, distance, threshold).
    """
    candidates, sentinels = tangent_candidates(a, b)
    paths = []
    for alpha, beta in candidates:
        p1 = a.to_point(alpha)
        p2 = b.to_point(beta)
        logger.debug("angles %s -> %s", math.degrees(alpha), math.degrees(beta))
        validity = validator.validate(p1, p2)
        if validity:
            paths.append((alpha, beta, p1.distance(p2), validity.threshold))
        else:
            logger.debug("This path is Invalid.")
    return paths, sentinels
