import logging
import math
from dataclasses import dataclass
from functools import lru_cache

import pyproj

from .errors import InsufficientBoundary
from .geometry import Point

logger = logging.getLogger(__name__)

_WGS84 = "EPSG:4326"


@dataclass(frozen=True)
class Location:
    lat: float  # radians
    lon: float  # radians
    alt: float = 0.0  # meters

    @classmethod
    def from_radians(cls, lat, lon, alt=0.0):
        return cls(lat, lon, alt)

    @classmethod
    def from_degrees(cls, lat, lon, alt=0.0):
        return cls(math.radians(lat), math.radians(lon), alt)

    def lat_degree(self):
        return math.degrees(self.lat)

    def lon_degree(self):
        return math.degrees(self.lon)


@dataclass(frozen=True)
class Obstacle:
    location: Location
    radius: float  # meters
    height: float  # meters


@lru_cache(maxsize=32)
def _transformer(lat_deg, lon_deg):
    # Azimuthal equidistant plane centred on the origin keeps distances true
    # near the origin, which is all a flight area needs.
    crs = pyproj.CRS.from_proj4(
        f"+proj=aeqd +lat_0={lat_deg} +lon_0={lon_deg} +datum=WGS84 +units=m +no_defs"
    )
    return pyproj.Transformer.from_crs(_WGS84, crs, always_xy=True)


def project(location, origin):
    """Project a geodetic location onto the local plane around `origin`."""
    transformer = _transformer(origin.lat_degree(), origin.lon_degree())
    x, y = transformer.transform(location.lon_degree(), location.lat_degree())
    return Point(float(x), float(y), location.alt)


def unproject(point, origin):
    transformer = _transformer(origin.lat_degree(), origin.lon_degree())
    lon, lat = transformer.transform(point.x, point.y, direction="INVERSE")
    return Location.from_degrees(float(lat), float(lon), point.z)


def find_origin(flyzones):
    """
    Pick the projection origin from the flyzone boundaries: the minimum
    latitude, and the minimum longitude unless the longitude span is wider
    than pi (the boundary wraps the antimeridian), then the maximum.
    """
    if len(flyzones) == 0:
        raise InsufficientBoundary("Require at least one flyzone")
    min_lat = math.inf
    min_lon = math.inf
    max_lon = -math.inf
    for flyzone in flyzones:
        if len(flyzone) < 3:
            raise InsufficientBoundary("Require at least 3 points to construct fly zone.")
        for location in flyzone:
            min_lat = min(min_lat, location.lat)
            min_lon = min(min_lon, location.lon)
            max_lon = max(max_lon, location.lon)

    lon = max_lon if max_lon - min_lon > math.pi else min_lon
    origin = Location.from_radians(min_lat, lon, 0.0)
    logger.info("Found origin: %s, %s", origin.lat_degree(), origin.lon_degree())
    return origin
