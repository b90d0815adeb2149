"""
Geodetic to planar projections.

Two interchangeable strategies are provided: spherical Web Mercator for
absolute positioning and a local equirectangular approximation around an
origin for small, site-relative geometry.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from massing.core import EDITOR_CONSTANTS, ProjectionType


class IGeodeticProjection(ABC):
    """Abstract projection from (lat, lon) degrees to planar meters"""

    @abstractmethod
    def project(
        self,
        lat: float,
        lon: float,
        origin_lat: Optional[float] = None,
        origin_lon: Optional[float] = None
    ) -> Tuple[float, float]:
        """
        Project one geodetic coordinate

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            origin_lat: Latitude of the local origin in degrees
            origin_lon: Longitude of the local origin in degrees

        Returns:
            (x, y) in meters
        """
        pass


class WebMercatorProjection(IGeodeticProjection):
    """Spherical Web Mercator: x = lambda * R, y = R * ln(tan(pi/4 + phi/2))"""

    def __init__(self, radius: float = EDITOR_CONSTANTS.EARTH_RADIUS_M):
        self._radius = radius

    def project(self, lat, lon, origin_lat=None, origin_lon=None):
        x = math.radians(lon) * self._radius
        y = math.log(math.tan(math.pi / 4 + math.radians(lat) / 2)) * self._radius
        return (x, y)


class EquirectangularProjection(IGeodeticProjection):
    """
    Local equirectangular approximation relative to an origin:
    x = dlon * R * cos(origin_lat), y = dlat * R
    """

    def __init__(self, radius: float = EDITOR_CONSTANTS.EARTH_RADIUS_M):
        self._radius = radius

    def project(self, lat, lon, origin_lat=None, origin_lon=None):
        if origin_lat is None or origin_lon is None:
            raise ValueError("Equirectangular projection requires an origin latitude and longitude")
        d_lat = math.radians(lat - origin_lat)
        d_lon = math.radians(lon - origin_lon)
        x = d_lon * self._radius * math.cos(math.radians(origin_lat))
        y = d_lat * self._radius
        return (x, y)


class ProjectionFactory:
    """Factory returning a shared projection instance per ProjectionType"""

    _PROJECTIONS: Dict[ProjectionType, IGeodeticProjection] = {
        ProjectionType.WEB_MERCATOR: WebMercatorProjection(),
        ProjectionType.EQUIRECTANGULAR: EquirectangularProjection(),
    }

    @classmethod
    def get_projection(cls, projection_type: ProjectionType) -> IGeodeticProjection:
        """
        Get the projection strategy for a projection type

        Raises:
            ValueError: If the projection type is not supported
        """
        projection = cls._PROJECTIONS.get(projection_type)
        if projection is None:
            raise ValueError(
                f"Unsupported projection '{projection_type}'. "
                f"Supported: {', '.join(p.value for p in ProjectionType)}"
            )
        return projection
