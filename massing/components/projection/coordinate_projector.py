"""Scene centering, display/world translation, grid quantization and geodetic projection"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from massing.core import ProjectionType
from massing.components.geometry import Point2D
from massing.components.projection.geodetic import ProjectionFactory
from massing.components.projection.grid_spec import GridSpec
from massing.models.building import Building, Ring

logger = logging.getLogger(__name__)


class CoordinateProjector:
    """
    Scene centering and the geodetic -> planar -> centered -> grid pipeline.

    World coordinates are the planar coordinates buildings are stored in.
    Display coordinates are world coordinates minus the scene center, which
    keeps rendering and grid math near the origin.
    """

    def __init__(self, grid: Optional[GridSpec] = None,
                 projection_type: ProjectionType = ProjectionType.EQUIRECTANGULAR):
        """
        Initialize projector

        Args:
            grid: Export grid specification (default: 2000 units / 1000 divisions)
            projection_type: Default geodetic projection
        """
        self._grid = grid or GridSpec()
        self._projection_type = projection_type

    @property
    def grid(self) -> GridSpec:
        return self._grid

    @property
    def cell_size(self) -> float:
        return self._grid.cell_size

    @staticmethod
    def scene_center(buildings: Sequence[Building], roads: Iterable[Ring] = ()) -> Tuple[float, float]:
        """
        Arithmetic mean over every building vertex and every road vertex

        Args:
            buildings: Building collection
            roads: Road polylines

        Returns:
            (cx, cy); (0.0, 0.0) for an empty scene
        """
        points: List[Tuple[float, float]] = [v for b in buildings for v in b.vertices]
        points.extend(p for road in roads for p in road)
        if not points:
            return (0.0, 0.0)
        mean = np.asarray(points, dtype=float).mean(axis=0)
        return (float(mean[0]), float(mean[1]))

    @staticmethod
    def to_display(point: Point2D, center: Tuple[float, float]) -> Point2D:
        return Point2D(point.x - center[0], point.y - center[1])

    @staticmethod
    def to_world(point: Point2D, center: Tuple[float, float]) -> Point2D:
        return Point2D(point.x + center[0], point.y + center[1])

    @staticmethod
    def ring_to_world(ring: Sequence[Sequence[float]], center: Tuple[float, float]) -> Ring:
        return tuple((float(x) + center[0], float(y) + center[1]) for x, y in ring)

    def to_grid_cell(self, point: Sequence[float] | Point2D, center: Tuple[float, float],
                     cell_size: Optional[float] = None) -> Tuple[int, int]:
        """
        Quantize a world point: round((point - center) / cell_size)

        Halves round towards +infinity.

        Args:
            point: World point
            center: Scene center
            cell_size: Override of the grid cell size

        Returns:
            (gx, gy) integer grid coordinate
        """
        if isinstance(point, Point2D):
            point = point.as_tuple()
        cells = self.grid_ring([point], center, cell_size)
        return cells[0]

    def grid_ring(self, ring: Sequence[Sequence[float]], center: Tuple[float, float],
                  cell_size: Optional[float] = None) -> List[Tuple[int, int]]:
        """Quantize every vertex of a ring to grid coordinates"""
        if len(ring) == 0:
            return []
        size = cell_size if cell_size is not None else self.cell_size
        coords = np.asarray([(p[0], p[1]) for p in ring], dtype=float)
        cells = np.floor((coords - np.asarray(center, dtype=float)) / size + 0.5).astype(int)
        return [(int(gx), int(gy)) for gx, gy in cells]

    def geodetic_to_planar(
        self,
        lat: float,
        lon: float,
        origin_lat: Optional[float] = None,
        origin_lon: Optional[float] = None,
        projection_type: Optional[ProjectionType] = None
    ) -> Tuple[float, float]:
        """
        Project a geodetic coordinate to planar meters

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            origin_lat: Origin latitude (equirectangular only)
            origin_lon: Origin longitude (equirectangular only)
            projection_type: Override of the default projection

        Returns:
            (x, y) in meters
        """
        projection = ProjectionFactory.get_projection(projection_type or self._projection_type)
        return projection.project(lat, lon, origin_lat, origin_lon)
