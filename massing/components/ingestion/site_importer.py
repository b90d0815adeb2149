"""
Site import

Parses the geodetic payload produced by the map-data collaborator into
planar buildings and roads. Parsing is all-or-nothing: the first
structural problem raises ImportPayloadError and nothing is returned.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from massing.core import EDITOR_CONSTANTS, GeometryError, ImportPayloadError, ProjectionType
from massing.components.geometry import GeometryOps, PolygonParserFactory
from massing.components.ingestion.imported_site import ImportedSite
from massing.components.projection import CoordinateProjector
from massing.models.building import Building, Ring

logger = logging.getLogger(__name__)


class SiteImporter:
    """Turns an import payload into an ImportedSite"""

    BOUNDARY = "boundary"
    BUILDINGS = "buildings"
    ROADS = "roads"
    BUFFER_DISTANCE = "bufferDistance"
    PROJECTION = "projection"
    ORIGIN = "origin"

    def __init__(self, projector: Optional[CoordinateProjector] = None,
                 default_projection: ProjectionType = ProjectionType.WEB_MERCATOR):
        self._projector = projector or CoordinateProjector()
        self._default_projection = default_projection

    def parse(self, payload: Any) -> ImportedSite:
        """
        Parse an import payload

        Args:
            payload: JSON string or already decoded dict

        Returns:
            ImportedSite with the site boundary first

        Raises:
            ImportPayloadError: If the payload is malformed
        """
        data = self._decode(payload)

        projection = self._projection(data.get(self.PROJECTION))
        boundary_lonlat = self._coordinates(data.get(self.BOUNDARY), self.BOUNDARY, min_points=3)
        origin = self._origin(data.get(self.ORIGIN), boundary_lonlat)
        buffer_distance = self._buffer_distance(data.get(self.BUFFER_DISTANCE))

        def project(points: List[Tuple[float, float]]) -> Ring:
            return tuple(
                self._projector.geodetic_to_planar(lat, lon, origin[0], origin[1], projection)
                for lon, lat in points
            )

        boundary = GeometryOps.dedupe_consecutive(project(boundary_lonlat))
        if len(boundary) < 3:
            raise ImportPayloadError(self.BOUNDARY, "fewer than 3 distinct points after projection")

        buffer = self._buffer(boundary, buffer_distance, projection, origin[0])
        buildings = [Building(vertices=boundary, height=0.0, is_main=True, buffer=buffer)]
        buildings.extend(self._buildings(data.get(self.BUILDINGS, []), project))
        roads = self._roads(data.get(self.ROADS, []), project)

        lats = [lat for _, lat in boundary_lonlat]
        lons = [lon for lon, _ in boundary_lonlat]
        location = {"latitude": sum(lats) / len(lats), "longitude": sum(lons) / len(lons)}

        logger.info(
            f"Parsed site import: {len(buildings) - 1} buildings, {len(roads)} roads, "
            f"projection {projection.value}, buffer {buffer_distance} m"
        )
        return ImportedSite(buildings=tuple(buildings), roads=tuple(roads), location=location)

    def _decode(self, payload: Any) -> Dict[str, Any]:
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise ImportPayloadError("payload", f"not valid JSON: {e.msg} at position {e.pos}")
        if not isinstance(payload, dict):
            raise ImportPayloadError("payload", f"expected an object, got {type(payload).__name__}")
        if self.BOUNDARY not in payload:
            raise ImportPayloadError(self.BOUNDARY, "missing site boundary")
        return payload

    def _projection(self, value: Any) -> ProjectionType:
        if value is None:
            return self._default_projection
        try:
            return ProjectionType(value)
        except ValueError:
            supported = ", ".join(p.value for p in ProjectionType)
            raise ImportPayloadError(self.PROJECTION, f"unsupported projection '{value}', expected one of {supported}")

    def _coordinates(self, value: Any, field: str, min_points: int) -> List[Tuple[float, float]]:
        """Parse a (lon, lat) coordinate list and check its ranges"""
        if not isinstance(value, list):
            raise ImportPayloadError(field, f"expected a list of coordinates, got {type(value).__name__}")
        if len(value) < min_points:
            raise ImportPayloadError(field, f"expected at least {min_points} points, got {len(value)}")
        try:
            coords = PolygonParserFactory.parse(value, field)
        except ValueError as e:
            raise ImportPayloadError(field, str(e))

        for i, (lon, lat) in enumerate(coords):
            if not (math.isfinite(lon) and math.isfinite(lat)):
                raise ImportPayloadError(f"{field}[{i}]", "coordinates must be finite")
            if not -90.0 < lat < 90.0 or not -180.0 <= lon <= 180.0:
                raise ImportPayloadError(f"{field}[{i}]", f"coordinate ({lon}, {lat}) is not a valid [lon, lat] pair")
        return coords

    def _origin(self, value: Any, boundary: List[Tuple[float, float]]) -> Tuple[float, float]:
        """Origin as (lat, lon); defaults to the first boundary point"""
        if value is None:
            lon, lat = boundary[0]
            return (lat, lon)
        if not isinstance(value, dict) or "lat" not in value or "lon" not in value:
            raise ImportPayloadError(self.ORIGIN, "expected an object with 'lat' and 'lon'")
        try:
            return (float(value["lat"]), float(value["lon"]))
        except (TypeError, ValueError):
            raise ImportPayloadError(self.ORIGIN, f"invalid origin values: {value}")

    def _buffer_distance(self, value: Any) -> float:
        if value is None:
            return EDITOR_CONSTANTS.DEFAULT_BUFFER_DISTANCE_M
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ImportPayloadError(self.BUFFER_DISTANCE, f"expected a non-negative number, got {value!r}")
        return float(value)

    def _buffer(self, boundary: Ring, distance: float, projection: ProjectionType,
                origin_lat: float) -> Optional[Ring]:
        if distance == 0:
            return None
        if projection == ProjectionType.WEB_MERCATOR:
            # Mercator stretches ground meters by 1 / cos(lat)
            distance = distance / math.cos(math.radians(origin_lat))
        try:
            return GeometryOps.buffer(boundary, distance)
        except GeometryError as e:
            raise ImportPayloadError(self.BUFFER_DISTANCE, str(e))

    def _buildings(self, value: Any, project) -> List[Building]:
        if not isinstance(value, list):
            raise ImportPayloadError(self.BUILDINGS, f"expected a list, got {type(value).__name__}")

        buildings = []
        for i, entry in enumerate(value):
            field = f"{self.BUILDINGS}[{i}]"
            if not isinstance(entry, dict) or "vertices" not in entry:
                raise ImportPayloadError(field, "expected an object with 'vertices'")

            height = entry.get("height", EDITOR_CONSTANTS.DEFAULT_IMPORTED_HEIGHT)
            if isinstance(height, bool) or not isinstance(height, (int, float)) \
                    or not math.isfinite(height) or height <= 0:
                raise ImportPayloadError(f"{field}.height", f"expected a positive number, got {height!r}")

            vertices = entry["vertices"]
            if not isinstance(vertices, list):
                raise ImportPayloadError(f"{field}.vertices", f"expected a list, got {type(vertices).__name__}")
            if len(vertices) < 3:
                logger.warning(f"Skipping {field}: fewer than 3 points")
                continue
            ring = GeometryOps.dedupe_consecutive(project(self._coordinates(vertices, f"{field}.vertices", 3)))
            if len(ring) < 3:
                logger.warning(f"Skipping {field}: fewer than 3 distinct points")
                continue
            buildings.append(Building(vertices=ring, height=float(height)))
        return buildings

    def _roads(self, value: Any, project) -> List[Ring]:
        if not isinstance(value, list):
            raise ImportPayloadError(self.ROADS, f"expected a list, got {type(value).__name__}")

        roads = []
        for i, entry in enumerate(value):
            field = f"{self.ROADS}[{i}]"
            if not isinstance(entry, list):
                raise ImportPayloadError(field, f"expected a list of coordinates, got {type(entry).__name__}")
            if len(entry) < 2:
                logger.warning(f"Skipping {field}: fewer than 2 points")
                continue
            coords = self._coordinates(entry, field, 2)
            if len(coords) > 2 and coords[0] == coords[-1]:
                logger.debug(f"Skipping {field}: closed loop")
                continue
            roads.append(project(coords))
        return roads
