"""
Grid Coordinates Export

JSON document with the site boundary, its dimensions, grid information and
every exported floor with its corners in grid coordinates.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from massing.components.export.base_exporter import BaseExporter
from massing.components.export.floor_groups import FloorGrouper
from massing.components.projection import CoordinateProjector
from massing.models.building import Building, Ring
from massing.models.export_records import FloorExport

logger = logging.getLogger(__name__)


class GridExporter(BaseExporter):
    """Grid-coordinate JSON document: site boundary, stacked floors, metadata"""

    export_name = "grid coordinates"
    COORDINATE_SYSTEM = "Grid"
    NOTE = "Z coordinates represent cumulative heights for stacked floors"

    def __init__(self, projector: CoordinateProjector):
        super().__init__(projector)
        self._grouper = FloorGrouper(projector)

    def export(self, buildings: Sequence[Building], roads: Sequence[Ring] = (),
               timestamp: Optional[datetime] = None) -> Dict[str, Any]:
        floors = self.floors(buildings, roads)
        _, site = self._site(buildings)
        center = self._projector.scene_center(buildings, roads)

        boundary = [{"x": gx, "y": gy, "z": 0} for gx, gy in self._projector.grid_ring(site.vertices, center)]
        xs = [p["x"] for p in boundary]
        ys = [p["y"] for p in boundary]
        width = max(xs) - min(xs)
        height = max(ys) - min(ys)

        moment = timestamp or datetime.now(timezone.utc)
        document = {
            "site": {
                "boundary": boundary,
                "dimensions": {"width": width, "height": height, "area": width * height},
                "gridInfo": self._projector.grid.to_dict(),
            },
            "buildings": [floor.to_dict() for floor in floors],
            "metadata": {
                "coordinateSystem": self.COORDINATE_SYSTEM,
                "timestamp": moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                "note": self.NOTE,
            },
        }
        logger.info(f"Grid export produced {len(floors)} floors")
        return document

    def floors(self, buildings: Sequence[Building], roads: Sequence[Ring] = ()) -> List[FloorExport]:
        """Flattened floor records of every group, in group order"""
        _, site = self._site(buildings)
        center = self._projector.scene_center(buildings, roads)
        return [floor for group in self._grouper.group(buildings, site, center) for floor in group]
