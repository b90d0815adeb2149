"""
Zone/surface export

Turns every floor of every stack into a thermal-zone style description:
a floor surface from the base corners, a ceiling from the top corners, and
one wall per footprint edge.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from massing.core import EDITOR_CONSTANTS
from massing.components.export.base_exporter import BaseExporter
from massing.components.export.floor_groups import FloorGrouper
from massing.models.building import Building, Ring
from massing.models.export_records import FloorExport, GridCorner

logger = logging.getLogger(__name__)


def format_coordinates(corner: GridCorner, decimals: int = EDITOR_CONSTANTS.COORDINATE_DECIMALS) -> str:
    """Render a corner as "(x, y, z)" with fixed decimals"""
    return f"({corner.x:.{decimals}f}, {corner.y:.{decimals}f}, {corner.z:.{decimals}f})"


class ZoneExporter(BaseExporter):
    """Per-building zones with floor, ceiling and wall surfaces"""

    export_name = "zones"

    def __init__(self, projector):
        super().__init__(projector)
        self._grouper = FloorGrouper(projector)

    def export(self, buildings: Sequence[Building], roads: Sequence[Ring] = (),
               location: Optional[Dict[str, float]] = None) -> Dict[str, Any]:
        _, site = self._site(buildings)
        center = self._projector.scene_center(buildings, roads)
        groups = self._grouper.group(buildings, site, center)

        document: Dict[str, Any] = {}
        if location is not None:
            document["location"] = location
        document["buildings"] = [
            {
                "buildingName": f"Building {b + 1}",
                "zones": [self._zone(b, f, floor) for f, floor in enumerate(group)],
            }
            for b, group in enumerate(groups)
        ]
        logger.info(f"Zone export produced {len(groups)} buildings")
        return document

    def _zone(self, building_number: int, floor_number: int, floor: FloorExport) -> Dict[str, Any]:
        base = floor.base_corners
        top = floor.top_corners
        return {
            "zoneName": f"Building {building_number + 1} Zone {floor_number + 1}",
            "floorName": f"Building {building_number + 1} - Floor {floor_number + 1}",
            "floorNumber": floor_number + 1,
            "floorLevel": floor.floor_level,
            "floorHeight": floor.height,
            "surfaces": {
                "floor": self._surface("Floor", "Floor_Vertex", base),
                "ceiling": self._surface("Ceiling", "Ceiling_Vertex", top),
                "walls": self._walls(base, top),
            },
        }

    @staticmethod
    def _surface(name: str, vertex_prefix: str, corners: List[GridCorner]) -> Dict[str, Any]:
        return {
            "surfaceName": name,
            "vertices": [
                {"name": f"{vertex_prefix}_{i + 1}", "coordinates": format_coordinates(c)}
                for i, c in enumerate(corners)
            ],
        }

    @staticmethod
    def _walls(base: List[GridCorner], top: List[GridCorner]) -> List[Dict[str, Any]]:
        walls = []
        count = len(base)
        for i in range(count):
            j = (i + 1) % count
            # base(i), base(i+1), top(i+1), top(i)
            ring = [base[i], base[j], top[j], top[i]]
            walls.append({
                "surfaceName": f"Wall {i + 1}",
                "vertices": [
                    {"name": f"Wall_{i + 1}_Vertex_{k + 1}", "coordinates": format_coordinates(c)}
                    for k, c in enumerate(ring)
                ],
            })
        return walls
