"""
Floor grouping

Collects the buildings inside the site into floor groups keyed by their
foundation index and computes the cumulative vertical span of each floor.
"""
from typing import Dict, List, Sequence, Tuple

from massing.core import CornerPosition
from massing.components.geometry import GeometryOps
from massing.components.projection import CoordinateProjector
from massing.models.building import Building
from massing.models.export_records import FloorExport, GridCorner, ZPosition


class FloorGrouper:
    """Builds FloorExport records grouped per foundation building"""

    def __init__(self, projector: CoordinateProjector):
        self._projector = projector

    def group(self, buildings: Sequence[Building], site: Building,
              center: Tuple[float, float]) -> List[List[FloorExport]]:
        """
        Group exportable buildings into floor stacks

        Only non-site buildings with every vertex inside the site take part.
        Groups are ordered by foundation index; members by floor level.

        Args:
            buildings: Building collection
            site: Site boundary building
            center: Scene center used for grid quantization

        Returns:
            One list of floors per group, each with cumulative z spans
        """
        groups: Dict[int, List[Tuple[int, Building]]] = {}
        for index, building in enumerate(buildings):
            if building.is_main or not GeometryOps.is_polygon_inside(building.vertices, site.vertices):
                continue
            groups.setdefault(building.group_index(index), []).append((index, building))

        result = []
        for key in sorted(groups):
            members = sorted(groups[key], key=lambda item: item[1].level)
            result.append(self._stack(members, center))
        return result

    def _stack(self, members: List[Tuple[int, Building]], center: Tuple[float, float]) -> List[FloorExport]:
        floors = []
        cumulative = 0.0
        for index, building in members:
            base_z = cumulative
            cumulative += building.height
            top_z = cumulative

            cells = self._projector.grid_ring(building.vertices, center)
            corners = [GridCorner(i, CornerPosition.BASE, gx, gy, base_z) for i, (gx, gy) in enumerate(cells)]
            corners += [GridCorner(i, CornerPosition.TOP, gx, gy, top_z) for i, (gx, gy) in enumerate(cells)]

            floors.append(FloorExport(
                id=index,
                height=building.height,
                is_floor=building.is_floor,
                floor_level=building.level,
                base_building=building.base_building,
                corners=corners,
                z_position=ZPosition(base=base_z, top=top_z, total_height=cumulative)
            ))
        return floors
