"""CSV export of site boundary, building corners and road vertices"""
import csv
import io
import logging
from typing import Sequence

from massing.core import CsvRowType
from massing.components.export.base_exporter import BaseExporter
from massing.components.export.floor_groups import FloorGrouper
from massing.models.building import Building, Ring

logger = logging.getLogger(__name__)


class CsvExporter(BaseExporter):
    """
    Flat CSV of grid coordinates, one row per vertex

    Building rows list every corner of every exported floor (base corners
    first, then top corners). Road rows lie at z = 0.
    """

    export_name = "CSV"
    HEADER = ["Type", "ID", "X", "Y", "Z", "Additional_Info"]

    def __init__(self, projector):
        super().__init__(projector)
        self._grouper = FloorGrouper(projector)

    def export(self, buildings: Sequence[Building], roads: Sequence[Ring] = ()) -> str:
        _, site = self._site(buildings)
        center = self._projector.scene_center(buildings, roads)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self.HEADER)

        for i, (gx, gy) in enumerate(self._projector.grid_ring(site.vertices, center)):
            writer.writerow([CsvRowType.SITE_BOUNDARY.value, i, gx, gy, 0, f"Corner_{i}"])

        for group in self._grouper.group(buildings, site, center):
            for floor in group:
                for k, corner in enumerate(floor.corners):
                    writer.writerow([
                        CsvRowType.BUILDING.value, f"{floor.id}_{k}",
                        corner.x, corner.y, corner.z, f"Height_{floor.height}"
                    ])

        for road_id, road in enumerate(roads):
            for v, (gx, gy) in enumerate(self._projector.grid_ring(road, center)):
                writer.writerow([CsvRowType.ROAD.value, f"{road_id}_{v}", gx, gy, 0, "Road_Point"])

        logger.info(f"CSV export produced for {len(buildings)} buildings and {len(roads)} roads")
        return buffer.getvalue()
