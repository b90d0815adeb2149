"""
Editor Engine

One instance per open document. Owns the building store, the tool state
machine, the road polylines and the exporters, and is the single entry
point collaborators use to drive and read a document.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from massing.core import ExportError, ToolName
from massing.components.export import CsvExporter, GridExporter, ZoneExporter
from massing.components.geometry import GeometryOps
from massing.components.ingestion import ImportedSite, SiteImporter
from massing.components.projection import CoordinateProjector
from massing.components.store import BuildingStore
from massing.components.tools import ToolState, ToolStateMachine
from massing.models import Building, KeyEvent, PointerEvent, RenderSnapshot, Ring, SiteMeasurements, to_ring

logger = logging.getLogger(__name__)


class EditorEngine:
    """Per-document massing editor"""

    def __init__(
        self,
        buildings: Sequence[Building] = (),
        roads: Sequence[Sequence[Sequence[float]]] = (),
        projector: Optional[CoordinateProjector] = None,
        importer: Optional[SiteImporter] = None
    ):
        """
        Initialize engine

        Args:
            buildings: Initial building collection
            roads: Initial road polylines in world coordinates
            projector: Coordinate projector (default grid and projection)
            importer: Site import parser
        """
        self._projector = projector or CoordinateProjector()
        self._importer = importer or SiteImporter(self._projector)
        self._store = BuildingStore(buildings)
        self._roads: Tuple[Ring, ...] = tuple(to_ring(road) for road in roads)
        self._location: Optional[Dict[str, float]] = None
        self._tools = ToolStateMachine(self._store, self.scene_center)
        self._grid_exporter = GridExporter(self._projector)
        self._csv_exporter = CsvExporter(self._projector)
        self._zone_exporter = ZoneExporter(self._projector)
        self._closed = False

    @property
    def store(self) -> BuildingStore:
        return self._store

    @property
    def tools(self) -> ToolStateMachine:
        return self._tools

    @property
    def buildings(self) -> Tuple[Building, ...]:
        return self._store.buildings

    @property
    def roads(self) -> Tuple[Ring, ...]:
        return self._roads

    @property
    def selected_index(self) -> Optional[int]:
        return self._tools.selected_index

    @property
    def closed(self) -> bool:
        return self._closed

    def scene_center(self) -> Tuple[float, float]:
        return self._projector.scene_center(self._store.buildings, self._roads)

    # Tool input

    def set_tool(self, tool: ToolName) -> ToolState:
        return self._tools.set_tool(tool)

    def pointer_down(self, event: PointerEvent) -> ToolState:
        return self._tools.handle_pointer(event)

    def pointer_move(self, event: PointerEvent) -> ToolState:
        return self._tools.handle_pointer(event)

    def pointer_up(self, event: PointerEvent) -> ToolState:
        return self._tools.handle_pointer(event)

    def handle_pointer(self, event: PointerEvent) -> ToolState:
        return self._tools.handle_pointer(event)

    def key_down(self, event: KeyEvent) -> ToolState:
        return self._tools.handle_key(event)

    # Editing

    def select(self, index: Optional[int]) -> Optional[int]:
        return self._tools.select(index)

    def extrude(self, index: int, height: float) -> Building:
        return self._tools.extrude(index, height)

    def stack_floors(self, count: int, height: float, base_index: Optional[int] = None) -> List[int]:
        return self._tools.stack_floors(count, height, base_index)

    def delete_selected(self) -> List[int]:
        return self._tools.delete_selected()

    def undo(self) -> bool:
        return self._tools.undo()

    def clear(self) -> None:
        """Remove every building (undoable) and return to the Select tool"""
        self._tools.cancel()
        self._store.clear_all()
        self._tools.sync_selection()

    def load_site(self, payload: Any) -> ImportedSite:
        """
        Replace the document contents with an imported site

        The payload is parsed completely before anything changes.

        Raises:
            ImportPayloadError: If the payload is malformed
        """
        site = self._importer.parse(payload)
        self._tools.cancel()
        self._store.replace_all(site.buildings)
        self._roads = site.roads
        self._location = site.location
        self._tools.select(None)
        logger.info(f"Loaded site with {len(site.buildings)} buildings and {len(site.roads)} roads")
        return site

    # Queries

    def buildings_inside_site(self) -> List[int]:
        """Indices of non-site buildings whose every vertex lies inside the site boundary"""
        site = self._store.main_building
        if site is None:
            return []
        return [
            i for i, b in enumerate(self._store.buildings)
            if not b.is_main and GeometryOps.is_polygon_inside(b.vertices, site.vertices)
        ]

    def site_measurements(self) -> SiteMeasurements:
        site = self._require_site("measurements")
        return SiteMeasurements(
            sides=GeometryOps.side_lengths(site.vertices),
            total_perimeter=GeometryOps.total_perimeter(site.vertices),
            area=GeometryOps.polygon_area(site.vertices)
        )

    def site_grid_points(self) -> List[Dict[str, Any]]:
        site = self._require_site("site grid points")
        cells = self._projector.grid_ring(site.vertices, self.scene_center())
        return [{"index": i, "grid": [gx, gy]} for i, (gx, gy) in enumerate(cells)]

    # Exports

    def export_grid_coordinates(self) -> Dict[str, Any]:
        return self._grid_exporter.export(self._store.buildings, self._roads)

    def export_csv(self) -> str:
        return self._csv_exporter.export(self._store.buildings, self._roads)

    def export_zones(self) -> Dict[str, Any]:
        return self._zone_exporter.export(self._store.buildings, self._roads, location=self._location)

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            buildings=self._store.buildings,
            roads=self._roads,
            selected_index=self._tools.selected_index,
            active_tool=self._tools.active_tool,
            tool_state=self._tools.state.to_dict(),
            center=self.scene_center(),
            pan_offset=self._tools.pan_offset
        )

    def close(self) -> None:
        """Tear down the document: drop buildings, roads and history"""
        self._tools.cancel()
        self._store = BuildingStore()
        self._tools = ToolStateMachine(self._store, self.scene_center)
        self._roads = ()
        self._closed = True
        logger.info("Editor engine closed")

    def _require_site(self, what: str) -> Building:
        site = self._store.main_building
        if site is None:
            raise ExportError(what, "no main site boundary found")
        return site
