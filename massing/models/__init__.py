from massing.models.building import Building, Vertex, Ring, to_ring
from massing.models.events import Hit, PointerEvent, KeyEvent
from massing.models.render_snapshot import RenderSnapshot
from massing.models.measurements import SideLength, SiteMeasurements
from massing.models.export_records import GridCorner, ZPosition, FloorExport

__all__ = [
    "Building",
    "Vertex",
    "Ring",
    "to_ring",
    "Hit",
    "PointerEvent",
    "KeyEvent",
    "RenderSnapshot",
    "SideLength",
    "SiteMeasurements",
    "GridCorner",
    "ZPosition",
    "FloorExport",
]
