"""Read-only view of a document handed to the rendering collaborator"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from massing.core import ToolName
from massing.models.building import Building, Ring


@dataclass(frozen=True)
class RenderSnapshot:
    """
    Snapshot of everything a renderer needs to draw one frame

    Attributes:
        buildings: Building collection in store order
        roads: Road polylines in world coordinates
        selected_index: Currently selected building, if any
        active_tool: Armed toolbar tool
        tool_state: Tool state discriminator and payload summary
        center: Scene center subtracted from world coordinates for display
        pan_offset: Accumulated camera pan produced by the pan tool
    """
    buildings: Tuple[Building, ...]
    roads: Tuple[Ring, ...]
    selected_index: Optional[int]
    active_tool: ToolName
    tool_state: Dict[str, Any] = field(default_factory=dict)
    center: Tuple[float, float] = (0.0, 0.0)
    pan_offset: Tuple[float, float] = (0.0, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        roads: List[List[List[float]]] = [[list(p) for p in road] for road in self.roads]
        return {
            "buildings": [b.to_dict() for b in self.buildings],
            "roads": roads,
            "selectedIndex": self.selected_index,
            "activeTool": self.active_tool.value,
            "toolState": self.tool_state,
            "center": list(self.center),
            "panOffset": list(self.pan_offset),
        }
