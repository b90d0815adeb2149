"""
Export Record Models

Typed intermediate records shared by the grid, CSV and zone serializers.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from massing.core import CornerPosition


@dataclass(frozen=True)
class GridCorner:
    """One corner of an exported floor in grid coordinates"""
    index: int
    position: CornerPosition
    x: int
    y: int
    z: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "position": self.position.value,
            "x": self.x,
            "y": self.y,
            "z": self.z,
        }


@dataclass(frozen=True)
class ZPosition:
    """Vertical span of a floor inside its stack"""
    base: float
    top: float
    total_height: float

    def to_dict(self) -> Dict[str, Any]:
        return {"base": self.base, "top": self.top, "totalHeight": self.total_height}


@dataclass
class FloorExport:
    """
    Exported floor of a building group

    Attributes:
        id: Original index of the building in the collection
        height: Height of this floor
        is_floor: Whether the building carries floor-stack metadata
        floor_level: Level inside the stack (0 for ground)
        base_building: Index of the foundation, None for a foundation
        corners: V base corners followed by V top corners
        z_position: Vertical span of the floor
    """
    id: int
    height: float
    is_floor: bool
    floor_level: int
    base_building: Optional[int]
    corners: List[GridCorner] = field(default_factory=list)
    z_position: Optional[ZPosition] = None

    @property
    def base_corners(self) -> List[GridCorner]:
        return [c for c in self.corners if c.position == CornerPosition.BASE]

    @property
    def top_corners(self) -> List[GridCorner]:
        return [c for c in self.corners if c.position == CornerPosition.TOP]

    @property
    def group_id(self) -> int:
        """Id of the foundation building of this floor's group"""
        return self.base_building if self.base_building is not None else self.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "height": self.height,
            "isFloor": self.is_floor,
            "floorLevel": self.floor_level,
            "baseBuilding": self.base_building,
            "corners": [c.to_dict() for c in self.corners],
            "zPosition": self.z_position.to_dict() if self.z_position else None,
        }
