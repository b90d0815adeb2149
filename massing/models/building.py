"""
Building Model

A polygon footprint plus an extrusion height and floor/grouping metadata.
Buildings are immutable values: every edit produces a new instance, so a
history snapshot can never alias a vertex list that is later modified.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from massing.core import BuildingField, EDITOR_CONSTANTS

Vertex = Tuple[float, float]
Ring = Tuple[Vertex, ...]


def to_ring(points: Iterable[Sequence[float]]) -> Ring:
    """
    Convert any iterable of coordinate pairs into an immutable ring

    Args:
        points: Iterable of (x, y) pairs (lists, tuples or Point2D-like objects)

    Returns:
        Tuple of (float, float) tuples

    Raises:
        ValueError: If a point does not have two coordinates
    """
    ring = []
    for i, point in enumerate(points):
        if hasattr(point, "x") and hasattr(point, "y"):
            ring.append((float(point.x), float(point.y)))
        else:
            if len(point) < 2:
                raise ValueError(f"Point at index {i} must have 2 coordinates, got {list(point)}")
            ring.append((float(point[0]), float(point[1])))
    return tuple(ring)


@dataclass(frozen=True)
class Building:
    """
    Building footprint

    Attributes:
        vertices: Ordered polygon boundary (>= 3 points, no closing duplicate)
        height: Extrusion depth; <= 0.1 marks a flat shape that is not yet extruded
        is_main: Whether this is the site boundary
        buffer: Optional secondary offset polygon, moved alongside vertices
        floor_level: Level inside a floor stack; None or 0 means ground
        base_building: Index of the foundation Building of a floor stack
    """
    vertices: Ring
    height: float
    is_main: bool = False
    buffer: Optional[Ring] = None
    floor_level: Optional[int] = None
    base_building: Optional[int] = None

    # camelCase wire names -> attribute names
    WIRE_FIELDS = {
        BuildingField.VERTICES.value: "vertices",
        BuildingField.HEIGHT.value: "height",
        BuildingField.IS_MAIN.value: "is_main",
        BuildingField.BUFFER.value: "buffer",
        BuildingField.FLOOR_LEVEL.value: "floor_level",
        BuildingField.BASE_BUILDING.value: "base_building",
    }

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", to_ring(self.vertices))
        if self.buffer is not None:
            object.__setattr__(self, "buffer", to_ring(self.buffer))

    @property
    def is_flat(self) -> bool:
        """Whether the building is still a flat 2D shape"""
        return EDITOR_CONSTANTS.is_flat(self.height)

    @property
    def is_floor(self) -> bool:
        """Whether the building carries floor-stack metadata"""
        return self.floor_level is not None

    @property
    def level(self) -> int:
        """Floor level with None treated as ground"""
        return self.floor_level or 0

    def group_index(self, own_index: int) -> int:
        """
        Index of the floor group this building belongs to

        Args:
            own_index: Index of this building in the collection

        Returns:
            The base building index, or own_index for a foundation
        """
        return self.base_building if self.base_building is not None else own_index

    def with_changes(self, **changes: Any) -> 'Building':
        """Return a copy with the given attributes replaced"""
        return replace(self, **changes)

    def translated(self, dx: float, dy: float) -> 'Building':
        """Return a copy shifted by (dx, dy), buffer included"""
        buffer = None
        if self.buffer is not None:
            buffer = tuple((x + dx, y + dy) for x, y in self.buffer)
        return replace(
            self,
            vertices=tuple((x + dx, y + dy) for x, y in self.vertices),
            buffer=buffer
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase wire names"""
        data: Dict[str, Any] = {
            BuildingField.VERTICES.value: [list(v) for v in self.vertices],
            BuildingField.HEIGHT.value: self.height,
            BuildingField.IS_MAIN.value: self.is_main,
        }
        if self.buffer is not None:
            data[BuildingField.BUFFER.value] = [list(v) for v in self.buffer]
        if self.floor_level is not None:
            data[BuildingField.FLOOR_LEVEL.value] = self.floor_level
        if self.base_building is not None:
            data[BuildingField.BASE_BUILDING.value] = self.base_building
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Building':
        """
        Create a Building from its wire representation

        Args:
            data: Dict with camelCase keys

        Returns:
            Building instance

        Raises:
            ValueError: If vertices or height are missing
        """
        if BuildingField.VERTICES.value not in data:
            raise ValueError(f"Missing '{BuildingField.VERTICES.value}' field")
        if BuildingField.HEIGHT.value not in data:
            raise ValueError(f"Missing '{BuildingField.HEIGHT.value}' field")

        return cls(**cls.patch_from_wire(data))

    @classmethod
    def patch_from_wire(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Translate a camelCase patch into attribute names

        Raises:
            ValueError: If the patch contains an unknown field
        """
        attribute_names = {f.name for f in fields(cls)}
        patch = {}
        for key, value in data.items():
            name = cls.WIRE_FIELDS.get(key, key)
            if name not in attribute_names:
                raise ValueError(f"Unknown building field '{key}'")
            patch[name] = value
        return patch
