"""
Tool States

The tool state machine holds exactly one of these values at a time. Each
variant carries only the payload its tool needs; an armed tool that has
not started an interaction is its variant with an empty payload.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

from massing.core import ToolName, ToolStateKind
from massing.components.geometry import Point2D
from massing.models.building import Ring


def _point(point: Optional[Point2D]) -> Optional[list]:
    return None if point is None else [point.x, point.y]


@dataclass(frozen=True)
class ToolState:
    """Base of the tool state union"""
    kind: ClassVar[ToolStateKind]
    tool: ClassVar[ToolName]

    @property
    def is_active(self) -> bool:
        """Whether an interaction is in progress (as opposed to merely armed)"""
        return False

    def payload(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "tool": self.tool.value,
            "active": self.is_active,
            **self.payload(),
        }


@dataclass(frozen=True)
class SelectState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.SELECT
    tool: ClassVar[ToolName] = ToolName.SELECT


@dataclass(frozen=True)
class MoveDrag:
    """
    In-progress move of one building

    Attributes:
        index: Building being moved
        original_vertices: Footprint when the drag started
        original_buffer: Buffer polygon when the drag started
        start: Ground point of the activating click
        offset: Original centroid (display space) minus start
        history_pushed: Whether the drag has already recorded its snapshot
    """
    index: int
    original_vertices: Ring
    original_buffer: Optional[Ring]
    start: Point2D
    offset: Point2D
    history_pushed: bool = False


@dataclass(frozen=True)
class MoveState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.MOVE
    tool: ClassVar[ToolName] = ToolName.MOVE
    drag: Optional[MoveDrag] = None

    @property
    def is_active(self) -> bool:
        return self.drag is not None

    def payload(self) -> Dict[str, Any]:
        return {"index": self.drag.index if self.drag else None}


@dataclass(frozen=True)
class PanState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.PAN
    tool: ClassVar[ToolName] = ToolName.PAN
    last: Optional[Tuple[float, float]] = None

    @property
    def is_active(self) -> bool:
        return self.last is not None


@dataclass(frozen=True)
class DrawingRectangleState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.DRAWING_RECTANGLE
    tool: ClassVar[ToolName] = ToolName.RECTANGLE
    anchor: Optional[Point2D] = None
    current: Optional[Point2D] = None

    @property
    def is_active(self) -> bool:
        return self.anchor is not None

    def payload(self) -> Dict[str, Any]:
        return {"anchor": _point(self.anchor), "current": _point(self.current)}


@dataclass(frozen=True)
class DrawingCircleState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.DRAWING_CIRCLE
    tool: ClassVar[ToolName] = ToolName.CIRCLE
    anchor: Optional[Point2D] = None
    current: Optional[Point2D] = None

    @property
    def is_active(self) -> bool:
        return self.anchor is not None

    @property
    def radius(self) -> float:
        if self.anchor is None or self.current is None:
            return 0.0
        return self.anchor.distance_to(self.current)

    def payload(self) -> Dict[str, Any]:
        return {"anchor": _point(self.anchor), "current": _point(self.current), "radius": self.radius}


@dataclass(frozen=True)
class DrawingPolygonState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.DRAWING_POLYGON
    tool: ClassVar[ToolName] = ToolName.POLYGON
    points: Tuple[Point2D, ...] = ()
    preview: Optional[Point2D] = None

    @property
    def is_active(self) -> bool:
        return bool(self.points)

    def payload(self) -> Dict[str, Any]:
        return {"points": [_point(p) for p in self.points], "preview": _point(self.preview)}


@dataclass(frozen=True)
class PushPullDrag:
    """
    In-progress push/pull of one edge

    Attributes:
        index: Building being edited
        face_index: Edge from vertex face_index to face_index + 1
        normal: Unit normal of that edge
        start: Ground point where the drag started
        original_vertices: Footprint when the drag started
        history_pushed: Whether the drag has already recorded its snapshot
    """
    index: int
    face_index: int
    normal: Point2D
    start: Point2D
    original_vertices: Ring
    history_pushed: bool = False


@dataclass(frozen=True)
class PushPullingState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.PUSH_PULLING
    tool: ClassVar[ToolName] = ToolName.PUSH_PULL
    drag: Optional[PushPullDrag] = None

    @property
    def is_active(self) -> bool:
        return self.drag is not None

    def payload(self) -> Dict[str, Any]:
        if self.drag is None:
            return {"index": None, "faceIndex": None}
        return {"index": self.drag.index, "faceIndex": self.drag.face_index}


@dataclass(frozen=True)
class ExtrudeDrag:
    index: int
    history_pushed: bool = False


@dataclass(frozen=True)
class ExtrudeDraggingState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.EXTRUDE_DRAGGING
    tool: ClassVar[ToolName] = ToolName.EXTRUDE
    drag: Optional[ExtrudeDrag] = None

    @property
    def is_active(self) -> bool:
        return self.drag is not None

    def payload(self) -> Dict[str, Any]:
        return {"index": self.drag.index if self.drag else None}


@dataclass(frozen=True)
class FloorStackPendingState(ToolState):
    kind: ClassVar[ToolStateKind] = ToolStateKind.FLOOR_STACK_PENDING
    tool: ClassVar[ToolName] = ToolName.FLOORS
    base_index: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.base_index is not None

    def payload(self) -> Dict[str, Any]:
        return {"baseIndex": self.base_index}


# Armed (idle) state per toolbar tool
ARMED_STATES: Dict[ToolName, ToolState] = {
    ToolName.SELECT: SelectState(),
    ToolName.MOVE: MoveState(),
    ToolName.PAN: PanState(),
    ToolName.RECTANGLE: DrawingRectangleState(),
    ToolName.CIRCLE: DrawingCircleState(),
    ToolName.POLYGON: DrawingPolygonState(),
    ToolName.PUSH_PULL: PushPullingState(),
    ToolName.EXTRUDE: ExtrudeDraggingState(),
    ToolName.FLOORS: FloorStackPendingState(),
}
