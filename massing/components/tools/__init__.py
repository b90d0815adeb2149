from massing.components.tools.tool_states import (
    ToolState,
    SelectState,
    MoveState,
    MoveDrag,
    PanState,
    DrawingRectangleState,
    DrawingCircleState,
    DrawingPolygonState,
    PushPullingState,
    PushPullDrag,
    ExtrudeDraggingState,
    ExtrudeDrag,
    FloorStackPendingState,
    ARMED_STATES,
)
from massing.components.tools.tool_state_machine import ToolStateMachine

__all__ = [
    "ToolState",
    "SelectState",
    "MoveState",
    "MoveDrag",
    "PanState",
    "DrawingRectangleState",
    "DrawingCircleState",
    "DrawingPolygonState",
    "PushPullingState",
    "PushPullDrag",
    "ExtrudeDraggingState",
    "ExtrudeDrag",
    "FloorStackPendingState",
    "ARMED_STATES",
    "ToolStateMachine",
]
