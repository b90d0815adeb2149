"""
Tool State Machine

Interprets pointer and keyboard events into BuildingStore mutations.
Ground points arrive in display space (world minus scene center); the
machine converts to world space only where it creates or hit-tests
geometry, since every drag works with differences of display points.
"""
import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from massing.core import EDITOR_CONSTANTS, KeyName, PointerAction, ToolName
from massing.components.geometry import GeometryOps, Point2D
from massing.components.projection import CoordinateProjector
from massing.components.store import BuildingStore
from massing.components.tools.tool_states import (
    ARMED_STATES,
    DrawingCircleState,
    DrawingPolygonState,
    DrawingRectangleState,
    ExtrudeDrag,
    ExtrudeDraggingState,
    FloorStackPendingState,
    MoveDrag,
    MoveState,
    PanState,
    PushPullDrag,
    PushPullingState,
    SelectState,
    ToolState,
)
from massing.models.building import Building, Ring
from massing.models.events import Hit, KeyEvent, PointerEvent
from massing.validation import HeightValidator, ValidationError, ValidationErrorType

logger = logging.getLogger(__name__)

CenterProvider = Callable[[], Tuple[float, float]]


class ToolStateMachine:
    """
    Single-current-state tool controller

    Exactly one ToolState value is held at a time, so tools are mutually
    exclusive by construction. Edit drags (move, push/pull, extrude) record
    one history snapshot on their first mutation and update live without
    further snapshots, so each drag undoes in one step.
    """

    def __init__(self, store: BuildingStore, center_provider: CenterProvider,
                 camera_distance: float = 1.0):
        """
        Initialize state machine

        Args:
            store: Building collection to mutate
            center_provider: Returns the current scene center
            camera_distance: Camera distance scaling the pan speed
        """
        self._store = store
        self._center_provider = center_provider
        self._camera_distance = camera_distance
        self._state: ToolState = SelectState()
        self._selected: Optional[int] = None
        self._pan_offset: Tuple[float, float] = (0.0, 0.0)
        self._extrude_height_validator = HeightValidator("height")

    @property
    def state(self) -> ToolState:
        return self._state

    @property
    def active_tool(self) -> ToolName:
        return self._state.tool

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def pan_offset(self) -> Tuple[float, float]:
        return self._pan_offset

    # ------------------------------------------------------------------
    # Tool selection
    # ------------------------------------------------------------------

    def set_tool(self, tool: ToolName) -> ToolState:
        """
        Arm a toolbar tool, abandoning any interaction in progress

        Drawing buffers are discarded; edit drags keep what they have
        already applied.
        """
        self._abandon_interaction(revert=False)
        state = ARMED_STATES[tool]
        if tool == ToolName.FLOORS and self._is_selectable(self._selected):
            state = FloorStackPendingState(base_index=self._selected)
        self._transition(state)
        return self._state

    def cancel(self) -> None:
        """Escape: revert edit drags, discard drawing buffers, return to Select"""
        self._abandon_interaction(revert=True)
        self._transition(SelectState())

    def select(self, index: Optional[int]) -> Optional[int]:
        """
        Select a building, or clear the selection with None

        Raises:
            ValidationError: If the index is out of range or names the site boundary
        """
        if index is None:
            self._selected = None
            return None
        building = self._store.get(index)
        if building.is_main:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message="The site boundary cannot be selected",
                parameter_name="index"
            )
        self._selected = index
        return index

    def sync_selection(self) -> None:
        """Drop the selection if it no longer names a selectable building"""
        if self._selected is not None and not self._is_selectable(self._selected):
            self._selected = None
        if isinstance(self._state, FloorStackPendingState) and self._state.base_index is not None:
            if not self._is_selectable(self._state.base_index):
                self._transition(FloorStackPendingState())

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def handle_pointer(self, event: PointerEvent) -> ToolState:
        handlers = {
            PointerAction.DOWN: self._pointer_down,
            PointerAction.MOVE: self._pointer_move,
            PointerAction.UP: self._pointer_up,
        }
        handlers[event.action](event)
        return self._state

    def _pointer_down(self, event: PointerEvent) -> None:
        state = self._state

        if isinstance(state, SelectState):
            self._click_select(event.hit)

        elif isinstance(state, MoveState):
            if state.drag is not None:
                self._transition(MoveState())
            else:
                self._begin_move(event.point)

        elif isinstance(state, PanState):
            if event.screen is not None:
                self._transition(PanState(last=event.screen))

        elif isinstance(state, (DrawingRectangleState, DrawingCircleState)):
            if state.anchor is None:
                self._transition(replace(state, anchor=event.point, current=event.point))
            else:
                self._finish_drag_shape(replace(state, current=event.point))

        elif isinstance(state, DrawingPolygonState):
            self._polygon_click(state, event.point)

        elif isinstance(state, PushPullingState):
            if state.drag is None:
                self._begin_push_pull(event)

        elif isinstance(state, ExtrudeDraggingState):
            if state.drag is not None:
                logger.info(f"Extrude of building {state.drag.index} committed")
                self._transition(ExtrudeDraggingState())
            else:
                self._begin_extrude(event.hit)

        elif isinstance(state, FloorStackPendingState):
            if event.hit is not None and self._is_selectable(event.hit.building_index):
                self._selected = event.hit.building_index
                self._transition(FloorStackPendingState(base_index=event.hit.building_index))

    def _pointer_move(self, event: PointerEvent) -> None:
        state = self._state

        if isinstance(state, MoveState) and state.drag is not None:
            self._drag_move(state.drag, event.point)

        elif isinstance(state, PanState) and state.last is not None and event.screen is not None:
            dx = event.screen[0] - state.last[0]
            dy = event.screen[1] - state.last[1]
            speed = self._camera_distance * EDITOR_CONSTANTS.PAN_SPEED_FACTOR
            self._pan_offset = (self._pan_offset[0] - dx * speed, self._pan_offset[1] + dy * speed)
            self._state = PanState(last=event.screen)

        elif isinstance(state, (DrawingRectangleState, DrawingCircleState)) and state.anchor is not None:
            self._state = replace(state, current=event.point)

        elif isinstance(state, DrawingPolygonState) and state.points:
            self._state = replace(state, preview=event.point)

        elif isinstance(state, PushPullingState) and state.drag is not None:
            self._drag_push_pull(state.drag, event.point)

        elif isinstance(state, ExtrudeDraggingState) and state.drag is not None:
            if event.viewport_y is not None:
                self._drag_extrude(state.drag, event.viewport_y)

    def _pointer_up(self, event: PointerEvent) -> None:
        state = self._state

        if isinstance(state, (DrawingRectangleState, DrawingCircleState)) and state.anchor is not None:
            self._finish_drag_shape(replace(state, current=event.point))

        elif isinstance(state, PanState) and state.last is not None:
            self._transition(PanState())

        elif isinstance(state, PushPullingState) and state.drag is not None:
            logger.info(f"Push/pull of building {state.drag.index} face {state.drag.face_index} committed")
            self._transition(PushPullingState())

    # ------------------------------------------------------------------
    # Keyboard events
    # ------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> ToolState:
        if event.is_undo:
            self.undo()
        elif event.key == KeyName.ESCAPE:
            self.cancel()
        elif event.key == KeyName.DELETE:
            self.delete_selected()
        elif isinstance(self._state, DrawingPolygonState):
            if event.key == KeyName.ENTER:
                self.finish_polygon()
            elif event.key == KeyName.BACKSPACE and len(self._state.points) > 1:
                self._state = replace(self._state, points=self._state.points[:-1])
        return self._state

    def finish_polygon(self) -> Optional[int]:
        """
        Finalize the polygon being drawn

        Raises:
            ValidationError: If fewer than 3 points were placed or the
                outline crosses itself; the points are kept for editing
        """
        state = self._state
        points = state.points if isinstance(state, DrawingPolygonState) else ()
        if len(points) < 3:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_LENGTH,
                message=f"Need at least 3 points to create a polygon, got {len(points)}",
                parameter_name="points"
            )
        ring = GeometryOps.dedupe_consecutive([p.as_tuple() for p in points])
        if len(ring) < 3:
            logger.warning("Polygon collapsed to fewer than 3 distinct points and was discarded")
            self._transition(DrawingPolygonState())
            return None
        if not GeometryOps.is_simple(ring):
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_POLYGON,
                message="Polygon outline crosses itself",
                parameter_name="points"
            )
        return self._create_shape(ring)

    # ------------------------------------------------------------------
    # Editing operations
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        """Abandon any interaction and restore the previous snapshot"""
        self._abandon_interaction(revert=False)
        self._transition(ARMED_STATES[self._state.tool])
        restored = self._store.undo()
        self.sync_selection()
        return restored

    def delete_selected(self) -> list:
        """Remove the selected building (and its floors when it is a foundation)"""
        if self._selected is None:
            logger.warning("Delete requested with no building selected")
            return []
        self._abandon_interaction(revert=False)
        self._transition(ARMED_STATES[self._state.tool])
        removed = self._store.remove_at(self._selected)
        self._selected = None
        self.sync_selection()
        return removed

    def extrude(self, index: int, height: float) -> Building:
        """
        Set an exact height on a flat building

        Raises:
            ValidationError: If the building is already 3D or height is not positive
        """
        building = self._store.get(index)
        self._extrude_height_validator.validate(height).raise_if_invalid()
        if building.is_main:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message="The site boundary cannot be extruded",
                parameter_name="index"
            )
        if not building.is_flat:
            raise ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message=f"Building {index} is already extruded (height {building.height})",
                parameter_name="index"
            )
        updated = self._store.update_at(index, {"height": float(height)})
        logger.info(f"Extruded building {index} to height {height}")
        return updated

    def stack_floors(self, count: int, height: float, base_index: Optional[int] = None) -> list:
        """
        Stack floors on the pending base, the given base, or the selection

        Raises:
            ValidationError: If no base building is known or the stack is invalid
        """
        if base_index is None and isinstance(self._state, FloorStackPendingState):
            base_index = self._state.base_index
        if base_index is None:
            base_index = self._selected
        if base_index is None:
            raise ValidationError(
                error_type=ValidationErrorType.MISSING_PARAMETER,
                message="Select a base building before stacking floors",
                parameter_name="index"
            )
        new_indices = self._store.stack_floors(base_index, count, height)
        self._selected = base_index
        if isinstance(self._state, FloorStackPendingState):
            self._transition(SelectState())
        return new_indices

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transition(self, state: ToolState) -> None:
        if type(state) is not type(self._state) or state.is_active != self._state.is_active:
            logger.debug(
                f"Tool state {self._state.kind.value}(active={self._state.is_active}) -> "
                f"{state.kind.value}(active={state.is_active})"
            )
        self._state = state

    def _abandon_interaction(self, revert: bool) -> None:
        state = self._state
        drag = getattr(state, "drag", None)
        if revert and drag is not None and drag.history_pushed:
            self._store.undo()
            self.sync_selection()
            logger.debug(f"Reverted {state.kind.value} drag on building {drag.index}")
        elif isinstance(state, (DrawingRectangleState, DrawingCircleState, DrawingPolygonState)) \
                and state.is_active:
            logger.debug(f"Discarded {state.kind.value} buffer")

    def _is_selectable(self, index: Optional[int]) -> bool:
        if index is None or not 0 <= index < len(self._store):
            return False
        return not self._store.buildings[index].is_main

    def _click_select(self, hit: Optional[Hit]) -> None:
        if hit is not None and self._is_selectable(hit.building_index):
            self._selected = hit.building_index
        else:
            self._selected = None

    def _create_shape(self, display_ring: Ring) -> int:
        world = CoordinateProjector.ring_to_world(display_ring, self._center_provider())
        index = self._store.add(Building(vertices=world, height=EDITOR_CONSTANTS.DRAWN_SHAPE_HEIGHT))
        self._selected = index

        site = self._store.main_building
        if site is not None:
            inside = GeometryOps.is_polygon_inside(world, site.vertices)
            logger.info(f"Drawn shape {index} is {'inside' if inside else 'outside'} the site boundary")

        self._transition(SelectState())
        return index

    def _finish_drag_shape(self, state: ToolState) -> Optional[int]:
        anchor, current = state.anchor, state.current
        threshold = EDITOR_CONSTANTS.MIN_SHAPE_EXTENT

        if isinstance(state, DrawingRectangleState):
            width, height = abs(current.x - anchor.x), abs(current.y - anchor.y)
            if width > threshold and height > threshold:
                return self._create_shape(GeometryOps.rectangle_vertices(anchor, current))
            logger.warning(f"Rectangle {width:.3f} x {height:.3f} below minimum extent, discarded")
        else:
            radius = anchor.distance_to(current)
            if radius > threshold:
                return self._create_shape(GeometryOps.circle_vertices(anchor, radius))
            logger.warning(f"Circle radius {radius:.3f} below minimum extent, discarded")

        self._transition(ARMED_STATES[state.tool])
        return None

    def _polygon_click(self, state: DrawingPolygonState, point: Point2D) -> None:
        if len(state.points) >= 3 and point.distance_to(state.points[0]) < EDITOR_CONSTANTS.POLYGON_CLOSE_RADIUS:
            self.finish_polygon()
            return
        self._transition(replace(state, points=state.points + (point,), preview=None))

    def _begin_move(self, point: Point2D) -> None:
        if self._selected is None:
            logger.warning("Move requires a selected building")
            return
        building = self._store.get(self._selected)
        centroid = CoordinateProjector.to_display(GeometryOps.centroid(building.vertices), self._center_provider())
        self._transition(MoveState(drag=MoveDrag(
            index=self._selected,
            original_vertices=building.vertices,
            original_buffer=building.buffer,
            start=point,
            offset=centroid - point
        )))

    def _drag_move(self, drag: MoveDrag, point: Point2D) -> None:
        # Always relative to the snapshot so repeated moves cannot drift
        centroid = drag.start + drag.offset
        target = point + drag.offset
        delta = target - centroid
        original = self._store.get(drag.index).with_changes(
            vertices=drag.original_vertices,
            buffer=drag.original_buffer
        )
        moved = original.translated(delta.x, delta.y)
        patch = {"vertices": moved.vertices}
        if moved.buffer is not None:
            patch["buffer"] = moved.buffer
        self._store.update_at(drag.index, patch, record_history=not drag.history_pushed)
        self._state = MoveState(drag=replace(drag, history_pushed=True))

    def _begin_push_pull(self, event: PointerEvent) -> None:
        hit = event.hit
        if hit is None or not self._is_selectable(hit.building_index):
            return
        building = self._store.get(hit.building_index)
        face_index = hit.face_index
        if face_index is None:
            world_point = CoordinateProjector.to_world(event.point, self._center_provider())
            face_index = GeometryOps.nearest_edge(building.vertices, world_point)
        face_index %= len(building.vertices)

        normal = GeometryOps.edge_normal(building.vertices, face_index)
        if normal is None:
            logger.warning(f"Edge {face_index} of building {hit.building_index} has zero length, push/pull ignored")
            return

        self._selected = hit.building_index
        self._transition(PushPullingState(drag=PushPullDrag(
            index=hit.building_index,
            face_index=face_index,
            normal=normal,
            start=event.point,
            original_vertices=building.vertices
        )))

    def _drag_push_pull(self, drag: PushPullDrag, point: Point2D) -> None:
        distance = (point - drag.start).dot(drag.normal)
        vertices = GeometryOps.displace_edge(drag.original_vertices, drag.face_index, drag.normal, distance)
        self._store.update_at(drag.index, {"vertices": vertices}, record_history=not drag.history_pushed)
        self._state = PushPullingState(drag=replace(drag, history_pushed=True))

    def _begin_extrude(self, hit: Optional[Hit]) -> None:
        if hit is None or not self._is_selectable(hit.building_index):
            return
        building = self._store.get(hit.building_index)
        if not building.is_flat:
            logger.warning(f"Building {hit.building_index} is already extruded, extrude ignored")
            return
        self._selected = hit.building_index
        self._transition(ExtrudeDraggingState(drag=ExtrudeDrag(index=hit.building_index)))

    def _drag_extrude(self, drag: ExtrudeDrag, viewport_y: float) -> None:
        height = max(
            EDITOR_CONSTANTS.EXTRUDE_MIN_HEIGHT,
            EDITOR_CONSTANTS.EXTRUDE_MAX_HEIGHT * (1.0 - viewport_y)
        )
        self._store.update_at(drag.index, {"height": height}, record_history=not drag.history_pushed)
        self._state = ExtrudeDraggingState(drag=replace(drag, history_pushed=True))
