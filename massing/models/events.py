"""
Input Event Models

Pointer and keyboard events as reported by the rendering collaborator.
Ground points are in display space (scene recentered on its vertex mean).
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from massing.core import KeyName, PointerAction
from massing.components.geometry.point_2d import Point2D


@dataclass(frozen=True)
class Hit:
    """A building (and optionally one of its faces) under the pointer"""
    building_index: int
    face_index: Optional[int] = None


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer event

    Attributes:
        action: Down, move or up
        point: Ground-plane intersection in display coordinates
        viewport_y: Vertical pointer position as a fraction of the viewport
            height (0 at the top, 1 at the bottom)
        screen: Raw screen position in pixels, used by the pan tool
        hit: Building/face under the pointer, if any
    """
    action: PointerAction
    point: Point2D
    viewport_y: Optional[float] = None
    screen: Optional[Tuple[float, float]] = None
    hit: Optional[Hit] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PointerEvent':
        """
        Parse a pointer event from its wire representation

        Raises:
            ValueError: If the action or point is missing or invalid
        """
        try:
            action = PointerAction(data["type"])
        except KeyError:
            raise ValueError("Pointer event is missing 'type'")

        point_data = data.get("point")
        if not isinstance(point_data, dict) or "x" not in point_data or "y" not in point_data:
            raise ValueError("Pointer event 'point' must be an object with 'x' and 'y'")

        hit = None
        hit_data = data.get("hit")
        if hit_data is not None:
            hit = Hit(
                building_index=int(hit_data["building_index"]),
                face_index=None if hit_data.get("face_index") is None else int(hit_data["face_index"])
            )

        screen = data.get("screen")
        return cls(
            action=action,
            point=Point2D(float(point_data["x"]), float(point_data["y"])),
            viewport_y=None if data.get("viewport_y") is None else float(data["viewport_y"]),
            screen=None if screen is None else (float(screen[0]), float(screen[1])),
            hit=hit
        )


@dataclass(frozen=True)
class KeyEvent:
    """Keyboard event"""
    key: KeyName
    ctrl: bool = False

    @property
    def is_undo(self) -> bool:
        """Ctrl/Cmd + Z"""
        return self.ctrl and self.key == KeyName.Z
