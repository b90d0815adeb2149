"""API request/response models using Pydantic for type safety and validation in Flask"""
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field


class BuildingSchema(BaseModel):
    """Building in its camelCase wire representation"""
    vertices: List[Tuple[float, float]] = Field(..., min_length=3, description="Footprint [[x1, y1], [x2, y2], ...]")
    height: float = Field(..., description="Extrusion height; <= 0.1 means a flat shape")
    isMain: bool = Field(default=False, description="Whether this building is the site boundary")
    buffer: Optional[List[Tuple[float, float]]] = Field(default=None, description="Optional offset polygon")
    floorLevel: Optional[int] = Field(default=None, ge=0, description="Level inside a floor stack")
    baseBuilding: Optional[int] = Field(default=None, ge=0, description="Index of the stack foundation")


class CreateDocumentRequest(BaseModel):
    """
    Document creation request.

    Both fields are optional; an empty body creates an empty document.
    """
    buildings: List[BuildingSchema] = Field(default_factory=list, description="Initial buildings")
    roads: List[List[Tuple[float, float]]] = Field(default_factory=list, description="Road polylines")

    class Config:
        json_schema_extra = {
            "example": {
                "buildings": [
                    {"vertices": [[0, 0], [10, 0], [10, 10], [0, 10]], "height": 0, "isMain": True},
                    {"vertices": [[2, 2], [4, 2], [4, 4], [2, 4]], "height": 0.1}
                ],
                "roads": [[[-5, -5], [15, -5]]]
            }
        }


class SetToolRequest(BaseModel):
    tool: str = Field(..., description="select, move, pan, rectangle, circle, polygon, pushpull, extrude or floors")

    class Config:
        json_schema_extra = {"example": {"tool": "rectangle"}}


class PointSchema(BaseModel):
    x: float = Field(..., description="X coordinate (display space)")
    y: float = Field(..., description="Y coordinate (display space)")


class HitSchema(BaseModel):
    building_index: int = Field(..., ge=0, description="Building under the pointer")
    face_index: Optional[int] = Field(default=None, ge=0, description="Footprint edge under the pointer")


class EventRequest(BaseModel):
    """
    One input event.

    Pointer events carry a ground point; key events carry a key name.
    """
    type: str = Field(..., description="pointer_down, pointer_move, pointer_up or key_down")
    point: Optional[PointSchema] = Field(default=None, description="Ground-plane point for pointer events")
    viewport_y: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Vertical viewport fraction")
    screen: Optional[List[float]] = Field(default=None, min_length=2, max_length=2, description="Screen pixels")
    hit: Optional[HitSchema] = Field(default=None, description="Building/face under the pointer")
    key: Optional[str] = Field(default=None, description="Escape, Enter, Backspace, Delete or z")
    ctrl: bool = Field(default=False, description="Ctrl/Cmd modifier held")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "pointer_down",
                "point": {"x": 0.0, "y": 0.0},
                "hit": {"building_index": 1, "face_index": 0}
            }
        }


class SelectRequest(BaseModel):
    index: Optional[int] = Field(default=None, description="Building index, or null to clear")


class ExtrudeRequest(BaseModel):
    index: int = Field(..., ge=0, description="Flat building to extrude")
    height: float = Field(..., description="Exact extrusion height (> 0)")

    class Config:
        json_schema_extra = {"example": {"index": 1, "height": 12.0}}


class FloorsRequest(BaseModel):
    count: int = Field(..., description="Total number of floors including the base (2-20)")
    height: float = Field(..., description="Height of every floor (> 0)")
    index: Optional[int] = Field(default=None, ge=0, description="Base building; defaults to the pending base or selection")

    class Config:
        json_schema_extra = {"example": {"count": 3, "height": 3.5}}


class DocumentCreatedResponse(BaseModel):
    """Body returned by POST /documents"""
    document_id: str = Field(..., description="Id of the new document")
    snapshot: Dict[str, Any] = Field(
        ..., description="Render snapshot: buildings, roads, selectedIndex, activeTool, toolState, center, panOffset"
    )
    created: bool = Field(default=True)

    class Config:
        json_schema_extra = {
            "example": {
                "document_id": "5f2b9c0e8d7a4b1c9e3f6a2d1b0c8e7f",
                "snapshot": {
                    "buildings": [],
                    "roads": [],
                    "selectedIndex": None,
                    "activeTool": "select",
                    "toolState": {"kind": "select", "tool": "select", "active": False},
                    "center": [0.0, 0.0],
                    "panOffset": [0.0, 0.0]
                },
                "created": True
            }
        }


class ErrorResponse(BaseModel):
    """
    Error response model.

    Returned by all endpoints when an error occurs.
    """
    error: str = Field(..., description="Error message")
    error_type: Optional[str] = Field(default=None, description="Error type/class name")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Building 1 is already extruded (height 12.0)",
                "error_type": "invalid_state"
            }
        }


def buildings_from_schema(buildings: List[BuildingSchema]) -> List[Dict[str, Any]]:
    """Wire dicts of validated buildings, without unset optional fields"""
    return [b.model_dump(exclude_none=True) for b in buildings]
