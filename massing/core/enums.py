from enum import Enum


class ToolName(Enum):
    """Toolbar tools a user can arm"""
    SELECT = "select"
    MOVE = "move"
    PAN = "pan"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    POLYGON = "polygon"
    PUSH_PULL = "pushpull"
    EXTRUDE = "extrude"
    FLOORS = "floors"


class ToolStateKind(Enum):
    """Discriminator of the tool state machine's tagged union"""
    SELECT = "select"
    MOVE = "move"
    PAN = "pan"
    DRAWING_RECTANGLE = "drawing_rectangle"
    DRAWING_CIRCLE = "drawing_circle"
    DRAWING_POLYGON = "drawing_polygon"
    PUSH_PULLING = "push_pulling"
    EXTRUDE_DRAGGING = "extrude_dragging"
    FLOOR_STACK_PENDING = "floor_stack_pending"


class PointerAction(Enum):
    """Pointer event types reported by the rendering collaborator"""
    DOWN = "pointer_down"
    MOVE = "pointer_move"
    UP = "pointer_up"


class KeyName(Enum):
    """Keyboard keys the engine reacts to"""
    ESCAPE = "Escape"
    ENTER = "Enter"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    Z = "z"

    @classmethod
    def from_value(cls, value: str) -> 'KeyName':
        """
        Resolve a key name, accepting upper case 'Z'

        Args:
            value: Key string as reported by the host

        Returns:
            Matching KeyName

        Raises:
            ValueError: If the key is not handled by the engine
        """
        if value == "Z":
            return cls.Z
        return cls(value)


class ProjectionType(Enum):
    """Geodetic to planar projection strategies"""
    WEB_MERCATOR = "web_mercator"
    EQUIRECTANGULAR = "equirectangular"


class CornerPosition(Enum):
    """Vertical position of an exported corner record"""
    BASE = "base"
    TOP = "top"


class CsvRowType(Enum):
    """Row types of the CSV coordinate export"""
    SITE_BOUNDARY = "Site_Boundary"
    BUILDING = "Building"
    ROAD = "Road"


class BuildingField(Enum):
    """Serialized Building field names"""
    VERTICES = "vertices"
    HEIGHT = "height"
    IS_MAIN = "isMain"
    BUFFER = "buffer"
    FLOOR_LEVEL = "floorLevel"
    BASE_BUILDING = "baseBuilding"


class ResponseKey(Enum):
    """API response keys"""
    ERROR = "error"
    ERROR_TYPE = "error_type"
    STATUS = "status"
    SERVICES = "services"
    DOCUMENT_ID = "document_id"
    DOCUMENTS = "documents"
    INDEX = "index"
    CREATED = "created"
    REMOVED = "removed"
    UNDONE = "undone"
    SNAPSHOT = "snapshot"
