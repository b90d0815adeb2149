from enum import Enum


class ServerStatus(Enum):
    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"


class ServiceStatus(Enum):
    READY = "ready"
    ERROR = "error"


class ContentType(Enum):
    JSON = "application/json"
    CSV = "text/csv"


class HTTPStatus(Enum):
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


class ServiceName(Enum):
    """Service names for dependency injection"""
    DOCUMENT_SERVICE = "document_service"


class EventType(Enum):
    """Input event types accepted by the events endpoint"""
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    KEY_DOWN = "key_down"


class Endpoint(Enum):
    """API endpoint names"""
    STATUS = "status"
    CREATE_DOCUMENT = "create_document"
    GET_DOCUMENT = "get_document"
    CLOSE_DOCUMENT = "close_document"
    SET_TOOL = "set_tool"
    EVENTS = "events"
    SELECT = "select"
    EXTRUDE = "extrude"
    FLOORS = "floors"
    DELETE = "delete"
    UNDO = "undo"
    CLEAR = "clear"
    IMPORT = "import"
    MEASUREMENTS = "measurements"
    EXPORT_GRID = "export_grid"
    EXPORT_CSV = "export_csv"
    EXPORT_ZONES = "export_zones"
