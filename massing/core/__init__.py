from massing.core.enums import (
    ToolName,
    ToolStateKind,
    PointerAction,
    KeyName,
    ProjectionType,
    CornerPosition,
    CsvRowType,
    BuildingField,
    ResponseKey,
)
from massing.core.editor_constants import EditorConstants, EDITOR_CONSTANTS
from massing.core.exceptions import (
    MassingException,
    GeometryError,
    ImportPayloadError,
    ExportError,
    DocumentNotFoundError,
)

__all__ = [
    "ToolName",
    "ToolStateKind",
    "PointerAction",
    "KeyName",
    "ProjectionType",
    "CornerPosition",
    "CsvRowType",
    "BuildingField",
    "ResponseKey",
    "EditorConstants",
    "EDITOR_CONSTANTS",
    "MassingException",
    "GeometryError",
    "ImportPayloadError",
    "ExportError",
    "DocumentNotFoundError",
]
