"""Server module initialization"""
from massing.server.application import ServerApplication
from massing.server.launcher import ServerLauncher
from massing.server.decorators import endpoint_error_handler
from massing.server.openapi import OpenAPISpecGenerator
from massing.server.schemas import (
    BuildingSchema,
    CreateDocumentRequest,
    SetToolRequest,
    EventRequest,
    SelectRequest,
    ExtrudeRequest,
    FloorsRequest,
    DocumentCreatedResponse,
    ErrorResponse,
)

__all__ = [
    "ServerApplication",
    "ServerLauncher",
    "endpoint_error_handler",
    "OpenAPISpecGenerator",
    "BuildingSchema",
    "CreateDocumentRequest",
    "SetToolRequest",
    "EventRequest",
    "SelectRequest",
    "ExtrudeRequest",
    "FloorsRequest",
    "DocumentCreatedResponse",
    "ErrorResponse",
]
