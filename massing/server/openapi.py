"""OpenAPI specification generator from Pydantic models for auto-documentation"""
from typing import Dict, Any, Optional
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


def _json_body(schema_name: str) -> Dict[str, Any]:
    return {
        "required": True,
        "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{schema_name}"}}}
    }


def _responses(success: str, content_type: str = "application/json", not_found: bool = True) -> Dict[str, Any]:
    error = {"application/json": {"schema": {"$ref": "#/components/schemas/ErrorResponse"}}}
    responses = {
        "200": {"description": success, "content": {content_type: {"schema": {"type": "object"}}}},
        "400": {"description": "Invalid request or rejected edit", "content": error},
        "500": {"description": "Internal server error", "content": error},
    }
    if not_found:
        responses["404"] = {"description": "Document not found", "content": error}
    return responses


DOCUMENT_ID_PARAMETER = {
    "name": "document_id",
    "in": "path",
    "required": True,
    "schema": {"type": "string"},
    "description": "Document id returned by POST /documents"
}


class OpenAPISpecGenerator:
    """Generates OpenAPI 3.0 specification for the Flask API using Pydantic models"""

    @staticmethod
    def generate_spec(
        title: str = "Massing Editor API",
        description: str = "Building footprint drafting, extrusion, floor stacking and grid/zone export",
        version: str = "1.0.0",
        base_url: str = "/"
    ) -> Dict[str, Any]:
        """
        Generate OpenAPI 3.0 specification from Pydantic models.

        Args:
            title: API title
            description: API description
            version: API version
            base_url: Base URL for API endpoints

        Returns:
            OpenAPI 3.0 specification dict
        """
        return {
            "openapi": "3.0.0",
            "info": {
                "title": title,
                "description": description,
                "version": version,
            },
            "servers": [{"url": base_url, "description": "Server API"}],
            "paths": OpenAPISpecGenerator._generate_paths(),
            "components": {"schemas": OpenAPISpecGenerator._generate_schemas()}
        }

    @staticmethod
    def _operation(summary: str, tag: str, request_schema: Optional[str] = None,
                   success: str = "Document snapshot", content_type: str = "application/json") -> Dict[str, Any]:
        operation: Dict[str, Any] = {
            "summary": summary,
            "tags": [tag],
            "parameters": [DOCUMENT_ID_PARAMETER],
            "responses": _responses(success, content_type),
        }
        if request_schema:
            operation["requestBody"] = _json_body(request_schema)
        return operation

    @staticmethod
    def _generate_paths() -> Dict[str, Any]:
        """Generate API paths from endpoint definitions"""
        op = OpenAPISpecGenerator._operation
        return {
            "/": {
                "get": {
                    "summary": "Server status",
                    "tags": ["Status"],
                    "responses": {"200": {"description": "Server and service status"}}
                }
            },
            "/documents": {
                "post": {
                    "summary": "Open a document",
                    "tags": ["Documents"],
                    "requestBody": {**_json_body("CreateDocumentRequest"), "required": False},
                    "responses": {
                        **_responses("Document created", not_found=False),
                        "201": {
                            "description": "Document created",
                            "content": {"application/json": {
                                "schema": {"$ref": "#/components/schemas/DocumentCreatedResponse"}
                            }}
                        }
                    }
                }
            },
            "/documents/{document_id}": {
                "get": op("Render snapshot of a document", "Documents"),
                "delete": op("Close a document", "Documents", success="Document closed"),
            },
            "/documents/{document_id}/tool": {"post": op("Arm a tool", "Tools", "SetToolRequest")},
            "/documents/{document_id}/events": {"post": op("Feed a pointer or key event", "Tools", "EventRequest")},
            "/documents/{document_id}/select": {"post": op("Select a building", "Editing", "SelectRequest")},
            "/documents/{document_id}/extrude": {"post": op("Extrude a flat building", "Editing", "ExtrudeRequest")},
            "/documents/{document_id}/floors": {"post": op("Stack floors", "Editing", "FloorsRequest")},
            "/documents/{document_id}/delete": {"post": op("Delete the selected building", "Editing")},
            "/documents/{document_id}/undo": {"post": op("Undo the last edit", "Editing")},
            "/documents/{document_id}/clear": {"post": op("Remove every building", "Editing")},
            "/documents/{document_id}/import": {"post": op("Import a geodetic site", "Import")},
            "/documents/{document_id}/measurements": {
                "get": op("Site side lengths, perimeter and area", "Export", success="Site measurements")
            },
            "/documents/{document_id}/export/grid": {
                "get": op("Grid-coordinate export", "Export", success="Grid coordinates document")
            },
            "/documents/{document_id}/export/csv": {
                "get": op("CSV coordinate export", "Export", success="CSV file", content_type="text/csv")
            },
            "/documents/{document_id}/export/zones": {
                "get": op("Zone/surface export", "Export", success="Zones document")
            },
        }

    @staticmethod
    def _generate_schemas() -> Dict[str, Any]:
        """Generate component schemas from Pydantic models"""
        return {
            "BuildingSchema": BuildingSchema.model_json_schema(),
            "CreateDocumentRequest": CreateDocumentRequest.model_json_schema(),
            "SetToolRequest": SetToolRequest.model_json_schema(),
            "EventRequest": EventRequest.model_json_schema(),
            "SelectRequest": SelectRequest.model_json_schema(),
            "ExtrudeRequest": ExtrudeRequest.model_json_schema(),
            "FloorsRequest": FloorsRequest.model_json_schema(),
            "DocumentCreatedResponse": DocumentCreatedResponse.model_json_schema(),
            "ErrorResponse": ErrorResponse.model_json_schema(),
        }
