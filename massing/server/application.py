"""Server application implementation"""
from datetime import date
from typing import Dict, Any
from flask import Flask, Response, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest
import logging

from massing import __version__
from massing.core import KeyName, ResponseKey, ToolName
from massing.components.editor_engine import EditorEngine
from massing.models import KeyEvent, PointerEvent
from massing.server.enums import ContentType, Endpoint, EventType, HTTPStatus, ServiceName
from massing.server.services import DocumentServiceFactory
from massing.server.controllers import ServerController
from massing.server.decorators import endpoint_error_handler
from massing.server.schemas import (
    CreateDocumentRequest,
    SetToolRequest,
    EventRequest,
    SelectRequest,
    ExtrudeRequest,
    FloorsRequest,
    buildings_from_schema,
)
from massing.server.openapi import OpenAPISpecGenerator


logger = logging.getLogger("logger")


class ServerApplication:
    """Flask application exposing one EditorEngine per document"""

    def __init__(self, app_name: str = "Massing Editor") -> None:
        """
        Initialize the Flask application with dependencies.

        Args:
            app_name: Name of the Flask application
        """
        self._app: Flask = Flask(app_name)
        CORS(self._app)
        self._controller: ServerController | None = None
        self._documents = None
        self._setup_dependencies()
        self._setup_routes()

    @property
    def app(self) -> Flask:
        return self._app

    def _setup_dependencies(self) -> None:
        """Setup all dependencies using dependency injection"""
        self._documents = DocumentServiceFactory.get_instance()
        self._controller = ServerController(services={
            ServiceName.DOCUMENT_SERVICE.value: self._documents
        })
        self._controller.initialize()

    def _setup_routes(self) -> None:
        """Setup Flask routes"""
        rules = [
            ("/", Endpoint.STATUS, self._get_status, ["GET"]),
            ("/documents", Endpoint.CREATE_DOCUMENT, self._create_document, ["POST"]),
            ("/documents/<document_id>", Endpoint.GET_DOCUMENT, self._get_document, ["GET"]),
            ("/documents/<document_id>", Endpoint.CLOSE_DOCUMENT, self._close_document, ["DELETE"]),
            ("/documents/<document_id>/tool", Endpoint.SET_TOOL, self._set_tool, ["POST"]),
            ("/documents/<document_id>/events", Endpoint.EVENTS, self._handle_event, ["POST"]),
            ("/documents/<document_id>/select", Endpoint.SELECT, self._select, ["POST"]),
            ("/documents/<document_id>/extrude", Endpoint.EXTRUDE, self._extrude, ["POST"]),
            ("/documents/<document_id>/floors", Endpoint.FLOORS, self._stack_floors, ["POST"]),
            ("/documents/<document_id>/delete", Endpoint.DELETE, self._delete_selected, ["POST"]),
            ("/documents/<document_id>/undo", Endpoint.UNDO, self._undo, ["POST"]),
            ("/documents/<document_id>/clear", Endpoint.CLEAR, self._clear, ["POST"]),
            ("/documents/<document_id>/import", Endpoint.IMPORT, self._import_site, ["POST"]),
            ("/documents/<document_id>/measurements", Endpoint.MEASUREMENTS, self._measurements, ["GET"]),
            ("/documents/<document_id>/export/grid", Endpoint.EXPORT_GRID, self._export_grid, ["GET"]),
            ("/documents/<document_id>/export/csv", Endpoint.EXPORT_CSV, self._export_csv, ["GET"]),
            ("/documents/<document_id>/export/zones", Endpoint.EXPORT_ZONES, self._export_zones, ["GET"]),
        ]
        for rule, endpoint, view, methods in rules:
            self._app.add_url_rule(rule, endpoint.value, view, methods=methods)

        # Documentation endpoints
        self._app.add_url_rule("/openapi.json", "openapi_spec", self._openapi_spec, methods=["GET"])
        self._app.add_url_rule("/docs", "swagger_ui", self._swagger_ui, methods=["GET"])

    def _document_response(self, document_id: str, engine: EditorEngine,
                           status: HTTPStatus = HTTPStatus.OK, **extra: Any) -> tuple:
        body = {
            ResponseKey.DOCUMENT_ID.value: document_id,
            ResponseKey.SNAPSHOT.value: engine.snapshot().to_dict(),
        }
        body.update(extra)
        return jsonify(body), status.value

    def _get_status(self) -> Response:
        """
        Get server status endpoint.

        Returns:
            JSON response with server status information
        """
        return jsonify(self._controller.get_status())

    @endpoint_error_handler(Endpoint.CREATE_DOCUMENT, CreateDocumentRequest)
    def _create_document(self, data: CreateDocumentRequest) -> tuple:
        """
        Open a new document.

        Expected JSON payload (all fields optional):
        {
            "buildings": [{"vertices": [[x, y], ...], "height": 0.1, "isMain": false}, ...],
            "roads": [[[x, y], ...], ...]
        }
        """
        document_id = self._documents.create(buildings_from_schema(data.buildings), data.roads)
        with self._documents.session(document_id) as engine:
            return self._document_response(
                document_id, engine, HTTPStatus.CREATED, **{ResponseKey.CREATED.value: True}
            )

    @endpoint_error_handler(Endpoint.GET_DOCUMENT)
    def _get_document(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.CLOSE_DOCUMENT)
    def _close_document(self, data: Dict[str, Any], document_id: str) -> tuple:
        self._documents.close(document_id)
        return jsonify({
            ResponseKey.DOCUMENT_ID.value: document_id,
            ResponseKey.DOCUMENTS.value: len(self._documents.document_ids())
        }), HTTPStatus.OK.value

    @endpoint_error_handler(Endpoint.SET_TOOL, SetToolRequest)
    def _set_tool(self, data: SetToolRequest, document_id: str) -> tuple:
        try:
            tool = ToolName(data.tool)
        except ValueError:
            raise BadRequest(
                f"Invalid tool '{data.tool}'. Valid tools: {', '.join(t.value for t in ToolName)}"
            )
        with self._documents.session(document_id) as engine:
            engine.set_tool(tool)
            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.EVENTS, EventRequest)
    def _handle_event(self, data: EventRequest, document_id: str) -> tuple:
        """
        Feed one pointer or key event to the document's tool state machine.

        Expected JSON payload:
        {
            "type": "pointer_down" | "pointer_move" | "pointer_up" | "key_down",
            "point": {"x": 0.0, "y": 0.0},          (pointer events)
            "viewport_y": 0.5,                      (optional, extrude drag)
            "screen": [120, 340],                   (optional, pan)
            "hit": {"building_index": 1, "face_index": 0},  (optional)
            "key": "Escape", "ctrl": false          (key events)
        }
        """
        try:
            event_type = EventType(data.type)
        except ValueError:
            raise BadRequest(
                f"Invalid event type '{data.type}'. Valid types: {', '.join(t.value for t in EventType)}"
            )

        with self._documents.session(document_id) as engine:
            if event_type == EventType.KEY_DOWN:
                if data.key is None:
                    raise BadRequest("Key events require 'key'")
                try:
                    key = KeyName.from_value(data.key)
                except ValueError:
                    raise BadRequest(f"Unsupported key '{data.key}'")
                engine.key_down(KeyEvent(key=key, ctrl=data.ctrl))
            else:
                if data.point is None:
                    raise BadRequest("Pointer events require 'point'")
                engine.handle_pointer(PointerEvent.from_dict(data.model_dump()))

            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.SELECT, SelectRequest)
    def _select(self, data: SelectRequest, document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            engine.select(data.index)
            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.EXTRUDE, ExtrudeRequest)
    def _extrude(self, data: ExtrudeRequest, document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            engine.extrude(data.index, data.height)
            logger.info(f"Document {document_id}: building {data.index} extruded to {data.height}")
            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.FLOORS, FloorsRequest)
    def _stack_floors(self, data: FloorsRequest, document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            created = engine.stack_floors(data.count, data.height, data.index)
            return self._document_response(document_id, engine, **{ResponseKey.CREATED.value: created})

    @endpoint_error_handler(Endpoint.DELETE)
    def _delete_selected(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            removed = engine.delete_selected()
            return self._document_response(document_id, engine, **{ResponseKey.REMOVED.value: removed})

    @endpoint_error_handler(Endpoint.UNDO)
    def _undo(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            undone = engine.undo()
            return self._document_response(document_id, engine, **{ResponseKey.UNDONE.value: undone})

    @endpoint_error_handler(Endpoint.CLEAR)
    def _clear(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            engine.clear()
            return self._document_response(document_id, engine)

    @endpoint_error_handler(Endpoint.IMPORT)
    def _import_site(self, data: Dict[str, Any], document_id: str) -> tuple:
        """
        Replace the document with an imported site.

        Expected JSON payload:
        {
            "boundary": [[lon, lat], ...],
            "buildings": [{"vertices": [[lon, lat], ...], "height": 12.0}, ...],
            "roads": [[[lon, lat], ...], ...],
            "bufferDistance": 250,
            "projection": "web_mercator" | "equirectangular",
            "origin": {"lat": 12.97, "lon": 77.59}
        }
        """
        with self._documents.session(document_id) as engine:
            site = engine.load_site(data)
            return self._document_response(document_id, engine, location=site.location)

    @endpoint_error_handler(Endpoint.MEASUREMENTS)
    def _measurements(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            body = engine.site_measurements().to_dict()
            body["gridPoints"] = engine.site_grid_points()
            body["buildingsInside"] = engine.buildings_inside_site()
        return jsonify(body), HTTPStatus.OK.value

    @endpoint_error_handler(Endpoint.EXPORT_GRID)
    def _export_grid(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            document = engine.export_grid_coordinates()
        return jsonify(document), HTTPStatus.OK.value

    @endpoint_error_handler(Endpoint.EXPORT_CSV)
    def _export_csv(self, data: Dict[str, Any], document_id: str) -> Response:
        with self._documents.session(document_id) as engine:
            content = engine.export_csv()
        return Response(
            content,
            mimetype=ContentType.CSV.value,
            headers={"Content-Disposition": f"attachment; filename=site_coordinates_{date.today().isoformat()}.csv"}
        )

    @endpoint_error_handler(Endpoint.EXPORT_ZONES)
    def _export_zones(self, data: Dict[str, Any], document_id: str) -> tuple:
        with self._documents.session(document_id) as engine:
            document = engine.export_zones()
        return jsonify(document), HTTPStatus.OK.value

    def _openapi_spec(self) -> Response:
        """Return OpenAPI 3.0 specification."""
        spec = OpenAPISpecGenerator.generate_spec(
            title="Massing Editor API",
            description="Building footprint drafting, extrusion, floor stacking and grid/zone export",
            version=__version__,
            base_url="/"
        )
        return jsonify(spec)

    def _swagger_ui(self) -> str:
        """
        Return Swagger UI HTML.

        Interactive API documentation at /docs
        """
        return """
        <!DOCTYPE html>
        <html>
        <head>
            <title>Massing Editor API - Swagger UI</title>
            <meta charset="utf-8"/>
            <meta name="viewport" content="width=device-width, initial-scale=1">
            <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@3/swagger-ui.css">
        </head>
        <body>
            <div id="swagger-ui"></div>
            <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@3/swagger-ui-bundle.js"></script>
            <script>
            window.onload = function() {
                window.ui = SwaggerUIBundle({
                    url: "/openapi.json",
                    dom_id: '#swagger-ui',
                    presets: [SwaggerUIBundle.presets.apis],
                    layout: "BaseLayout"
                });
            };
            </script>
        </body>
        </html>
        """
