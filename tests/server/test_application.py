"""Tests for ServerApplication Flask endpoints"""
import pytest
import json

from massing.server.application import ServerApplication
from massing.server.schemas import DocumentCreatedResponse
from massing.server.services import DocumentServiceFactory
from massing.core import ResponseKey

SITE = {"vertices": [[0, 0], [10, 0], [10, 10], [0, 10]], "height": 0, "isMain": True}
FLAT = {"vertices": [[2, 2], [4, 2], [4, 4], [2, 4]], "height": 0.1}


@pytest.fixture
def app():
    """Create ServerApplication test instance with a fresh document registry"""
    DocumentServiceFactory.reset_instance()
    server_app = ServerApplication()
    yield server_app.app
    DocumentServiceFactory.reset_instance()


@pytest.fixture
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def document_id(client):
    """Open a document holding a site and one flat building"""
    response = client.post('/documents', json={"buildings": [SITE, FLAT]})
    return json.loads(response.data)[ResponseKey.DOCUMENT_ID.value]


def post_event(client, document_id, **event):
    return client.post(f'/documents/{document_id}/events', json=event)


class TestStatusAndDocs:
    """Test suite for status and documentation endpoints"""

    def test_status_endpoint_returns_ok(self, client):
        """Test status endpoint returns 200 OK"""
        response = client.get('/')

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["status"] == "running"
        assert result["services"]["document_service"]["documents"] == 0

    def test_openapi_json_endpoint(self, client):
        """Test /openapi.json endpoint returns OpenAPI spec"""
        response = client.get('/openapi.json')

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["openapi"].startswith("3.")
        assert "/documents/{document_id}/events" in result["paths"]

    def test_swagger_ui_endpoint(self, client):
        """Test /docs endpoint returns Swagger UI HTML"""
        response = client.get('/docs')

        assert response.status_code == 200
        assert b"swagger-ui" in response.data


class TestDocumentLifecycle:
    """Test suite for opening, reading and closing documents"""

    def test_create_empty_document(self, client):
        """Test an empty body opens an empty document"""
        response = client.post('/documents')

        assert response.status_code == 201
        result = json.loads(response.data)
        assert result[ResponseKey.CREATED.value] is True
        assert result["snapshot"]["buildings"] == []
        assert result["snapshot"]["activeTool"] == "select"

    def test_create_response_matches_documented_schema(self, client):
        """Test the POST /documents body carries exactly the documented fields"""
        response = client.post('/documents', json={"buildings": [SITE]})
        result = json.loads(response.data)

        spec = json.loads(client.get('/openapi.json').data)
        schema = spec["components"]["schemas"]["DocumentCreatedResponse"]
        assert set(result) == set(schema["properties"])
        assert set(schema["required"]) <= set(result)
        DocumentCreatedResponse.model_validate(result)

    def test_get_document(self, client, document_id):
        """Test reading a document returns its snapshot"""
        response = client.get(f'/documents/{document_id}')

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["document_id"] == document_id
        assert len(result["snapshot"]["buildings"]) == 2

    def test_unknown_document(self, client):
        """Test unknown document ids return 404"""
        response = client.get('/documents/missing')

        assert response.status_code == 404
        result = json.loads(response.data)
        assert result[ResponseKey.ERROR_TYPE.value] == "DocumentNotFoundError"

    def test_close_document(self, client, document_id):
        """Test closing a document removes it"""
        response = client.delete(f'/documents/{document_id}')
        assert response.status_code == 200
        assert json.loads(response.data)["documents"] == 0

        assert client.get(f'/documents/{document_id}').status_code == 404

    def test_create_with_invalid_building(self, client):
        """Test schema violations return 400"""
        response = client.post('/documents', json={"buildings": [{"vertices": [[0, 0]], "height": 1}]})

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "ValidationError"

    @pytest.mark.parametrize("body", [
        {"buildings": [{"vertices": [[0], [1], [2]], "height": 1.0}]},
        {"buildings": [{"vertices": [[0, 0], [1, 0], [1, 1]], "height": 1.0, "buffer": [[0], [1, 1], [2, 2]]}]},
        {"buildings": [{"vertices": [[0, 0, 0], [1, 0, 0], [1, 1, 0]], "height": 1.0}]},
        {"roads": [[[0], [1, 1]]]},
    ])
    def test_create_with_malformed_coordinate_pairs(self, client, body):
        """Test points without exactly two coordinates return 400"""
        response = client.post('/documents', json=body)

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "ValidationError"

    def test_create_with_two_sites(self, client):
        """Test collection rules are enforced on creation"""
        response = client.post('/documents', json={"buildings": [SITE, SITE]})

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "invalid_state"

    def test_malformed_json(self, client):
        """Test a non-JSON body returns 400"""
        response = client.post('/documents', data='{not json', content_type='application/json')
        assert response.status_code == 400


class TestToolEndpoints:
    """Test suite for tool and event endpoints"""

    def test_set_tool(self, client, document_id):
        """Test arming a tool"""
        response = client.post(f'/documents/{document_id}/tool', json={"tool": "rectangle"})

        assert response.status_code == 200
        tool_state = json.loads(response.data)["snapshot"]["toolState"]
        assert tool_state["kind"] == "drawing_rectangle"
        assert tool_state["active"] is False

    def test_invalid_tool(self, client, document_id):
        """Test unknown tools return 400"""
        response = client.post(f'/documents/{document_id}/tool', json={"tool": "lasso"})

        assert response.status_code == 400
        assert "lasso" in json.loads(response.data)[ResponseKey.ERROR.value]

    def test_draw_rectangle_with_events(self, client):
        """Test a rectangle drawn through pointer events"""
        document_id = json.loads(client.post('/documents').data)["document_id"]
        client.post(f'/documents/{document_id}/tool', json={"tool": "rectangle"})
        post_event(client, document_id, type="pointer_down", point={"x": 0, "y": 0})
        post_event(client, document_id, type="pointer_move", point={"x": 4, "y": 3})
        response = post_event(client, document_id, type="pointer_up", point={"x": 4, "y": 3})

        snapshot = json.loads(response.data)["snapshot"]
        assert snapshot["buildings"][0]["vertices"] == [[0.0, 0.0], [4.0, 0.0], [4.0, 3.0], [0.0, 3.0]]
        assert snapshot["selectedIndex"] == 0
        assert snapshot["toolState"]["kind"] == "select"

    def test_extrude_drag_with_events(self, client, document_id):
        """Test the extrude tool through events carrying hit and viewport data"""
        client.post(f'/documents/{document_id}/tool', json={"tool": "extrude"})
        post_event(client, document_id, type="pointer_down", point={"x": 0, "y": 0}, hit={"building_index": 1})
        response = post_event(client, document_id, type="pointer_move", point={"x": 0, "y": 0}, viewport_y=0.5)

        assert json.loads(response.data)["snapshot"]["buildings"][1]["height"] == pytest.approx(25.0)

    def test_key_event(self, client, document_id):
        """Test Escape returns to Select"""
        client.post(f'/documents/{document_id}/tool', json={"tool": "polygon"})
        response = post_event(client, document_id, type="key_down", key="Escape")

        assert json.loads(response.data)["snapshot"]["activeTool"] == "select"

    def test_polygon_enter_too_few_points(self, client, document_id):
        """Test Enter with fewer than 3 polygon points returns 400"""
        client.post(f'/documents/{document_id}/tool', json={"tool": "polygon"})
        post_event(client, document_id, type="pointer_down", point={"x": 0, "y": 0})
        response = post_event(client, document_id, type="key_down", key="Enter")

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "invalid_length"

    @pytest.mark.parametrize("event", [
        {"type": "double_click", "point": {"x": 0, "y": 0}},
        {"type": "pointer_down"},
        {"type": "key_down"},
        {"type": "key_down", "key": "Tab"},
        {"type": "pointer_move", "point": {"x": 0, "y": 0}, "viewport_y": 2.0},
    ])
    def test_invalid_events(self, client, document_id, event):
        """Test malformed events return 400"""
        response = client.post(f'/documents/{document_id}/events', json=event)
        assert response.status_code == 400


class TestEditingEndpoints:
    """Test suite for select, extrude, floors, delete, undo and clear"""

    def test_select_site_rejected(self, client, document_id):
        """Test the site boundary cannot be selected"""
        response = client.post(f'/documents/{document_id}/select', json={"index": 0})

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "invalid_state"

    def test_extrude_once(self, client, document_id):
        """Test extruding to an exact height and rejecting a second extrusion"""
        response = client.post(f'/documents/{document_id}/extrude', json={"index": 1, "height": 12})
        assert response.status_code == 200
        assert json.loads(response.data)["snapshot"]["buildings"][1]["height"] == 12.0

        response = client.post(f'/documents/{document_id}/extrude', json={"index": 1, "height": 15})
        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "invalid_state"

    def test_extrude_missing_height(self, client, document_id):
        """Test request validation on extrude"""
        response = client.post(f'/documents/{document_id}/extrude', json={"index": 1})
        assert response.status_code == 400

    def test_stack_floors(self, client, document_id):
        """Test stacking floors returns the new indices"""
        client.post(f'/documents/{document_id}/select', json={"index": 1})
        response = client.post(f'/documents/{document_id}/floors', json={"count": 3, "height": 3.5})

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result[ResponseKey.CREATED.value] == [2, 3]
        assert result["snapshot"]["buildings"][3]["floorLevel"] == 2
        assert result["snapshot"]["buildings"][3]["baseBuilding"] == 1

    def test_stack_floors_out_of_range(self, client, document_id):
        """Test more than 20 floors is rejected"""
        response = client.post(f'/documents/{document_id}/floors', json={"count": 21, "height": 3, "index": 1})

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "invalid_range"

    def test_delete_and_undo(self, client, document_id):
        """Test deleting the selection and undoing it"""
        client.post(f'/documents/{document_id}/select', json={"index": 1})
        response = client.post(f'/documents/{document_id}/delete')
        assert json.loads(response.data)[ResponseKey.REMOVED.value] == [1]

        response = client.post(f'/documents/{document_id}/undo')
        result = json.loads(response.data)
        assert result[ResponseKey.UNDONE.value] is True
        assert len(result["snapshot"]["buildings"]) == 2

    def test_clear(self, client, document_id):
        """Test clearing the document"""
        response = client.post(f'/documents/{document_id}/clear')
        assert json.loads(response.data)["snapshot"]["buildings"] == []


class TestImportAndExportEndpoints:
    """Test suite for import, measurements and exports"""

    def test_import(self, client, document_id):
        """Test importing a geodetic site"""
        payload = {
            "boundary": [[77.59, 12.97], [77.591, 12.97], [77.591, 12.971], [77.59, 12.971]],
            "buildings": [{"vertices": [[77.5902, 12.9702], [77.5904, 12.9702], [77.5904, 12.9704]]}],
        }
        response = client.post(f'/documents/{document_id}/import', json=payload)

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["location"]["latitude"] == pytest.approx(12.9705)
        assert result["snapshot"]["buildings"][0]["isMain"] is True
        assert len(result["snapshot"]["buildings"]) == 2

    def test_import_bad_payload(self, client, document_id):
        """Test malformed import payloads return 400"""
        response = client.post(f'/documents/{document_id}/import', json={"boundary": [[0, 0]]})

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "ImportPayloadError"

    def test_measurements(self, client, document_id):
        """Test site measurements and containment"""
        response = client.get(f'/documents/{document_id}/measurements')

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["area"] == pytest.approx(100.0)
        assert result["totalPerimeter"] == pytest.approx(40.0)
        assert result["numberOfSides"] == 4
        assert result["buildingsInside"] == [1]
        assert len(result["gridPoints"]) == 4

    def test_export_grid(self, client, document_id):
        """Test the grid export document"""
        response = client.get(f'/documents/{document_id}/export/grid')

        assert response.status_code == 200
        result = json.loads(response.data)
        assert result["metadata"]["coordinateSystem"] == "Grid"
        assert [b["id"] for b in result["buildings"]] == [1]

    def test_export_csv(self, client, document_id):
        """Test the CSV export is served as an attachment"""
        response = client.get(f'/documents/{document_id}/export/csv')

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert "attachment" in response.headers["Content-Disposition"]
        assert response.data.decode().startswith("Type,ID,X,Y,Z,Additional_Info\n")

    def test_export_zones(self, client, document_id):
        """Test the zones export"""
        response = client.get(f'/documents/{document_id}/export/zones')

        assert response.status_code == 200
        assert json.loads(response.data)["buildings"][0]["buildingName"] == "Building 1"

    def test_export_without_site(self, client):
        """Test exports without a site return 400"""
        document_id = json.loads(client.post('/documents', json={"buildings": [FLAT]}).data)["document_id"]
        response = client.get(f'/documents/{document_id}/export/grid')

        assert response.status_code == 400
        assert json.loads(response.data)[ResponseKey.ERROR_TYPE.value] == "ExportError"
