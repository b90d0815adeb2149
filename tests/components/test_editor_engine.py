"""Tests for the per-document EditorEngine"""
import pytest

from massing.core import ExportError, ImportPayloadError, KeyName, PointerAction, ToolName
from massing.components.editor_engine import EditorEngine
from massing.components.geometry import Point2D
from massing.models import Building, Hit, KeyEvent, PointerEvent
from massing.validation import ValidationError, ValidationErrorType

SITE = Building(vertices=[(0, 0), (10, 0), (10, 10), (0, 10)], height=0.0, is_main=True)


def pointer(action, x, y, hit=None):
    return PointerEvent(action, Point2D(x, y), hit=hit)


def draw_rectangle(engine, x0, y0, x1, y1):
    engine.set_tool(ToolName.RECTANGLE)
    engine.pointer_down(pointer(PointerAction.DOWN, x0, y0))
    engine.pointer_move(pointer(PointerAction.MOVE, x1, y1))
    engine.pointer_up(pointer(PointerAction.UP, x1, y1))


@pytest.fixture
def engine():
    return EditorEngine([SITE])


class TestSceneCenter:
    """Test suite for scene centering"""

    def test_empty_scene(self):
        """Test an empty document is centered on the origin"""
        assert EditorEngine().scene_center() == (0.0, 0.0)

    def test_roads_count_toward_center(self):
        """Test road vertices contribute to the center"""
        engine = EditorEngine([SITE], roads=[[(20, 0), (20, 10)]])
        assert engine.scene_center() == pytest.approx((10.0, 5.0))


class TestDrawingInsideSite:
    """Test drawing shapes and site containment"""

    def test_inside_and_outside(self, engine):
        """Test one rectangle inside the site and one outside"""
        # center is (5, 5) with only the site present
        draw_rectangle(engine, -3, -3, -1, -1)
        assert engine.buildings[1].vertices == ((2.0, 2.0), (4.0, 2.0), (4.0, 4.0), (2.0, 4.0))

        # center moves to (4, 4) once the first rectangle exists
        draw_rectangle(engine, 16, 16, 18, 18)
        assert engine.buildings[2].vertices[0] == (20.0, 20.0)

        assert engine.buildings_inside_site() == [1]
        assert engine.selected_index == 2

    def test_drawn_shape_extrudes_once(self, engine):
        """Test a drawn shape extrudes to an exact height only once"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.extrude(1, 12.0)
        assert engine.buildings[1].height == 12.0

        with pytest.raises(ValidationError) as exc_info:
            engine.extrude(1, 15.0)
        assert exc_info.value.error_type == ValidationErrorType.INVALID_STATE

    def test_no_site_means_nothing_inside(self):
        """Test containment without a site is empty"""
        assert EditorEngine().buildings_inside_site() == []


class TestEditing:
    """Test suite for engine editing operations"""

    def test_stack_and_delete(self, engine):
        """Test stacking floors, then deleting the base with its floors"""
        draw_rectangle(engine, -3, -3, -1, -1)
        created = engine.stack_floors(4, 3.0, base_index=1)
        assert created == [2, 3, 4]

        engine.select(1)
        removed = engine.delete_selected()

        assert removed == [1, 2, 3, 4]
        assert len(engine.buildings) == 1
        assert engine.selected_index is None

    def test_undo_restores_previous_collection(self, engine):
        """Test undo reverses the latest edit"""
        draw_rectangle(engine, -3, -3, -1, -1)
        assert engine.undo() is True
        assert engine.buildings == (SITE,)

    def test_clear_is_undoable(self, engine):
        """Test clear removes everything and undo brings it back"""
        draw_rectangle(engine, -3, -3, -1, -1)
        before = engine.buildings
        engine.clear()

        assert engine.buildings == ()
        assert engine.tools.active_tool == ToolName.SELECT
        engine.undo()
        assert engine.buildings == before

    def test_key_events(self, engine):
        """Test Escape and Ctrl+Z through the engine"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.set_tool(ToolName.POLYGON)
        engine.key_down(KeyEvent(KeyName.ESCAPE))
        assert engine.tools.active_tool == ToolName.SELECT

        engine.key_down(KeyEvent(KeyName.Z, ctrl=True))
        assert len(engine.buildings) == 1


class TestMeasurements:
    """Test suite for site measurements"""

    def test_measurements(self, engine):
        """Test side lengths, perimeter and area of the site"""
        measurements = engine.site_measurements()

        assert measurements.number_of_sides == 4
        assert measurements.total_perimeter == pytest.approx(40.0)
        assert measurements.area == pytest.approx(100.0)
        assert measurements.to_dict()["sides"][0] == {
            "start": 0, "end": 1, "length": 10.0, "startPoint": [0.0, 0.0], "endPoint": [10.0, 0.0]
        }

    def test_grid_points(self, engine):
        """Test site vertices quantized around the scene center"""
        points = engine.site_grid_points()
        assert points[0] == {"index": 0, "grid": [-2, -2]}
        assert points[2] == {"index": 2, "grid": [3, 3]}

    def test_measurements_need_site(self):
        """Test measurements without a site raise ExportError"""
        with pytest.raises(ExportError):
            EditorEngine().site_measurements()


class TestImport:
    """Test suite for loading a site into the engine"""

    PAYLOAD = {
        "boundary": [[0.0, 0.0], [0.001, 0.0], [0.001, 0.001], [0.0, 0.001]],
        "projection": "equirectangular",
        "buildings": [{"vertices": [[0.0002, 0.0002], [0.0004, 0.0002], [0.0004, 0.0004]]}],
        "roads": [[[0.0, -0.0001], [0.001, -0.0001]]],
    }

    def test_load_replaces_contents(self, engine):
        """Test an import replaces buildings and roads and can be undone"""
        draw_rectangle(engine, -3, -3, -1, -1)
        before = engine.buildings
        site = engine.load_site(self.PAYLOAD)

        assert len(engine.buildings) == 2
        assert engine.buildings[0].is_main
        assert len(engine.roads) == 1
        assert engine.selected_index is None
        assert engine.export_zones()["location"] == site.location

        engine.undo()
        assert engine.buildings == before

    def test_bad_payload_changes_nothing(self, engine):
        """Test a malformed payload leaves the document untouched"""
        draw_rectangle(engine, -3, -3, -1, -1)
        before = engine.buildings
        depth = engine.store.history_depth

        with pytest.raises(ImportPayloadError):
            engine.load_site({"boundary": [[0, 0]]})

        assert engine.buildings == before
        assert engine.store.history_depth == depth


class TestExportsAndSnapshot:
    """Test suite for exports and render snapshots"""

    def test_exports(self, engine):
        """Test the three exports include the drawn building"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.extrude(1, 6.0)

        assert [b["id"] for b in engine.export_grid_coordinates()["buildings"]] == [1]
        assert engine.export_csv().splitlines()[0] == "Type,ID,X,Y,Z,Additional_Info"
        assert len(engine.export_zones()["buildings"]) == 1

    def test_exports_need_site(self):
        """Test exports without a site raise ExportError"""
        engine = EditorEngine()
        with pytest.raises(ExportError):
            engine.export_grid_coordinates()
        with pytest.raises(ExportError):
            engine.export_csv()
        with pytest.raises(ExportError):
            engine.export_zones()

    def test_snapshot(self, engine):
        """Test the snapshot reflects selection, tool state and center"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.set_tool(ToolName.MOVE)
        snapshot = engine.snapshot().to_dict()

        assert len(snapshot["buildings"]) == 2
        assert snapshot["selectedIndex"] == 1
        assert snapshot["activeTool"] == "move"
        assert snapshot["toolState"]["kind"] == "move"
        assert snapshot["center"] == pytest.approx([4.0, 4.0])
        assert snapshot["panOffset"] == [0.0, 0.0]

    def test_hit_selects(self, engine):
        """Test a pointer hit in Select mode selects a building"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.select(None)
        engine.handle_pointer(pointer(PointerAction.DOWN, 0, 0, hit=Hit(1)))
        assert engine.selected_index == 1

    def test_close(self, engine):
        """Test closing drops all document state"""
        draw_rectangle(engine, -3, -3, -1, -1)
        engine.close()

        assert engine.closed
        assert engine.buildings == ()
        assert engine.store.history_depth == 0
