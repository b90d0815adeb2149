"""Tests for pointer and keyboard event models"""
import pytest

from massing.core import KeyName, PointerAction
from massing.components.geometry import Point2D
from massing.models import Hit, KeyEvent, PointerEvent


class TestPointerEvent:
    """Test suite for PointerEvent parsing"""

    def test_minimal_event(self):
        """Test an event with only type and point"""
        event = PointerEvent.from_dict({"type": "pointer_down", "point": {"x": 1, "y": 2}})

        assert event.action == PointerAction.DOWN
        assert event.point == Point2D(1.0, 2.0)
        assert event.hit is None
        assert event.viewport_y is None

    def test_full_event(self):
        """Test an event carrying hit, viewport and screen data"""
        event = PointerEvent.from_dict({
            "type": "pointer_move",
            "point": {"x": 0, "y": 0},
            "viewport_y": 0.25,
            "screen": [100, 200],
            "hit": {"building_index": 3, "face_index": 1},
        })

        assert event.hit == Hit(building_index=3, face_index=1)
        assert event.viewport_y == 0.25
        assert event.screen == (100.0, 200.0)

    def test_hit_without_face(self):
        """Test face_index is optional"""
        event = PointerEvent.from_dict({"type": "pointer_up", "point": {"x": 0, "y": 0}, "hit": {"building_index": 0}})
        assert event.hit.face_index is None

    def test_missing_type(self):
        """Test a missing type raises ValueError"""
        with pytest.raises(ValueError):
            PointerEvent.from_dict({"point": {"x": 0, "y": 0}})

    def test_unknown_type(self):
        """Test an unknown type raises ValueError"""
        with pytest.raises(ValueError):
            PointerEvent.from_dict({"type": "click", "point": {"x": 0, "y": 0}})

    def test_missing_point(self):
        """Test a missing point raises ValueError"""
        with pytest.raises(ValueError):
            PointerEvent.from_dict({"type": "pointer_down"})


class TestKeyEvent:
    """Test suite for KeyEvent"""

    def test_undo_needs_ctrl(self):
        """Test only Ctrl+Z is an undo"""
        assert KeyEvent(KeyName.Z, ctrl=True).is_undo
        assert not KeyEvent(KeyName.Z).is_undo
        assert not KeyEvent(KeyName.ESCAPE, ctrl=True).is_undo

    def test_key_name_accepts_upper_case_z(self):
        """Test 'Z' resolves like 'z'"""
        assert KeyName.from_value("Z") == KeyName.Z
        assert KeyName.from_value("Escape") == KeyName.ESCAPE
        with pytest.raises(ValueError):
            KeyName.from_value("Tab")
