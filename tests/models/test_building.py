"""Tests for the Building model and its wire format"""
import pytest

from massing.models import Building, to_ring
from massing.components.geometry import Point2D

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


class TestBuilding:
    """Test suite for Building"""

    def test_vertices_become_immutable_ring(self):
        """Test list input is converted to a tuple of float tuples"""
        building = Building(vertices=[[0, 0], [1, 0], [1, 1]], height=1)
        assert building.vertices == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))

    def test_flat_threshold(self):
        """Test heights up to 0.1 are flat"""
        assert Building(vertices=SQUARE, height=0.1).is_flat
        assert not Building(vertices=SQUARE, height=0.2).is_flat

    def test_floor_metadata(self):
        """Test floor level helpers"""
        ground = Building(vertices=SQUARE, height=3.0)
        floor = Building(vertices=SQUARE, height=3.0, floor_level=2, base_building=4)

        assert not ground.is_floor
        assert ground.level == 0
        assert ground.group_index(7) == 7
        assert floor.is_floor
        assert floor.level == 2
        assert floor.group_index(9) == 4

    def test_translated_moves_buffer(self):
        """Test translation shifts vertices and buffer together"""
        building = Building(vertices=SQUARE, height=1.0, buffer=[(-1, -1), (11, -1), (11, 11), (-1, 11)])
        moved = building.translated(2, 3)

        assert moved.vertices[0] == (2.0, 3.0)
        assert moved.buffer[0] == (1.0, 2.0)
        assert building.vertices[0] == (0.0, 0.0)

    def test_with_changes_returns_copy(self):
        """Test with_changes leaves the original untouched"""
        building = Building(vertices=SQUARE, height=1.0)
        taller = building.with_changes(height=5.0)

        assert taller.height == 5.0
        assert building.height == 1.0

    def test_to_dict_uses_wire_names(self):
        """Test serialization omits unset optional fields"""
        data = Building(vertices=SQUARE, height=0.0, is_main=True).to_dict()

        assert data == {
            "vertices": [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]],
            "height": 0.0,
            "isMain": True,
        }

    def test_from_dict(self):
        """Test parsing a floor from its wire form"""
        building = Building.from_dict({
            "vertices": SQUARE,
            "height": 3.0,
            "floorLevel": 1,
            "baseBuilding": 0,
        })

        assert building.floor_level == 1
        assert building.base_building == 0
        assert building == Building.from_dict(building.to_dict())

    def test_from_dict_missing_fields(self):
        """Test vertices and height are required"""
        with pytest.raises(ValueError):
            Building.from_dict({"height": 1.0})
        with pytest.raises(ValueError):
            Building.from_dict({"vertices": SQUARE})

    def test_patch_from_wire_rejects_unknown(self):
        """Test unknown patch keys raise ValueError"""
        assert Building.patch_from_wire({"isMain": False, "height": 2}) == {"is_main": False, "height": 2}
        with pytest.raises(ValueError):
            Building.patch_from_wire({"roof": "gable"})

    def test_to_ring_accepts_points(self):
        """Test to_ring reads objects with x and y"""
        assert to_ring([Point2D(1, 2), (3, 4)]) == ((1.0, 2.0), (3.0, 4.0))

    def test_to_ring_rejects_short_points(self):
        """Test a point with a single coordinate raises ValueError instead of IndexError"""
        with pytest.raises(ValueError, match="index 1"):
            to_ring([(0, 0), (1,), (2, 2)])
