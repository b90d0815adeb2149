"""Parameter validators for individual parameter types"""
from massing.validation.parameter_validators.height_validator import HeightValidator
from massing.validation.parameter_validators.polygon_validator import PolygonValidator
from massing.validation.parameter_validators.floor_count_validator import FloorCountValidator
from massing.validation.parameter_validators.index_validator import IndexValidator

__all__ = [
    "HeightValidator",
    "PolygonValidator",
    "FloorCountValidator",
    "IndexValidator",
]
