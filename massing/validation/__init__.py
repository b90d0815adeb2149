"""Validation module for building and parameter validation"""
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType
from massing.validation.parameter_validators import (
    HeightValidator,
    PolygonValidator,
    FloorCountValidator,
    IndexValidator,
)
from massing.validation.building_validators import BuildingValidator, CollectionValidator

__all__ = [
    "BaseValidator",
    "ValidationResult",
    "ValidationError",
    "ValidationErrorType",
    "HeightValidator",
    "PolygonValidator",
    "FloorCountValidator",
    "IndexValidator",
    "BuildingValidator",
    "CollectionValidator",
]
