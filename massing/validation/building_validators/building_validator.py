"""Validator for a single Building (SRP: validates only per-building fields)"""
from typing import Any, Dict, Optional
from massing.models.building import Building
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType
from massing.validation.parameter_validators import HeightValidator, PolygonValidator
from massing.core import BuildingField


class BuildingValidator(BaseValidator):
    """
    Validates one Building.

    The site boundary may have height 0; every other building needs a
    strictly positive height.
    """

    def __init__(self):
        self._polygon_validator = PolygonValidator(BuildingField.VERTICES.value)
        self._buffer_validator = PolygonValidator(BuildingField.BUFFER.value)
        self._height_validator = HeightValidator(BuildingField.HEIGHT.value)
        self._main_height_validator = HeightValidator(BuildingField.HEIGHT.value, exclusive_min=False)

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        """
        Validate a building.

        Args:
            value: Building instance
            context: Optional context (unused)

        Returns:
            ValidationResult with validation status
        """
        result = ValidationResult()

        if not isinstance(value, Building):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_TYPE,
                message=f"Expected a Building, got {type(value).__name__}",
                parameter_name="building"
            ))
            return result

        result.merge(self._polygon_validator.validate(value.vertices))
        if value.buffer is not None:
            result.merge(self._buffer_validator.validate(value.buffer))

        height_validator = self._main_height_validator if value.is_main else self._height_validator
        result.merge(height_validator.validate(value.height))

        if value.floor_level is not None:
            level = value.floor_level
            if isinstance(level, bool) or not isinstance(level, int) or level < 0:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_VALUE,
                    message=f"{BuildingField.FLOOR_LEVEL.value} must be a non-negative integer, got {level}",
                    parameter_name=BuildingField.FLOOR_LEVEL.value
                ))

        return result
