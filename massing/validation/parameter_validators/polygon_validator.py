"""Validator for polygon parameters (SRP: validates only polygon structures)"""
import math
from typing import Any, Dict, Optional
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType


class PolygonValidator(BaseValidator):
    """Validates polygon structures (sequence of (x, y) coordinate pairs)"""

    def __init__(self, parameter_name: str, min_vertices: int = 3):
        """
        Initialize polygon validator.

        Args:
            parameter_name: Name of the parameter being validated
            min_vertices: Minimum number of vertices required (default: 3)
        """
        self._parameter_name = parameter_name
        self._min_vertices = min_vertices

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        """
        Validate polygon structure.

        Args:
            value: Value to validate (should be a sequence of [x, y] pairs)
            context: Optional context (unused for polygon)

        Returns:
            ValidationResult with validation status
        """
        result = ValidationResult()

        if not isinstance(value, (list, tuple)):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_TYPE,
                message=f"{self._parameter_name} must be a list, got {type(value).__name__}",
                parameter_name=self._parameter_name
            ))
            return result

        if len(value) < self._min_vertices:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_LENGTH,
                message=f"{self._parameter_name} must have at least {self._min_vertices} vertices, got {len(value)}",
                parameter_name=self._parameter_name
            ))
            return result

        for i, vertex in enumerate(value):
            if not isinstance(vertex, (list, tuple)):
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_FORMAT,
                    message=f"{self._parameter_name}[{i}] must be a list or tuple, got {type(vertex).__name__}",
                    parameter_name=self._parameter_name
                ))
                continue

            if len(vertex) != 2:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_FORMAT,
                    message=f"{self._parameter_name}[{i}] must have exactly 2 coordinates [x, y], got {len(vertex)}",
                    parameter_name=self._parameter_name
                ))
                continue

            for j, coord in enumerate(vertex):
                if isinstance(coord, bool) or not isinstance(coord, (int, float)):
                    result.add_error(ValidationError(
                        error_type=ValidationErrorType.INVALID_TYPE,
                        message=f"{self._parameter_name}[{i}][{j}] must be a number, got {type(coord).__name__}",
                        parameter_name=self._parameter_name
                    ))
                elif not math.isfinite(coord):
                    result.add_error(ValidationError(
                        error_type=ValidationErrorType.INVALID_VALUE,
                        message=f"{self._parameter_name}[{i}][{j}] must be finite, got {coord}",
                        parameter_name=self._parameter_name
                    ))

        return result
