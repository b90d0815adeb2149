"""Validator for floor counts (SRP: validates only the number of floors in a stack)"""
from typing import Any, Dict, Optional
from massing.core import EDITOR_CONSTANTS
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType


class FloorCountValidator(BaseValidator):
    """Validates a requested floor count (integer within a bounded range)"""

    def __init__(
        self,
        parameter_name: str = "count",
        min_floors: int = EDITOR_CONSTANTS.MIN_FLOORS,
        max_floors: int = EDITOR_CONSTANTS.MAX_FLOORS
    ):
        self._parameter_name = parameter_name
        self._min_floors = min_floors
        self._max_floors = max_floors

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        result = ValidationResult()

        if isinstance(value, bool) or not isinstance(value, int):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_TYPE,
                message=f"{self._parameter_name} must be an integer, got {type(value).__name__}",
                parameter_name=self._parameter_name
            ))
            return result

        if not self._min_floors <= value <= self._max_floors:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_RANGE,
                message=(
                    f"{self._parameter_name} must be between {self._min_floors} and "
                    f"{self._max_floors}, got {value}"
                ),
                parameter_name=self._parameter_name
            ))

        return result
