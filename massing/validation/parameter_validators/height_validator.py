"""Validator for height parameters (SRP: validates only height values)"""
import math
from typing import Any, Dict, Optional
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType


class HeightValidator(BaseValidator):
    """Validates height values (finite numbers above a lower bound)"""

    def __init__(
        self,
        parameter_name: str,
        min_value: float = 0.0,
        max_value: Optional[float] = None,
        exclusive_min: bool = True
    ):
        """
        Initialize height validator.

        Args:
            parameter_name: Name of the parameter being validated
            min_value: Minimum allowed height (default: 0.0)
            max_value: Maximum allowed height (default: None, no upper limit)
            exclusive_min: Whether min_value itself is rejected (default: True)
        """
        self._parameter_name = parameter_name
        self._min_value = min_value
        self._max_value = max_value
        self._exclusive_min = exclusive_min

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        """
        Validate height value.

        Args:
            value: Value to validate
            context: Optional context (unused for height)

        Returns:
            ValidationResult with validation status
        """
        result = ValidationResult()

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_TYPE,
                message=f"{self._parameter_name} must be a number, got {type(value).__name__}",
                parameter_name=self._parameter_name
            ))
            return result

        if not math.isfinite(value):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_VALUE,
                message=f"{self._parameter_name} must be finite, got {value}",
                parameter_name=self._parameter_name
            ))
            return result

        too_low = value <= self._min_value if self._exclusive_min else value < self._min_value
        if too_low:
            comparison = ">" if self._exclusive_min else ">="
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_RANGE,
                message=f"{self._parameter_name} must be {comparison} {self._min_value}, got {value}",
                parameter_name=self._parameter_name
            ))

        if self._max_value is not None and value > self._max_value:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_RANGE,
                message=f"{self._parameter_name} must be <= {self._max_value}, got {value}",
                parameter_name=self._parameter_name
            ))

        return result
