"""Validator for collection indices (SRP: validates only index bounds)"""
from typing import Any, Dict, Optional
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType


class IndexValidator(BaseValidator):
    """
    Validates an index into the building collection.

    The collection size is passed through the context under "size".
    """

    def __init__(self, parameter_name: str = "index"):
        self._parameter_name = parameter_name

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        result = ValidationResult()
        size = (context or {}).get("size", 0)

        if isinstance(value, bool) or not isinstance(value, int):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_TYPE,
                message=f"{self._parameter_name} must be an integer, got {type(value).__name__}",
                parameter_name=self._parameter_name
            ))
            return result

        if not 0 <= value < size:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_INDEX,
                message=f"{self._parameter_name} {value} out of range for {size} buildings",
                parameter_name=self._parameter_name
            ))

        return result
