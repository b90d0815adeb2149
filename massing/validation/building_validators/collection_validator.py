"""Validator for the building collection (SRP: validates cross-building invariants)"""
from typing import Any, Dict, Optional, Sequence
from massing.models.building import Building
from massing.validation.base import BaseValidator, ValidationResult, ValidationError
from massing.validation.enums import ValidationErrorType
from massing.validation.building_validators.building_validator import BuildingValidator
from massing.core import BuildingField


class CollectionValidator(BaseValidator):
    """
    Validates a whole building collection.

    Checks every building individually, then the collection-wide rules:
    at most one site boundary, and floor references pointing one level
    deep at an existing foundation.
    """

    def __init__(self):
        self._building_validator = BuildingValidator()

    def validate(self, value: Any, context: Optional[Dict[str, Any]] = None) -> ValidationResult:
        result = ValidationResult()
        buildings: Sequence[Building] = value

        for building in buildings:
            result.merge(self._building_validator.validate(building))
        if not result.is_valid:
            return result

        main_count = sum(1 for b in buildings if b.is_main)
        if main_count > 1:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.INVALID_STATE,
                message=f"At most one site boundary is allowed, got {main_count}",
                parameter_name=BuildingField.IS_MAIN.value
            ))

        for index, building in enumerate(buildings):
            base = building.base_building
            if base is None:
                continue
            if isinstance(base, bool) or not isinstance(base, int) or not 0 <= base < len(buildings):
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_INDEX,
                    message=f"Building {index} references missing base building {base}",
                    parameter_name=BuildingField.BASE_BUILDING.value
                ))
            elif base == index:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_STATE,
                    message=f"Building {index} cannot be its own base building",
                    parameter_name=BuildingField.BASE_BUILDING.value
                ))
            elif buildings[base].base_building is not None:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.INVALID_STATE,
                    message=f"Building {index} references base {base}, which is itself a floor",
                    parameter_name=BuildingField.BASE_BUILDING.value
                ))

        return result
