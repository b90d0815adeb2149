"""Validation enums for type-safe validation"""
from enum import Enum


class ValidationErrorType(Enum):
    """Types of validation errors"""
    MISSING_PARAMETER = "missing_parameter"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    INVALID_RANGE = "invalid_range"
    INVALID_LENGTH = "invalid_length"
    INVALID_FORMAT = "invalid_format"
    INVALID_POLYGON = "invalid_polygon"
    INVALID_INDEX = "invalid_index"
    INVALID_STATE = "invalid_state"
