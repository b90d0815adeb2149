"""
Custom exceptions for the massing editor.

This module defines exception classes for error conditions that can occur
while importing sites, editing geometry and producing exports.
"""

from typing import Optional


class MassingException(Exception):
    """Base exception class for all massing editor errors"""
    pass


class GeometryError(MassingException):
    """Exception raised for degenerate geometry that cannot be processed"""
    pass


class ImportPayloadError(MassingException):
    """
    Exception raised when a site import payload is malformed.

    Nothing from a payload that raises this error is merged into a document.
    """

    def __init__(self, field: str, details: Optional[str] = None):
        """
        Initialize ImportPayloadError.

        Args:
            field: Payload field (or path) that failed to parse
            details: Additional details about the failure
        """
        self.field = field
        self.details = details

        message = f"Invalid import payload at '{field}'"
        if details:
            message += f": {details}"

        super().__init__(message)


class ExportError(MassingException):
    """Exception raised when an export cannot be produced"""

    def __init__(self, export_name: str, details: str):
        """
        Initialize ExportError.

        Args:
            export_name: Name of the export that failed
            details: Details about the failure
        """
        self.export_name = export_name
        self.details = details

        super().__init__(f"Failed to produce {export_name} export: {details}")


class DocumentNotFoundError(MassingException):
    """Exception raised when a document id does not exist"""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document '{document_id}' not found")
