from typing import Optional
from massing.server.services.document_service import DocumentService


class DocumentServiceFactory:
    """Factory for the shared document service (Singleton Pattern)"""

    _instance: Optional[DocumentService] = None

    @classmethod
    def get_instance(cls) -> DocumentService:
        """
        Get singleton instance of the document service

        Returns:
            DocumentService instance
        """
        if cls._instance is None:
            cls._instance = DocumentService()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton instance (useful for testing)"""
        cls._instance = None
