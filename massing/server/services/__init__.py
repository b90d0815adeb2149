from massing.server.services.document_service import DocumentService
from massing.server.services.document_service_factory import DocumentServiceFactory

__all__ = [
    "DocumentService",
    "DocumentServiceFactory",
]
