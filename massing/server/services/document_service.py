"""In-memory registry of open editor documents"""
import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Sequence

from massing.core import DocumentNotFoundError
from massing.components.editor_engine import EditorEngine
from massing.models import Building
from massing.server.enums import ServiceStatus

logger = logging.getLogger("logger")


@dataclass
class _Document:
    engine: EditorEngine
    lock: threading.RLock = field(default_factory=threading.RLock)


class DocumentService:
    """
    Creates, looks up and closes EditorEngine documents

    An engine is single-threaded, so every request that touches a document
    runs inside session(), which holds that document's lock for the whole
    operation and the response built from it.
    """

    def __init__(self):
        self._documents: Dict[str, _Document] = {}
        self._lock = threading.Lock()

    def create(self, buildings: Sequence[Dict[str, Any]] = (),
               roads: Sequence[Sequence[Sequence[float]]] = ()) -> str:
        """
        Open a new document

        Args:
            buildings: Initial buildings in wire representation
            roads: Initial road polylines

        Returns:
            Id of the new document
        """
        engine = EditorEngine(buildings=[Building.from_dict(b) for b in buildings], roads=roads)
        document_id = uuid.uuid4().hex
        with self._lock:
            self._documents[document_id] = _Document(engine)
        logger.info(f"Created document {document_id} with {len(buildings)} buildings")
        return document_id

    def get(self, document_id: str) -> EditorEngine:
        """
        Raises:
            DocumentNotFoundError: If no open document has this id
        """
        return self._lookup(document_id).engine

    @contextmanager
    def session(self, document_id: str) -> Iterator[EditorEngine]:
        """
        Exclusive access to one document's engine

        Raises:
            DocumentNotFoundError: If no open document has this id, or it
                was closed while waiting for the lock
        """
        document = self._lookup(document_id)
        with document.lock:
            if document.engine.closed:
                raise DocumentNotFoundError(document_id)
            yield document.engine

    def close(self, document_id: str) -> None:
        with self._lock:
            document = self._documents.pop(document_id, None)
        if document is None:
            raise DocumentNotFoundError(document_id)
        with document.lock:
            document.engine.close()
        logger.info(f"Closed document {document_id}")

    def document_ids(self) -> List[str]:
        with self._lock:
            return list(self._documents)

    def get_status(self) -> Dict[str, Any]:
        return {"status": ServiceStatus.READY.value, "documents": len(self.document_ids())}

    def _lookup(self, document_id: str) -> _Document:
        with self._lock:
            document = self._documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document
