"""Tests for the in-memory document registry"""
import threading
import unittest

from massing.core import DocumentNotFoundError
from massing.components.editor_engine import EditorEngine
from massing.models import Building
from massing.server.controllers import ServerController
from massing.server.enums import ServerStatus
from massing.server.services import DocumentService, DocumentServiceFactory


class TestDocumentService(unittest.TestCase):
    """Test DocumentService"""

    def setUp(self):
        self.service = DocumentService()

    def test_create_and_get(self):
        """Test a created document can be looked up"""
        document_id = self.service.create([{"vertices": [[0, 0], [1, 0], [1, 1]], "height": 2.0}])
        engine = self.service.get(document_id)

        self.assertIsInstance(engine, EditorEngine)
        self.assertEqual(len(engine.buildings), 1)
        self.assertEqual(self.service.document_ids(), [document_id])

    def test_documents_are_independent(self):
        """Test two documents do not share state"""
        first = self.service.create()
        second = self.service.create([{"vertices": [[0, 0], [1, 0], [1, 1]], "height": 2.0}])

        self.assertNotEqual(first, second)
        self.assertEqual(len(self.service.get(first).buildings), 0)
        self.assertEqual(len(self.service.get(second).buildings), 1)

    def test_get_unknown(self):
        """Test unknown ids raise DocumentNotFoundError"""
        with self.assertRaises(DocumentNotFoundError):
            self.service.get("nope")

    def test_close(self):
        """Test closing tears the engine down and forgets the id"""
        document_id = self.service.create()
        engine = self.service.get(document_id)
        self.service.close(document_id)

        self.assertTrue(engine.closed)
        with self.assertRaises(DocumentNotFoundError):
            self.service.close(document_id)

    def test_session_yields_engine(self):
        """Test a session hands out the document's engine"""
        document_id = self.service.create()
        with self.service.session(document_id) as engine:
            self.assertIs(engine, self.service.get(document_id))

    def test_session_unknown(self):
        """Test a session on an unknown id raises DocumentNotFoundError"""
        with self.assertRaises(DocumentNotFoundError):
            with self.service.session("nope"):
                pass

    def test_concurrent_sessions_serialize_mutations(self):
        """Test parallel edits of one document keep every building and one snapshot each"""
        document_id = self.service.create()
        workers, adds_per_worker = 8, 25
        start = threading.Barrier(workers)
        errors = []

        def add_buildings(offset):
            try:
                start.wait()
                for i in range(adds_per_worker):
                    with self.service.session(document_id) as engine:
                        x = float(offset * 100 + i)
                        engine.store.add(Building(vertices=[(x, 0), (x + 1, 0), (x + 1, 1)], height=1.0))
                        self.assertEqual(engine.store.history_depth, len(engine.store))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=add_buildings, args=(n,)) for n in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        engine = self.service.get(document_id)
        self.assertEqual(len(engine.store), workers * adds_per_worker)
        self.assertEqual(engine.store.history_depth, workers * adds_per_worker)
        self.assertEqual(len({b.vertices for b in engine.buildings}), workers * adds_per_worker)

    def test_session_after_close(self):
        """Test a closed document cannot be reopened through a session"""
        document_id = self.service.create()
        self.service.close(document_id)
        with self.assertRaises(DocumentNotFoundError):
            with self.service.session(document_id):
                pass

    def test_status(self):
        """Test status reports the number of open documents"""
        self.service.create()
        self.assertEqual(self.service.get_status(), {"status": "ready", "documents": 1})


class TestDocumentServiceFactory(unittest.TestCase):
    """Test DocumentServiceFactory singleton"""

    def tearDown(self):
        DocumentServiceFactory.reset_instance()

    def test_singleton(self):
        """Test the factory returns one shared service"""
        self.assertIs(DocumentServiceFactory.get_instance(), DocumentServiceFactory.get_instance())

    def test_reset(self):
        """Test reset_instance drops the shared service"""
        first = DocumentServiceFactory.get_instance()
        DocumentServiceFactory.reset_instance()
        self.assertIsNot(DocumentServiceFactory.get_instance(), first)


class TestServerController(unittest.TestCase):
    """Test ServerController lifecycle"""

    def test_initialize_and_stop(self):
        """Test the controller runs after initialize and stops on demand"""
        controller = ServerController(services={"document_service": DocumentService()})
        self.assertEqual(controller.status, ServerStatus.STARTING)

        controller.initialize()
        status = controller.get_status()
        self.assertEqual(status["status"], "running")
        self.assertIn("started_at", status)

        controller.stop()
        self.assertEqual(controller.status, ServerStatus.STOPPED)

    def test_service_without_status(self):
        """Test services must expose get_status"""
        controller = ServerController(services={"broken": object()})
        with self.assertRaises(TypeError):
            controller.initialize()
        self.assertEqual(controller.status, ServerStatus.ERROR)
