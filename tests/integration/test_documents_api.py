"""
Integration tests for Document API endpoints

Tests:
- Upload, list, get, delete
- Status and reprocess
- Upload validation (extension, size)
- Ownership isolation
- Multi-document comparison
- Authentication and user profile
- Health check
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient

import jwt

from analyst.main import app
from analyst.api.deps import (
    get_ai_service,
    get_current_user,
    get_db,
    get_document_service,
    get_storage,
)
from analyst.config import settings
from analyst.schemas.comparison import DocumentComparison
from analyst.services.document_service import DocumentService


@pytest.mark.integration
class TestDocumentsAPI:
    """Integration tests for Documents API"""

    @pytest.fixture
    def enqueue(self):
        return MagicMock()

    @pytest.fixture
    def client(self, db_session, storage, mock_ai_service, enqueue, test_user):
        """Create test client with mocked dependencies"""

        def override_get_db():
            try:
                yield db_session
            finally:
                pass

        def override_get_current_user():
            return test_user

        def override_get_document_service():
            return DocumentService(db=db_session, storage=storage, enqueue=enqueue)

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_current_user] = override_get_current_user
        app.dependency_overrides[get_storage] = lambda: storage
        app.dependency_overrides[get_ai_service] = lambda: mock_ai_service
        app.dependency_overrides[get_document_service] = override_get_document_service

        client = TestClient(app)
        yield client

        app.dependency_overrides.clear()

    def _upload(self, client, name="plan.txt", content=b"Expand into two new markets.", content_type="text/plain"):
        return client.post("/api/documents", files={"document": (name, content, content_type)})

    def test_upload_document(self, client, enqueue, storage):
        """Test upload returns the new id and schedules processing"""
        response = self._upload(client)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Document uploaded successfully. Processing started."
        enqueue.assert_called_once_with(data["document_id"])

        document = client.get(f"/api/documents/{data['document_id']}").json()
        assert document["file_name"] == "plan.txt"
        assert storage.read(document["storage_path"]) == b"Expand into two new markets."

    def test_upload_unsupported_extension(self, client, enqueue):
        response = self._upload(client, name="slides.pptx", content_type="application/octet-stream")

        assert response.status_code == 400
        enqueue.assert_not_called()

    def test_upload_too_large(self, client):
        with patch.object(settings, "MAX_UPLOAD_SIZE", 10):
            response = self._upload(client, content=b"x" * 11)

        assert response.status_code == 413

    def test_upload_storage_unavailable(self, db_session, mock_storage, test_user):
        """Test upload is rejected with 503 when storage is not initialized"""
        mock_storage.is_available.return_value = False
        app.dependency_overrides[get_db] = lambda: db_session
        app.dependency_overrides[get_current_user] = lambda: test_user
        app.dependency_overrides[get_document_service] = lambda: DocumentService(
            db=db_session, storage=mock_storage, enqueue=MagicMock()
        )
        try:
            response = self._upload(TestClient(app))
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json()["detail"] == "storage service is not initialized"

    def test_status_then_reprocess(self, client):
        """Test a document is processing until chunks exist"""
        document_id = self._upload(client).json()["document_id"]

        status = client.get(f"/api/documents/{document_id}/status").json()
        assert status == {"status": "processing", "chunks_count": 0, "ready_for_chat": False}

        response = client.post(f"/api/documents/{document_id}/reprocess")
        assert response.status_code == 200
        assert response.json()["message"] == "Document reprocessing started"

        status = client.get(f"/api/documents/{document_id}/status").json()
        assert status == {"status": "ready", "chunks_count": 1, "ready_for_chat": True}

    def test_list_documents_newest_first(self, client, document_factory, test_user, other_user, db_session):
        older = document_factory(test_user.id, "older.txt")
        older.uploaded_at = datetime.now(timezone.utc) - timedelta(days=1)
        db_session.commit()
        newer = document_factory(test_user.id, "newer.txt")
        document_factory(other_user.id, "theirs.txt")

        response = client.get("/api/documents")

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == [newer.id, older.id]

    def test_other_users_document_is_404(self, client, document_factory, other_user):
        theirs = document_factory(other_user.id, "theirs.txt", ["secret"])

        assert client.get(f"/api/documents/{theirs.id}").status_code == 404
        assert client.get(f"/api/documents/{theirs.id}/status").status_code == 404
        assert client.delete(f"/api/documents/{theirs.id}").status_code == 404
        assert client.post(f"/api/documents/{theirs.id}/reprocess").status_code == 404

    def test_delete_document(self, client, storage):
        document_id = self._upload(client).json()["document_id"]
        storage_path = client.get(f"/api/documents/{document_id}").json()["storage_path"]

        response = client.delete(f"/api/documents/{document_id}")

        assert response.status_code == 204
        assert client.get(f"/api/documents/{document_id}").status_code == 404
        assert not storage.exists(storage_path)

    def test_compare_requires_two_documents(self, client, document_factory, test_user):
        only = document_factory(test_user.id, "only.txt", ["a"])

        response = client.post("/api/documents/compare", json={"document_ids": [only.id]})

        assert response.status_code == 400
        assert response.json()["detail"] == "at least 2 documents are required for comparison"

    def test_compare_too_many_documents(self, client):
        response = client.post(
            "/api/documents/compare",
            json={"document_ids": [f"doc-{i}" for i in range(6)]},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "maximum 5 documents can be compared at once"

    def test_compare_unknown_document(self, client, document_factory, test_user):
        mine = document_factory(test_user.id, "mine.txt", ["a"])

        response = client.post(
            "/api/documents/compare",
            json={"document_ids": [mine.id, "missing-id"]},
        )

        assert response.status_code == 404
        assert "missing-id" in response.json()["detail"]

    def test_compare_documents(self, client, document_factory, mock_ai_service, test_user):
        first = document_factory(test_user.id, "2023.txt", ["Old plan"])
        second = document_factory(test_user.id, "2024.txt", ["New plan"])
        mock_ai_service.compare_documents.return_value = DocumentComparison(
            summary="Plans evolved.",
            similarities=["Both target growth"],
            differences=["2024 adds LATAM"],
        )

        response = client.post(
            "/api/documents/compare",
            json={"document_ids": [first.id, second.id], "compare_type": "differences"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Document comparison completed successfully"
        assert data["comparison"]["summary"] == "Plans evolved."
        assert data["comparison"]["differences"] == ["2024 adds LATAM"]
        documents, chunk_texts, compare_type = mock_ai_service.compare_documents.call_args[0]
        assert [d.id for d in documents] == [first.id, second.id]
        assert chunk_texts == [["Old plan"], ["New plan"]]
        assert compare_type == "differences"

    @pytest.mark.parametrize("payload_extra", [{}, {"compare_type": None}, {"compare_type": ""}])
    def test_compare_type_defaults_to_summary(self, client, document_factory, mock_ai_service, test_user, payload_extra):
        first = document_factory(test_user.id, "a.txt", ["A"])
        second = document_factory(test_user.id, "b.txt", ["B"])
        mock_ai_service.compare_documents.return_value = DocumentComparison(summary="Similar.")

        response = client.post(
            "/api/documents/compare",
            json={"document_ids": [first.id, second.id], **payload_extra},
        )

        assert response.status_code == 200
        assert mock_ai_service.compare_documents.call_args[0][2] == "summary"


@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for bearer authentication"""

    @pytest.fixture
    def client(self, db_session):
        def override_get_db():
            try:
                yield db_session
            finally:
                pass

        app.dependency_overrides[get_db] = override_get_db
        client = TestClient(app)
        yield client
        app.dependency_overrides.clear()

    def _token(self, **claims):
        payload = {
            "sub": "idp-user-42",
            "email": "founder@example.com",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        }
        payload.update(claims)
        return jwt.encode(payload, settings.AUTH_JWT_SECRET, algorithm="HS256")

    def test_missing_header(self, client):
        response = client.get("/api/documents")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header(self, client):
        response = client.get("/api/documents", headers={"Authorization": "Token abc"})

        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/documents", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401

    def test_profile_creates_user_on_first_request(self, client):
        headers = {"Authorization": f"Bearer {self._token()}"}

        first = client.get("/api/user/profile", headers=headers)
        second = client.get("/api/user/profile", headers=headers)

        assert first.status_code == 200
        assert first.json()["id"] == "idp-user-42"
        assert first.json()["email"] == "founder@example.com"
        assert second.json()["created_at"] == first.json()["created_at"]


@pytest.mark.integration
class TestHealthAPI:
    """Integration tests for the health endpoint"""

    def test_degraded_without_ai(self, storage):
        ai_service = MagicMock()
        ai_service.is_configured.return_value = False

        with patch("analyst.main.get_storage_backend", return_value=storage), \
                patch("analyst.main.get_ai_service", return_value=ai_service):
            response = TestClient(app).get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["services"] == {
            "database": "connected",
            "storage": "available",
            "ai": "unconfigured",
        }

    def test_critical_without_database(self, storage, mock_ai_service):
        with patch("analyst.main.check_database", return_value=False), \
                patch("analyst.main.get_storage_backend", return_value=storage), \
                patch("analyst.main.get_ai_service", return_value=mock_ai_service):
            response = TestClient(app).get("/api/health")

        assert response.status_code == 503
        assert response.json()["status"] == "critical"
