"""
Pytest configuration and shared fixtures for Strategy Analyst tests

Provides:
- Isolated in-memory SQLite database per test (foreign keys enforced)
- Local storage rooted in a temporary directory
- Mock AI service
- Test users, documents, and chunks
"""

import os

# Settings are read at import time; keep tests off Redis and real credentials
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RETRY_ENABLED", "false")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")

import pytest
from typing import Generator, List
from unittest.mock import MagicMock, AsyncMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from analyst.database import Base, enable_sqlite_foreign_keys
from analyst.models.user import User
from analyst.models.document import Document
from analyst.models.chunk import DocumentChunk
from analyst.services.ai_service import AIService
from analyst.storage import LocalStorage, StorageBackend


@pytest.fixture
def test_db_engine_sqlite():
    """Create in-memory SQLite database (fast, isolated per test)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_db_engine_sqlite) -> Generator[Session, None, None]:
    """Database session bound to the per-test engine"""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine_sqlite
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    """Local storage in a temporary upload directory"""
    return LocalStorage(base_path=str(tmp_path / "uploads"))


@pytest.fixture
def mock_storage() -> MagicMock:
    """Storage backend mock that accepts every call"""
    mock = MagicMock(spec=StorageBackend)
    mock.is_available.return_value = True
    mock.save.return_value = "users/user-1/1700000000_abcd1234_report.txt"
    mock.read.return_value = b"Quarterly revenue grew 12 percent."
    return mock


@pytest.fixture
def mock_ai_service() -> MagicMock:
    """AI service mock with canned answers"""
    mock = MagicMock(spec=AIService)
    mock.is_configured.return_value = True
    mock.generate_answer = AsyncMock(return_value="Revenue grew 12 percent year over year.")
    mock.compare_documents = AsyncMock()
    return mock


@pytest.fixture
def test_user(db_session) -> User:
    """Create a test user"""
    user = User(id="user-1", email="analyst@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session) -> User:
    """A second user, for ownership isolation checks"""
    user = User(id="user-2", email="other@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_document(db_session, test_user) -> Document:
    """Create a test document"""
    document = Document(
        user_id=test_user.id,
        file_name="strategy_2024.txt",
        storage_path="users/user-1/1700000000_abcd1234_strategy_2024.txt",
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document


@pytest.fixture
def test_chunks(db_session, test_document) -> List[DocumentChunk]:
    """Create test document chunks"""
    chunks = []
    for i in range(3):
        chunk = DocumentChunk(
            document_id=test_document.id,
            chunk_index=i,
            content=f"Strategy section {i}: expand into two new markets.",
        )
        db_session.add(chunk)
        chunks.append(chunk)

    db_session.commit()
    for chunk in chunks:
        db_session.refresh(chunk)
    return chunks


@pytest.fixture
def document_factory(db_session):
    """Insert documents with the given chunk texts"""

    def make_document(user_id: str, file_name: str, chunk_texts=()) -> Document:
        document = Document(
            user_id=user_id,
            file_name=file_name,
            storage_path=f"users/{user_id}/1700000000_abcd1234_{file_name}",
        )
        db_session.add(document)
        db_session.commit()
        for i, text in enumerate(chunk_texts):
            db_session.add(DocumentChunk(document_id=document.id, chunk_index=i, content=text))
        db_session.commit()
        db_session.refresh(document)
        return document

    return make_document


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for API endpoints"
    )
    config.addinivalue_line(
        "markers", "asyncio: Async tests requiring asyncio event loop"
    )
