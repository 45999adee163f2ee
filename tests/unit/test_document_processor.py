"""
Unit tests for DocumentProcessor and the process_document task

Tests:
- Text upload is chunked and stored with contiguous indices
- Unreadable blob produces the fallback chunk
- Unsupported extension produces the extraction-failed placeholder
- Unavailable storage leaves the document without chunks
- Chunk index collisions are skipped, not fatal
- Celery task entry point
"""

import pytest
from unittest.mock import patch

from analyst.chunking import WordChunker
from analyst.models.chunk import DocumentChunk
from analyst.models.document import Document
from analyst.tasks.process_document import (
    DocumentProcessor,
    EXTRACTION_FAILED_TEXT,
    FALLBACK_CHUNK_TEXT,
    process_document_task,
)


def _stored_document(db_session, storage, user_id, file_name, content):
    key = storage.save(content, user_id, file_name)
    document = Document(user_id=user_id, file_name=file_name, storage_path=key)
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document


def _chunks(db_session, document):
    return db_session.query(DocumentChunk).filter(
        DocumentChunk.document_id == document.id
    ).order_by(DocumentChunk.chunk_index).all()


@pytest.mark.unit
class TestDocumentProcessor:
    """Test suite for DocumentProcessor"""

    def test_text_document_round_trip(self, db_session, storage, test_user):
        text = "Hello world. " * 500
        document = _stored_document(db_session, storage, test_user.id, "notes.txt", text.encode())

        count = DocumentProcessor(db_session, storage).process(document)

        chunks = _chunks(db_session, document)
        assert count == len(chunks) >= 2
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
        assert all(len(c.content) <= 1000 for c in chunks)
        assert " ".join(c.content for c in chunks).split() == text.split()

    def test_short_text_is_single_chunk(self, db_session, storage, test_user):
        document = _stored_document(
            db_session, storage, test_user.id, "memo.txt", b"Expand into LATAM in 2025."
        )

        count = DocumentProcessor(db_session, storage).process(document)

        assert count == 1
        assert _chunks(db_session, document)[0].content == "Expand into LATAM in 2025."

    def test_unreadable_blob_gets_fallback_chunk(self, db_session, mock_storage, test_document):
        mock_storage.read.side_effect = FileNotFoundError("gone")

        count = DocumentProcessor(db_session, mock_storage).process(test_document)

        chunks = _chunks(db_session, test_document)
        assert count == 1
        assert chunks[0].chunk_index == 0
        assert chunks[0].content == FALLBACK_CHUNK_TEXT.format(file_name=test_document.file_name)

    def test_unsupported_extension_gets_placeholder(self, db_session, storage, test_user):
        document = _stored_document(db_session, storage, test_user.id, "figures.csv", b"a,b\n1,2")

        count = DocumentProcessor(db_session, storage).process(document)

        chunks = _chunks(db_session, document)
        assert count == 1
        assert chunks[0].content == EXTRACTION_FAILED_TEXT.format(file_name="figures.csv")

    def test_empty_pdf_text_gets_placeholder(self, db_session, storage, test_user):
        document = _stored_document(db_session, storage, test_user.id, "scan.pdf", b"%PDF-1.4")

        with patch("analyst.parsers.PDFParser.parse", return_value={"content": "  \n ", "metadata": {}, "page_count": 1}):
            DocumentProcessor(db_session, storage).process(document)

        chunks = _chunks(db_session, document)
        assert len(chunks) == 1
        assert chunks[0].content == EXTRACTION_FAILED_TEXT.format(file_name="scan.pdf")

    def test_storage_unavailable_leaves_document_processing(self, db_session, mock_storage, test_document):
        mock_storage.is_available.return_value = False

        count = DocumentProcessor(db_session, mock_storage).process(test_document)

        assert count == 0
        assert _chunks(db_session, test_document) == []
        mock_storage.read.assert_not_called()

    def test_missing_storage_path_is_skipped(self, db_session, mock_storage, test_user):
        document = Document(user_id=test_user.id, file_name="orphan.txt", storage_path=None)
        db_session.add(document)
        db_session.commit()

        count = DocumentProcessor(db_session, mock_storage).process(document)

        assert count == 0

    def test_index_collision_is_skipped(self, db_session, storage, test_user):
        document = _stored_document(db_session, storage, test_user.id, "plan.txt", b"aaa bbb ccc ddd")
        db_session.add(DocumentChunk(document_id=document.id, chunk_index=1, content="from another run"))
        db_session.commit()

        count = DocumentProcessor(db_session, storage, chunker=WordChunker(chunk_size=7)).process(document)

        chunks = _chunks(db_session, document)
        assert count == 2
        assert [(c.chunk_index, c.content) for c in chunks] == [
            (0, "aaa bbb"),
            (1, "from another run"),
        ]

    def test_document_deleted_during_processing(self, db_session, mock_storage, test_document):
        """Test a row deleted mid-run is logged and skipped instead of crashing the task"""
        document_id = test_document.id

        def delete_then_read(storage_path):
            db_session.delete(test_document)
            db_session.commit()
            return b"Revenue grew 12 percent."

        mock_storage.read.side_effect = delete_then_read

        count = DocumentProcessor(db_session, mock_storage).process(test_document)

        assert count == 0
        assert db_session.query(Document).filter(Document.id == document_id).count() == 0
        assert db_session.query(DocumentChunk).filter(DocumentChunk.document_id == document_id).count() == 0


@pytest.mark.unit
class TestProcessDocumentTask:
    """Test suite for the Celery entry point"""

    def test_task_processes_document(self, db_session, storage, test_user):
        document = _stored_document(db_session, storage, test_user.id, "memo.txt", b"Board approved the plan.")
        document_id = document.id

        with patch("analyst.tasks.process_document.SessionLocal", return_value=db_session), \
                patch("analyst.tasks.process_document.get_storage_backend", return_value=storage):
            count = process_document_task(document_id)

        assert count == 1

    def test_task_unknown_document(self, db_session, storage):
        with patch("analyst.tasks.process_document.SessionLocal", return_value=db_session), \
                patch("analyst.tasks.process_document.get_storage_backend", return_value=storage):
            count = process_document_task("does-not-exist")

        assert count == 0
