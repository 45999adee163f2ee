"""
Document Service - Ownership-checked document repository

Every accessor routes through get_document, so a document owned by
someone else is indistinguishable from one that does not exist.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from analyst.config import settings
from analyst.core.exceptions import (
    DocumentServiceError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from analyst.models.chunk import DocumentChunk
from analyst.models.document import Document
from analyst.storage import StorageBackend
from analyst.tasks.process_document import DocumentProcessor, process_document_task

logger = logging.getLogger(__name__)

MISSING_CONTENT_TEXT = "Document '{file_name}' content is not available for comparison"


class DocumentService:
    """
    Document CRUD, reprocessing and comparison input gathering

    Args:
        db: Database session
        storage: Blob storage backend
        enqueue: Schedules background processing for a document id
            (defaults to the Celery task)
    """

    def __init__(
        self,
        db: Session,
        storage: StorageBackend,
        enqueue: Optional[Callable[[str], object]] = None,
    ):
        self.db = db
        self.storage = storage
        self.enqueue = enqueue or process_document_task.delay

    def create_document(
        self,
        user_id: str,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> Document:
        """
        Store the blob, then the record, then schedule processing

        A failed insert deletes the blob it just uploaded, so no blob is
        left without a record.

        Raises:
            ValidationError: Missing user, filename or content
            StorageUnavailableError: Storage backend not usable
            DocumentServiceError: Upload or insert failed
        """
        if not user_id:
            raise ValidationError("user ID is required")
        if not file_name:
            raise ValidationError("file name is required")
        if not content:
            raise ValidationError("file content is required")

        if not self.storage.is_available():
            raise StorageUnavailableError()

        try:
            storage_path = self.storage.save(content, user_id, file_name, content_type)
        except StorageUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Upload of {file_name} for user {user_id} failed: {e}")
            raise DocumentServiceError("failed to upload file to storage") from e

        document = Document(
            user_id=user_id,
            file_name=file_name,
            storage_path=storage_path,
        )
        try:
            self.db.add(document)
            self.db.commit()
            self.db.refresh(document)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Insert of document {file_name} failed, removing blob {storage_path}: {e}")
            self._delete_blob(storage_path)
            raise DocumentServiceError("failed to create document record") from e

        logger.info(f"Created document {document.id} ({file_name}) for user {user_id}")
        self._schedule_processing(document.id)
        return document

    def _schedule_processing(self, document_id: str):
        # The document stays "processing" until reprocessed if this fails
        try:
            self.enqueue(str(document_id))
        except Exception as e:
            logger.error(f"Failed to enqueue processing for document {document_id}: {e}")

    def _delete_blob(self, storage_path: str):
        try:
            self.storage.delete(storage_path)
        except Exception as e:
            logger.warning(f"Failed to delete blob {storage_path}: {e}")

    def get_documents(self, user_id: str) -> List[Document]:
        """All of a user's documents, newest first"""
        if not user_id:
            raise ValidationError("user ID is required")

        return self.db.query(Document).filter(
            Document.user_id == user_id
        ).order_by(Document.uploaded_at.desc()).all()

    def get_document(self, document_id: str, user_id: str) -> Document:
        """
        Fetch one document owned by user_id

        Raises:
            ValidationError: Missing ids
            NotFoundError: Missing, or owned by another user
        """
        if not document_id:
            raise ValidationError("document ID is required")
        if not user_id:
            raise ValidationError("user ID is required")

        document = self.db.query(Document).filter(
            Document.id == document_id,
            Document.user_id == user_id,
        ).first()

        if not document:
            raise NotFoundError("document not found")
        return document

    def delete_document(self, document_id: str, user_id: str):
        """
        Delete the record (chunks and chat history cascade), then the blob

        Blob deletion is best effort; the record deletion is authoritative.
        """
        document = self.get_document(document_id, user_id)
        storage_path = document.storage_path

        try:
            self.db.delete(document)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DocumentServiceError("failed to delete document") from e

        logger.info(f"Deleted document {document_id} for user {user_id}")
        if storage_path:
            self._delete_blob(storage_path)

    def get_document_chunks(self, document_id: str) -> List[DocumentChunk]:
        """Chunks of a document in index order (caller checks ownership)"""
        return self.db.query(DocumentChunk).filter(
            DocumentChunk.document_id == document_id
        ).order_by(DocumentChunk.chunk_index).all()

    def count_chunks(self, document_id: str) -> int:
        return self.db.query(func.count(DocumentChunk.id)).filter(
            DocumentChunk.document_id == document_id
        ).scalar() or 0

    def get_document_status(self, document_id: str, user_id: str) -> Dict:
        """Readiness inferred from chunk presence"""
        document = self.get_document(document_id, user_id)
        chunks_count = self.count_chunks(document.id)
        ready = chunks_count > 0
        return {
            "status": "ready" if ready else "processing",
            "chunks_count": chunks_count,
            "ready_for_chat": ready,
        }

    def reprocess_document(self, document_id: str, user_id: str) -> int:
        """
        Replace a document's chunks by running the pipeline again

        Runs synchronously, so the new chunk set exists on return. Safe to
        call repeatedly.

        Returns:
            Chunk count after processing
        """
        document = self.get_document(document_id, user_id)

        try:
            deleted = self.db.query(DocumentChunk).filter(
                DocumentChunk.document_id == document.id
            ).delete(synchronize_session=False)
            self.db.commit()
            logger.info(f"Deleted {deleted} existing chunks of document {document.id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Failed to delete existing chunks of document {document.id}: {e}")

        processor = DocumentProcessor(db=self.db, storage=self.storage)
        return processor.process(document)

    def compare_documents(
        self,
        document_ids: Sequence[str],
        user_id: str,
    ) -> Tuple[List[Document], List[List[str]]]:
        """
        Gather documents and their chunk texts for comparison

        Raises:
            ValidationError: Fewer than 2 or more than 5 ids
            NotFoundError: Any id missing or not owned by the user (names the id)
        """
        if len(document_ids) < settings.COMPARE_MIN_DOCUMENTS:
            raise ValidationError(
                f"at least {settings.COMPARE_MIN_DOCUMENTS} documents are required for comparison"
            )
        if len(document_ids) > settings.COMPARE_MAX_DOCUMENTS:
            raise ValidationError(
                f"maximum {settings.COMPARE_MAX_DOCUMENTS} documents can be compared at once"
            )

        documents: List[Document] = []
        chunk_texts: List[List[str]] = []

        for document_id in document_ids:
            try:
                document = self.get_document(document_id, user_id)
            except NotFoundError:
                raise NotFoundError(f"document {document_id} not found or access denied")

            texts = [chunk.content for chunk in self.get_document_chunks(document.id)]
            if not texts:
                texts = [MISSING_CONTENT_TEXT.format(file_name=document.file_name)]

            documents.append(document)
            chunk_texts.append(texts)

        return documents, chunk_texts
