"""
Chat Service - Questions about one document, answered from its chunks

The user turn and the AI turn are stored as two separate commits. A
failed generation leaves the question in history without an answer.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from analyst.core.exceptions import (
    AIServiceError,
    ChatServiceError,
    DocumentProcessingError,
    ValidationError,
)
from analyst.models.chat_message import ChatMessage, MESSAGE_TYPE_AI, MESSAGE_TYPE_USER
from analyst.schemas.chat import ChatResponse
from analyst.services.ai_service import AIService
from analyst.services.document_service import DocumentService

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat over a single document

    Args:
        db: Database session
        document_service: Ownership checks and chunk reads
        ai_service: Model gateway
    """

    def __init__(self, db: Session, document_service: DocumentService, ai_service: AIService):
        self.db = db
        self.document_service = document_service
        self.ai_service = ai_service

    def get_chat_history(self, document_id: str, user_id: str) -> List[ChatMessage]:
        """Messages for a document, oldest first"""
        if not document_id or not user_id:
            raise ValidationError("document ID and user ID are required")

        self.document_service.get_document(document_id, user_id)

        return self.db.query(ChatMessage).filter(
            ChatMessage.document_id == document_id,
            ChatMessage.user_id == user_id,
        ).order_by(ChatMessage.timestamp.asc()).all()

    async def send_message(self, document_id: str, user_id: str, message: str) -> ChatResponse:
        """
        Store the question, answer it from the document's chunks, store the answer

        Raises:
            ValidationError: Missing ids or empty message
            NotFoundError: Document missing or not owned by the user
            DocumentProcessingError: Document has no chunks yet
            AIServiceUnavailableError: No model credentials configured
            ChatServiceError: Storing a turn or generating the answer failed
        """
        if not document_id or not user_id:
            raise ValidationError("document ID and user ID are required")
        if not message or not message.strip():
            raise ValidationError("message is required")

        document = self.document_service.get_document(document_id, user_id)

        self._store_message(document.id, user_id, MESSAGE_TYPE_USER, message)

        chunks = self.document_service.get_document_chunks(document.id)
        if not chunks:
            logger.info(f"Chat on document {document.id} before processing finished")
            raise DocumentProcessingError()

        try:
            answer = await self.ai_service.generate_answer(
                message,
                [chunk.content for chunk in chunks],
                document.file_name,
            )
        except AIServiceError as e:
            raise ChatServiceError("failed to generate AI response") from e

        ai_message = self._store_message(document.id, user_id, MESSAGE_TYPE_AI, answer)
        return ChatResponse(message=answer, timestamp=ai_message.timestamp)

    def delete_chat_history(self, document_id: str, user_id: str) -> int:
        """Delete every message of this document/user pair"""
        if not document_id or not user_id:
            raise ValidationError("document ID and user ID are required")

        self.document_service.get_document(document_id, user_id)

        try:
            deleted = self.db.query(ChatMessage).filter(
                ChatMessage.document_id == document_id,
                ChatMessage.user_id == user_id,
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ChatServiceError("failed to delete chat history") from e

        logger.info(f"Deleted {deleted} chat messages for document {document_id}")
        return deleted

    def _store_message(self, document_id: str, user_id: str, message_type: str, content: str) -> ChatMessage:
        chat_message = ChatMessage(
            document_id=document_id,
            user_id=user_id,
            message_type=message_type,
            message_content=content,
        )
        try:
            self.db.add(chat_message)
            self.db.commit()
            self.db.refresh(chat_message)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise ChatServiceError(f"failed to save {message_type} message") from e
        return chat_message
