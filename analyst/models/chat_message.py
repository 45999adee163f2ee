"""
ChatMessage Model - One turn of a document conversation
"""

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
import uuid

from analyst.database import Base
from analyst.models.user import utcnow

MESSAGE_TYPE_USER = "user"
MESSAGE_TYPE_AI = "ai"


class ChatMessage(Base):
    """
    Chat message model

    Attributes:
        id: Message UUID string
        document_id: Document the conversation is about
        user_id: Owner of the conversation
        message_type: 'user' or 'ai'
        message_content: Message text
        timestamp: When the turn was stored

    A user turn and its AI answer are two independent rows. A failed
    generation leaves the user turn without an answer.
    """

    __tablename__ = "chat_history"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message_type = Column(String(10), nullable=False)
    message_content = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("message_type IN ('user', 'ai')", name="ck_chat_history_message_type"),
    )

    document = relationship("Document", back_populates="messages")

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, message_type={self.message_type}, document_id={self.document_id})>"
