"""
Document Model - Uploaded files and the blob they point at
"""

from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
import uuid

from analyst.database import Base
from analyst.models.user import utcnow


class Document(Base):
    """
    Document model - one uploaded file

    Attributes:
        id: Unique document identifier (UUID string)
        user_id: Owner (foreign key to users)
        file_name: Original filename as uploaded
        storage_path: Storage key of the blob, set once at creation
        uploaded_at: Upload timestamp

    Relationships:
        user: Document owner (many-to-one)
        chunks: Extracted text chunks (one-to-many)
        messages: Chat history about this document (one-to-many)

    Readiness:
        There is no status column. A document with zero chunks is
        "processing", one with at least one chunk is "ready".
    """

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(128), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String(512), nullable=False)
    storage_path = Column(String(1024), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="documents")
    chunks = relationship(
        "DocumentChunk",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    messages = relationship(
        "ChatMessage",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Document(id={self.id}, file_name={self.file_name})>"
