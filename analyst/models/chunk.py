"""
DocumentChunk Model - Text slices used to ground AI answers
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, JSON, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from analyst.database import Base
from analyst.models.user import utcnow


class DocumentChunk(Base):
    """
    Document chunk model

    Attributes:
        id: Unique chunk identifier (UUID string)
        document_id: Foreign key to documents table
        chunk_index: Sequential index within document (0-based)
        content: Chunk text
        embedding: Reserved for vector search, currently always NULL
        created_at: Chunk creation timestamp

    Uniqueness:
        (document_id, chunk_index) is unique. Two overlapping processing
        runs for the same document collide here instead of duplicating
        chunks.
    """

    __tablename__ = "documents_chunks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    document_id = Column(String(36), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    chunk_index = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    embedding = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_documents_chunks_document_index"),
    )

    document = relationship("Document", back_populates="chunks")

    def __repr__(self):
        return f"<DocumentChunk(id={self.id}, document_id={self.document_id}, chunk_index={self.chunk_index})>"
