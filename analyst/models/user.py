"""
User Model - Owner of uploaded documents
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from analyst.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    User model, created on the first authenticated request

    Attributes:
        id: Subject claim of the bearer token (opaque external identity)
        email: Email claim, or a placeholder when the token carries none
        created_at: First-seen timestamp

    Relationships:
        documents: User's uploads (one-to-many)
    """

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    documents = relationship(
        "Document",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
