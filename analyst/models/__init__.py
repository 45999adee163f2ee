"""
SQLAlchemy Database Models

Document and message ids are UUID strings; user ids are the subject claim
issued by the identity provider.

Models:
    - User: Lazily created owner of documents
    - Document: Uploaded file and the storage key of its blob
    - DocumentChunk: Bounded slice of a document's extracted text
    - ChatMessage: One user or AI turn in a document conversation

Relationships:
    User 1:N Document
    Document 1:N DocumentChunk
    Document 1:N ChatMessage

Cascade Deletes:
    - Delete User → Delete all Documents, Chunks, ChatMessages
    - Delete Document → Delete all Chunks and ChatMessages
"""

from analyst.models.user import User
from analyst.models.document import Document
from analyst.models.chunk import DocumentChunk
from analyst.models.chat_message import ChatMessage

__all__ = ["User", "Document", "DocumentChunk", "ChatMessage"]
