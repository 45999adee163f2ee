"""
Pydantic Schemas for Request/Response Validation

Document Schemas:
    - DocumentResponse: Single document
    - DocumentUploadResponse: POST /documents
    - DocumentStatusResponse: GET /documents/{id}/status
    - ReprocessResponse: POST /documents/{id}/reprocess

Chat Schemas:
    - ChatRequest / ChatResponse: POST /documents/{id}/chat
    - ChatMessageResponse: GET /documents/{id}/chat

Comparison Schemas:
    - CompareRequest / CompareResponse: POST /documents/compare
    - DocumentComparison: Parsed model output

User Schemas:
    - UserResponse: GET /user/profile
"""

from analyst.schemas.document import (
    DocumentResponse,
    DocumentUploadResponse,
    DocumentStatusResponse,
    ReprocessResponse,
)
from analyst.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ChatMessageResponse,
)
from analyst.schemas.comparison import (
    CompareType,
    CompareRequest,
    CompareResponse,
    DocumentComparison,
)
from analyst.schemas.user import UserResponse

__all__ = [
    "DocumentResponse",
    "DocumentUploadResponse",
    "DocumentStatusResponse",
    "ReprocessResponse",
    "ChatRequest",
    "ChatResponse",
    "ChatMessageResponse",
    "CompareType",
    "CompareRequest",
    "CompareResponse",
    "DocumentComparison",
    "UserResponse",
]
