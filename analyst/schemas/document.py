"""
Pydantic Schemas for Document endpoints
Request/Response validation
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime


class DocumentResponse(BaseModel):
    """Schema for document responses"""
    id: str
    user_id: str
    file_name: str = Field(..., description="Original filename")
    storage_path: Optional[str] = Field(None, description="Storage key of the uploaded blob")
    uploaded_at: datetime

    class Config:
        from_attributes = True


class DocumentUploadResponse(BaseModel):
    """Returned once the blob and the record exist; processing continues in the background"""
    document_id: str
    message: str = "Document uploaded successfully. Processing started."


class DocumentStatusResponse(BaseModel):
    """Readiness inferred from chunk presence"""
    status: Literal["processing", "ready"]
    chunks_count: int = Field(..., ge=0)
    ready_for_chat: bool


class ReprocessResponse(BaseModel):
    message: str = "Document reprocessing started"
