"""
Pydantic Schemas for Chat endpoints
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class ChatRequest(BaseModel):
    """Question about a single document"""
    message: str = Field(..., min_length=1, max_length=10000, description="User question")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message is required")
        return v


class ChatResponse(BaseModel):
    """AI answer and the time it was stored"""
    message: str
    timestamp: datetime


class ChatMessageResponse(BaseModel):
    """Stored chat turn"""
    id: str
    document_id: str
    user_id: str
    message_type: str = Field(..., description="'user' or 'ai'")
    message_content: str
    timestamp: datetime

    class Config:
        from_attributes = True
