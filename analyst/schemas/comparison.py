"""
Pydantic Schemas for multi-document comparison
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime, timezone
from enum import Enum

from analyst.schemas.document import DocumentResponse


class CompareType(str, Enum):
    """Known comparison focuses; anything else gets comprehensive framing"""
    SUMMARY = "summary"
    DETAILED = "detailed"
    THEMES = "themes"
    DIFFERENCES = "differences"


class CompareRequest(BaseModel):
    document_ids: List[str] = Field(..., description="Between 2 and 5 document ids")
    compare_type: Optional[str] = Field(default=CompareType.SUMMARY.value, description="summary, detailed, themes or differences; null means summary")


class DocumentComparison(BaseModel):
    """Structured comparison parsed from the model's marker-delimited answer"""
    documents: List[DocumentResponse] = Field(default_factory=list)
    summary: str
    similarities: List[str] = Field(default_factory=list)
    differences: List[str] = Field(default_factory=list)
    key_themes: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    compared_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CompareResponse(BaseModel):
    comparison: DocumentComparison
    message: str = "Document comparison completed successfully"
