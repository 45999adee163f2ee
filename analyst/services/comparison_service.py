"""
Comparison Service - Multi-document comparison
"""

import logging
from typing import Optional, Sequence

from analyst.core.exceptions import AIServiceError, ChatServiceError
from analyst.schemas.comparison import CompareType, DocumentComparison
from analyst.services.ai_service import AIService
from analyst.services.document_service import DocumentService

logger = logging.getLogger(__name__)


class ComparisonService:
    """Validates the document set, gathers chunks, asks the model to compare"""

    def __init__(self, document_service: DocumentService, ai_service: AIService):
        self.document_service = document_service
        self.ai_service = ai_service

    async def compare(
        self,
        document_ids: Sequence[str],
        user_id: str,
        compare_type: Optional[str] = CompareType.SUMMARY.value,
    ) -> DocumentComparison:
        documents, chunk_texts = self.document_service.compare_documents(document_ids, user_id)

        try:
            comparison = await self.ai_service.compare_documents(
                documents,
                chunk_texts,
                compare_type or CompareType.SUMMARY.value,
            )
        except AIServiceError as e:
            raise ChatServiceError("failed to generate document comparison") from e

        logger.info(f"Compared {len(documents)} documents for user {user_id}")
        return comparison
