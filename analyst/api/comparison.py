"""
Comparison API endpoint
"""

import logging

from fastapi import APIRouter, Depends, Request

from analyst.api.deps import get_comparison_service, get_current_user
from analyst.middleware.rate_limiter import chat_rate_limit
from analyst.models.user import User
from analyst.schemas.comparison import CompareRequest, CompareResponse
from analyst.services.comparison_service import ComparisonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["comparison"])


@router.post("/compare", response_model=CompareResponse)
@chat_rate_limit()
async def compare_documents(
    request: Request,
    compare_request: CompareRequest,
    current_user: User = Depends(get_current_user),
    comparison_service: ComparisonService = Depends(get_comparison_service),
):
    """
    Compare 2 to 5 documents

    compare_type is one of summary (default), detailed, themes or
    differences. Any document id that is missing or not owned by the
    caller aborts the comparison with 404 naming that id.
    """
    comparison = await comparison_service.compare(
        compare_request.document_ids,
        current_user.id,
        compare_request.compare_type,
    )
    return CompareResponse(comparison=comparison)
