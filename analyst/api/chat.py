"""
Chat API endpoints
Questions about a single document, answered from its chunks
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from analyst.api.deps import get_chat_service, get_current_user
from analyst.middleware.rate_limiter import chat_rate_limit
from analyst.models.user import User
from analyst.schemas.chat import ChatMessageResponse, ChatRequest, ChatResponse
from analyst.services.chat_service import ChatService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/documents", tags=["chat"])


@router.get("/{document_id}/chat", response_model=List[ChatMessageResponse])
async def get_chat_history(
    document_id: str,
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Chat history for a document, oldest first"""
    return chat_service.get_chat_history(document_id, current_user.id)


@router.post(
    "/{document_id}/chat",
    response_model=ChatResponse,
    responses={
        202: {"description": "Document is still being processed, retry shortly"},
        503: {"description": "AI service not configured"},
    },
)
@chat_rate_limit()
async def send_message(
    request: Request,
    document_id: str,
    chat_request: ChatRequest,
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Ask a question about a document

    The question is stored before the model is called and stays in the
    history even if the answer fails.
    """
    return await chat_service.send_message(document_id, current_user.id, chat_request.message)


@router.delete("/{document_id}/chat", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_history(
    document_id: str,
    current_user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Delete the whole conversation about a document"""
    chat_service.delete_chat_history(document_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
