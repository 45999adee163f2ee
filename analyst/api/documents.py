"""
Document API endpoints
Upload, list, fetch, delete, readiness status and reprocessing
"""

import logging
import os
from typing import List

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status

from analyst.api.deps import get_current_user, get_document_service
from analyst.config import settings
from analyst.core.exceptions import http_400_bad_request, http_413_too_large
from analyst.middleware.rate_limiter import upload_rate_limit
from analyst.models.user import User
from analyst.schemas.document import (
    DocumentResponse,
    DocumentStatusResponse,
    DocumentUploadResponse,
    ReprocessResponse,
)
from analyst.services.document_service import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """List the current user's documents, newest first"""
    return document_service.get_documents(current_user.id)


@router.post("", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
@upload_rate_limit()
async def upload_document(
    request: Request,
    document: UploadFile = File(..., description="PDF or TXT file"),
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Upload a document and start background processing

    The response returns once the file and its record are stored. Poll
    GET /documents/{id}/status until ready_for_chat is true.

    Raises:
        HTTPException: 400 for a missing name or unsupported extension
        HTTPException: 413 if the file exceeds MAX_UPLOAD_SIZE
        HTTPException: 503 if storage is unavailable
    """
    file_name = document.filename or ""
    if not file_name:
        raise http_400_bad_request("No file provided")

    extension = os.path.splitext(file_name)[1].lower()
    if extension not in settings.ALLOWED_EXTENSIONS:
        raise http_400_bad_request(
            f"Unsupported file type '{extension or file_name}'. "
            f"Allowed: {', '.join(settings.ALLOWED_EXTENSIONS)}"
        )

    content = await document.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(content) > settings.MAX_UPLOAD_SIZE:
        max_mb = settings.MAX_UPLOAD_SIZE / (1024 * 1024)
        raise http_413_too_large(f"File too large. Maximum size is {max_mb:.0f}MB")

    created = document_service.create_document(
        current_user.id,
        file_name,
        content,
        content_type=document.content_type,
    )
    logger.info(f"User {current_user.id} uploaded {file_name} as document {created.id}")

    return DocumentUploadResponse(document_id=created.id)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """Get one document (404 if missing or owned by someone else)"""
    return document_service.get_document(document_id, current_user.id)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """Delete a document with its chunks, chat history and blob"""
    document_service.delete_document(document_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{document_id}/status", response_model=DocumentStatusResponse)
async def get_document_status(
    document_id: str,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """Processing status: ready once the document has at least one chunk"""
    return document_service.get_document_status(document_id, current_user.id)


@router.post("/{document_id}/reprocess", response_model=ReprocessResponse)
def reprocess_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Replace the document's chunks by running processing again

    Runs in the request (worker thread), so the new chunks exist when
    the response arrives.
    """
    chunks_count = document_service.reprocess_document(document_id, current_user.id)
    logger.info(f"Reprocessed document {document_id}: {chunks_count} chunks")
    return ReprocessResponse()
