"""
FastAPI dependencies
Authentication, database session, services
"""

from fastapi import Depends, Header
from sqlalchemy.orm import Session
from typing import Optional
from functools import lru_cache

from analyst.database import get_db
from analyst.models.user import User
from analyst.core.security import IdentityVerifier, get_identity_verifier
from analyst.core.exceptions import AuthenticationError, http_401_unauthorized
from analyst.services.user_service import get_or_create_user
from analyst.storage import StorageBackend, get_storage_backend


@lru_cache(maxsize=1)
def get_verifier() -> IdentityVerifier:
    """Singleton token verifier (keeps the JWKS key cache warm)"""
    return get_identity_verifier()


async def get_current_user(
    authorization: Optional[str] = Header(None, description="Bearer token"),
    db: Session = Depends(get_db),
    verifier: IdentityVerifier = Depends(get_verifier),
) -> User:
    """
    Get current authenticated user from the bearer token

    The user row is created on first sight from the token's sub and
    email claims.

    Raises:
        HTTPException: 401 if authentication fails
    """
    if not authorization:
        raise http_401_unauthorized("Authorization header missing")

    if not authorization.startswith("Bearer "):
        raise http_401_unauthorized("Invalid authorization header format")

    token = authorization[7:].strip()
    if not token:
        raise http_401_unauthorized("Bearer token missing")

    try:
        claims = verifier.verify_token(token)
    except AuthenticationError as e:
        raise http_401_unauthorized(str(e))

    return get_or_create_user(db, claims.sub, claims.email)


# ==============================================================================
# Service Singletons
# ==============================================================================
# Prevent expensive service re-initialization on every request
# Using lru_cache to create singleton instances


@lru_cache(maxsize=1)
def get_ai_service():
    """
    Get singleton AIService instance

    Returns:
        AIService: Singleton model gateway
    """
    from analyst.services.ai_service import AIService
    return AIService()


def get_storage() -> StorageBackend:
    return get_storage_backend()


def get_document_service(
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
):
    from analyst.services.document_service import DocumentService
    return DocumentService(db=db, storage=storage)


def get_chat_service(
    db: Session = Depends(get_db),
    document_service=Depends(get_document_service),
    ai_service=Depends(get_ai_service),
):
    from analyst.services.chat_service import ChatService
    return ChatService(db=db, document_service=document_service, ai_service=ai_service)


def get_comparison_service(
    document_service=Depends(get_document_service),
    ai_service=Depends(get_ai_service),
):
    from analyst.services.comparison_service import ComparisonService
    return ComparisonService(document_service=document_service, ai_service=ai_service)
