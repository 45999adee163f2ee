"""
Custom exceptions for Strategy Analyst API
"""

from fastapi import HTTPException, status


class AnalystException(Exception):
    """Base exception for Strategy Analyst"""
    pass


class AuthenticationError(AnalystException):
    """Authentication failed"""
    pass


class ValidationError(AnalystException):
    """Empty or out-of-range input"""
    pass


class NotFoundError(AnalystException):
    """Resource not found, or owned by someone else"""
    pass


class DependencyUnavailableError(AnalystException):
    """An external collaborator was never configured"""
    pass


class StorageUnavailableError(DependencyUnavailableError):
    """Blob storage is not configured or unreachable"""

    def __init__(self, message: str = "storage service is not initialized"):
        super().__init__(message)


class AIServiceUnavailableError(DependencyUnavailableError):
    """No model credentials were configured"""

    def __init__(self, message: str = "AI client not initialized"):
        super().__init__(message)


class DocumentProcessingError(AnalystException):
    """Document has no chunks yet; the caller should retry shortly"""

    def __init__(
        self,
        message: str = "document is still being processed, please try again in a moment"
    ):
        super().__init__(message)


class DocumentServiceError(AnalystException):
    """Document repository operation failed"""
    pass


class ChatServiceError(AnalystException):
    """Chat or comparison operation failed"""
    pass


class AIServiceError(AnalystException):
    """Model call failed or returned nothing"""
    pass


class ExtractionError(AnalystException):
    """Text could not be extracted from a file"""
    pass


# HTTP exception helpers
def http_401_unauthorized(detail: str = "Invalid authentication credentials"):
    """Raise 401 Unauthorized"""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def http_400_bad_request(detail: str = "Bad request"):
    """Raise 400 Bad Request"""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def http_413_too_large(detail: str = "File too large"):
    """Raise 413 Request Entity Too Large"""
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=detail,
    )
