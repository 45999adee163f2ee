"""
Centralized Error Handling

Maps the analyst exception hierarchy, model API errors and database
errors to consistent JSON responses. Every body carries "detail" (human
readable) and "error" (machine readable kind).
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from openai import APIError, RateLimitError, APITimeoutError
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError
from typing import Dict, Any
import logging
import traceback

from analyst.core.exceptions import (
    AnalystException,
    AuthenticationError,
    ValidationError,
    NotFoundError,
    DependencyUnavailableError,
    DocumentProcessingError,
)
from analyst.utils.sanitize import sanitize_string

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def handle_analyst_error(error: AnalystException) -> tuple[int, Dict[str, Any]]:
        """
        Map an analyst exception to a status code and body

        Args:
            error: Exception raised by a service

        Returns:
            (status_code, error dictionary)
        """
        message = sanitize_string(str(error))

        if isinstance(error, ValidationError):
            logger.warning(f"Validation error: {message}")
            return status.HTTP_400_BAD_REQUEST, {"error": "validation_error", "detail": message}

        if isinstance(error, AuthenticationError):
            logger.warning(f"Authentication error: {message}")
            return status.HTTP_401_UNAUTHORIZED, {"error": "unauthorized", "detail": message}

        if isinstance(error, NotFoundError):
            logger.info(f"Not found: {message}")
            return status.HTTP_404_NOT_FOUND, {"error": "not_found", "detail": message}

        if isinstance(error, DocumentProcessingError):
            return status.HTTP_202_ACCEPTED, {"error": "processing", "detail": message}

        if isinstance(error, DependencyUnavailableError):
            logger.error(f"Dependency unavailable: {message}")
            return status.HTTP_503_SERVICE_UNAVAILABLE, {"error": "service_unavailable", "detail": message}

        logger.error(f"{type(error).__name__}: {message}", exc_info=error)
        return status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "internal_error", "detail": message}

    @staticmethod
    def handle_llm_error(error: Exception) -> Dict[str, Any]:
        """
        Handle model API errors that escaped the services

        Args:
            error: OpenAI-compatible exception (LiteLLM raises these too)

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, RateLimitError):
            logger.warning(f"LLM rate limit exceeded: {sanitize_string(str(error))}")
            return {
                "error": "rate_limit",
                "detail": "AI provider rate limit exceeded. Please try again in a moment.",
                "retry_after": 60,
            }

        elif isinstance(error, APITimeoutError):
            logger.warning(f"LLM API timeout: {sanitize_string(str(error))}")
            return {
                "error": "timeout",
                "detail": "AI provider request timed out. Please try again.",
            }

        logger.error(f"LLM API error: {sanitize_string(str(error))}")
        return {
            "error": "api_error",
            "detail": "AI provider error occurred. Please try again.",
        }

    @staticmethod
    def handle_database_error(error: Exception) -> Dict[str, Any]:
        """
        Handle database errors

        Args:
            error: Database exception

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, IntegrityError):
            logger.warning(f"Database integrity error: {error}")
            return {
                "error": "integrity_error",
                "detail": "Data integrity violation. Duplicate entry or constraint failed.",
            }

        elif isinstance(error, (OperationalError, DBAPIError)):
            logger.error(f"Database error: {error}")
            return {
                "error": "database_error",
                "detail": "Database error occurred.",
            }

        logger.error(f"Unknown database error: {error}")
        return {
            "error": "unknown",
            "detail": "An unexpected database error occurred."
        }

    @staticmethod
    def handle_generic_error(error: Exception) -> Dict[str, Any]:
        logger.error(f"Unexpected error: {sanitize_string(str(error))}\n{traceback.format_exc()}")
        return {
            "error": "internal_error",
            "detail": "An unexpected error occurred. Please try again.",
            "type": type(error).__name__
        }


# Global exception handlers for FastAPI

async def analyst_error_handler(request: Request, exc: AnalystException):
    """FastAPI exception handler for the analyst exception hierarchy"""
    status_code, error_data = ErrorHandler.handle_analyst_error(exc)
    return JSONResponse(status_code=status_code, content=error_data)


async def llm_error_handler(request: Request, exc: APIError):
    """FastAPI exception handler for model API errors"""
    error_data = ErrorHandler.handle_llm_error(exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_data
    )


async def database_error_handler(request: Request, exc: DBAPIError):
    """FastAPI exception handler for database errors"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


async def generic_error_handler(request: Request, exc: Exception):
    """FastAPI exception handler for generic errors"""
    error_data = ErrorHandler.handle_generic_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


def setup_error_handlers(app):
    """
    Setup global error handlers for FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AnalystException, analyst_error_handler)
    app.add_exception_handler(APIError, llm_error_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
