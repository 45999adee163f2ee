"""
Utility Functions and Classes

Provides retry logic, error handling, and sanitizing helpers.
"""

from analyst.utils.retry import retry_on_api_error
from analyst.utils.error_handlers import (
    ErrorHandler,
    setup_error_handlers
)
from analyst.utils.sanitize import sanitize_filename, sanitize_string

__all__ = [
    "retry_on_api_error",
    "ErrorHandler",
    "setup_error_handlers",
    "sanitize_filename",
    "sanitize_string",
]
