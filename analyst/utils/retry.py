"""
Retry Logic Utilities

Automatic retry with exponential backoff for model API calls.
LiteLLM raises subclasses of the OpenAI exception types, so one policy
covers every provider.
"""

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
    after_log
)
from openai import APIConnectionError, APITimeoutError, InternalServerError, RateLimitError
from analyst.config import settings
import logging

logger = logging.getLogger(__name__)

# Transient failures only; authentication and bad-request errors fail immediately
RETRYABLE_API_ERRORS = (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
    ConnectionError,
    TimeoutError,
)


def retry_on_api_error(max_attempts: int = None):
    """
    Decorator for retrying on transient API errors

    Args:
        max_attempts: Maximum attempts (default: settings.RETRY_MAX_ATTEMPTS,
            or a single attempt when RETRY_ENABLED is false)

    Returns:
        Tenacity retry decorator
    """
    if max_attempts is None:
        max_attempts = settings.RETRY_MAX_ATTEMPTS if settings.RETRY_ENABLED else 1

    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=2,
            max=30,
            exp_base=settings.RETRY_EXPONENTIAL_BASE
        ),
        retry=retry_if_exception_type(RETRYABLE_API_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.DEBUG),
        reraise=True,
    )
