"""Error types for the AI content pipeline."""

import asyncio
from typing import Optional
from enum import Enum

import httpx
import openai


class ErrorCategory(str, Enum):
    """Categories of errors for better handling."""
    TIMEOUT = "timeout"  # Model call exceeded its time budget
    UPSTREAM_ERROR = "upstream_error"  # Transport or provider failure
    EMPTY_RESPONSE = "empty_response"  # Call succeeded but returned no usable text
    AGGREGATION = "aggregation"  # Tenant data could not be read
    GENERATION = "generation"  # User-facing generation failure


class GatewayError(Exception):
    """Base exception for failed model invocations. Always fatal to the current call."""
    def __init__(self, message: str, category: ErrorCategory, provider: Optional[str] = None):
        self.message = message
        self.category = category
        self.provider = provider
        super().__init__(message)


class LLMTimeoutError(GatewayError):
    """The model call did not complete within the configured timeout."""
    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message, ErrorCategory.TIMEOUT, provider=provider)


class UpstreamError(GatewayError):
    """Non-timeout transport or service failure."""
    def __init__(self, message: str, provider: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, ErrorCategory.UPSTREAM_ERROR, provider=provider)


class EmptyResponseError(GatewayError):
    """The model answered but the answer carried no text."""
    def __init__(self, message: str = "No content generated from LLM", provider: Optional[str] = None):
        super().__init__(message, ErrorCategory.EMPTY_RESPONSE, provider=provider)


class AggregationError(Exception):
    """Tenant business data could not be loaded."""
    def __init__(self, message: str, tenant_id: Optional[int] = None):
        self.message = message
        self.category = ErrorCategory.AGGREGATION
        self.tenant_id = tenant_id
        super().__init__(message)


class GenerationError(Exception):
    """
    User-facing failure of a generation task.

    The message is safe to show to end users; the underlying gateway error is
    chained as ``__cause__`` and logged, never exposed.
    """
    def __init__(self, task: str, message: str):
        self.task = task
        self.message = message
        self.category = ErrorCategory.GENERATION
        super().__init__(message)


def _is_timeout(error: Exception) -> bool:
    if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException, openai.APITimeoutError)):
        return True
    error_lower = str(error).lower()
    return "timeout" in error_lower or "timed out" in error_lower


def wrap_llm_error(error: Exception, provider: str) -> GatewayError:
    """
    Wrap LLM API errors into our error types.

    Args:
        error: Original exception
        provider: LLM provider name ('openai', 'gemini')

    Returns:
        GatewayError with the matching category
    """
    if isinstance(error, GatewayError):
        return error

    if _is_timeout(error):
        return LLMTimeoutError(f"{provider} call timed out: {error}", provider=provider)

    status_code = getattr(error, "status_code", None)
    if status_code is None:
        response = getattr(error, "response", None)
        status_code = getattr(response, "status_code", None)

    if isinstance(status_code, int):
        return UpstreamError(
            f"{provider} API error ({status_code})",
            provider=provider,
            status_code=status_code,
        )

    return UpstreamError(f"{provider} error: {type(error).__name__}: {error}", provider=provider)
