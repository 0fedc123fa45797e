"""
Error handling module for the Sora Clean Creator Desk.
This module provides consistent error handling across the application.
"""

import logging
import traceback
from functools import wraps

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception class for application errors"""
    def __init__(self, message, error_code=None, details=None):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ConfigurationError(AppError):
    """Required configuration is missing or invalid; blocks every call"""
    pass


class AuthRequired(AppError):
    """No session credential is held; the call was not sent"""
    def __init__(self, message="Authentication required", error_code="AUTH_REQUIRED", details=None):
        super().__init__(message, error_code, details)


class RequestError(AppError):
    """Non-2xx response or transport failure"""
    def __init__(self, message, status_code=None, error_code="REQUEST_FAILED", details=None):
        self.status_code = status_code
        super().__init__(message, error_code, details)


class ValidationError(AppError):
    """Local input rejected before dispatch"""
    def __init__(self, message, error_code="VALIDATION_ERROR", details=None):
        super().__init__(message, error_code, details)


def error_message(error, fallback):
    """Human-readable text for an error, falling back when it has none."""
    if isinstance(error, AppError):
        return error.message or fallback
    return str(error) or fallback


def handle_error(fallback_message):
    """
    Decorator for coroutine functions that talk to the backend.

    Application errors pass through unchanged. Anything else is logged and
    re-raised as a RequestError carrying ``fallback_message``.

    Args:
        fallback_message: Message used when the failure has no text of its own

    Returns:
        Wrapped coroutine function
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                logger.error(f"Unexpected error in {func.__qualname__}: {str(e)}")
                logger.debug(f"Traceback: {traceback.format_exc()}")
                raise RequestError(
                    str(e) or fallback_message,
                    error_code="UNEXPECTED_ERROR",
                    details=repr(e)
                )
        return wrapper
    return decorator


def log_error(error, context=None):
    """
    Log an error with context

    Args:
        error: The error to log
        context: Additional context information

    Returns:
        dict: Summary of the error suitable for display
    """
    error_text = str(error)
    if context:
        error_text += f" | Context: {context}"

    logger.error(error_text)
    debug = logger.isEnabledFor(logging.DEBUG)
    if debug:
        logger.debug(f"Traceback: {traceback.format_exc()}")

    return {
        'success': False,
        'message': error_text,
        'error_code': getattr(error, 'error_code', 'UNKNOWN_ERROR'),
        'details': getattr(error, 'details', None) if debug else None
    }
