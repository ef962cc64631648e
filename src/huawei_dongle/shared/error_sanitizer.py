"""
Huawei Dongle Client - Error Message Sanitization

This module provides utilities for sanitizing error messages to prevent
information disclosure while maintaining helpful user feedback.
"""

import json
import logging
import re
from typing import Any

import httpx

from ..core.exceptions import (
    AccountLockedError,
    ApiError,
    ConfigurationError,
    DongleError,
    ErrorKind,
)

logger = logging.getLogger("huawei-dongle")

USER_MESSAGES = {
    ErrorKind.TRANSPORT_ERROR: "Cannot reach the device. Check the URL and network connectivity.",
    ErrorKind.SERVER_ERROR: "The device reported an internal error. It may be busy or rebooting.",
    ErrorKind.CLIENT_ERROR: "The device rejected the request.",
    ErrorKind.AUTHENTICATION_FAILED: "The device refused access. Log in again.",
    ErrorKind.CSRF_INVALID: "The device rejected the session token. Try again.",
    ErrorKind.SESSION_INVALID: "The device session expired. Try again.",
    ErrorKind.LOGIN_REQUIRED: "This operation requires login. Configure a username and password.",
    ErrorKind.INVALID_USERNAME: "Login failed: unknown username.",
    ErrorKind.INVALID_PASSWORD: "Login failed: wrong password.",
    ErrorKind.INVALID_CREDENTIALS: "Login failed: wrong username or password.",
    ErrorKind.TOO_MANY_LOGIN_ATTEMPTS: "Too many login attempts. Wait before trying again.",
    ErrorKind.ALREADY_LOGGED_IN: "Another session is already logged in to the device.",
    ErrorKind.SESSION_ERROR: "Could not obtain a session token from the device.",
    ErrorKind.PARSE_ERROR: "Received an unexpected response from the device.",
}


class ErrorMessageSanitizer:
    """Sanitize error messages for safe user display."""

    # Sensitive patterns that should never appear in user-facing messages
    SENSITIVE_PATTERNS = [
        "password",
        "token",
        "cookie",
        "sessionid",
        "credential",
        "authorization",
        "secret",
    ]

    @staticmethod
    def sanitize_for_user(error: Exception, operation: str = "operation") -> str:
        """
        Return user-safe error message without sensitive details.

        Args:
            error: The exception to sanitize
            operation: Description of the operation that failed

        Returns:
            User-safe error message
        """
        if isinstance(error, AccountLockedError):
            return (
                f"The account is locked. Try again in {error.remaining_wait_time} seconds."
            )

        if isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}"

        if isinstance(error, ApiError):
            # Device messages may echo request details, sanitize them
            return f"Device API error: {ErrorMessageSanitizer._sanitize_text(error.message)}"

        if isinstance(error, DongleError) and error.kind in USER_MESSAGES:
            return USER_MESSAGES[error.kind]

        if isinstance(error, httpx.ConnectError):
            return "Cannot connect to the device. Please check the URL and network."

        if isinstance(error, httpx.TimeoutException):
            return "Request timed out. The device may be overloaded."

        # Generic message for unexpected errors
        return f"An error occurred during {operation}. Please check the logs for details."

    @staticmethod
    def sanitize_for_logs(error: Exception) -> dict[str, Any]:
        """
        Return detailed error info for logging (never shown to users).

        Args:
            error: The exception to log

        Returns:
            Dictionary with error details for logging
        """
        error_info = {
            "error_type": type(error).__name__,
            "error_module": error.__class__.__module__,
            "error_message": ErrorMessageSanitizer._sanitize_text(str(error)),
        }

        if isinstance(error, DongleError):
            error_info["error_code"] = error.error_code
            error_info["device_code"] = error.device_code
            error_info["retryable"] = error.retryable
            error_info["context"] = ErrorMessageSanitizer._sanitize_context(error.context)

        return error_info

    @staticmethod
    def _sanitize_text(text: str) -> str:
        """
        Remove sensitive values from text.

        e.g. "password=secret123" becomes "password=[REDACTED]"
        """
        sanitized = text
        for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS:
            if pattern in sanitized.lower():
                sanitized = re.sub(
                    f"{pattern}[=:]\\S+",
                    f"{pattern}=[REDACTED]",
                    sanitized,
                    flags=re.IGNORECASE,
                )
        return sanitized

    @staticmethod
    def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any]:
        """Remove sensitive data from context dictionary."""
        if not context:
            return {}

        sanitized = {}
        for key, value in context.items():
            key_lower = key.lower()
            is_sensitive = any(
                pattern in key_lower for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS
            )

            if is_sensitive:
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = ErrorMessageSanitizer._sanitize_context(value)
            elif isinstance(value, str):
                sanitized[key] = ErrorMessageSanitizer._sanitize_text(value)
            else:
                sanitized[key] = value

        return sanitized


def log_error_safely(
    logger: logging.Logger,
    error: Exception,
    operation: str = "operation",
    user_message: str | None = None,
) -> str:
    """
    Log error with full details and return sanitized user message.

    Args:
        logger: Logger instance
        error: Exception that occurred
        operation: Description of the operation
        user_message: Optional custom user message

    Returns:
        Sanitized user-facing error message
    """
    error_details = ErrorMessageSanitizer.sanitize_for_logs(error)
    logger.error(
        f"Error in {operation}: {json.dumps(error_details, default=str)}",
        exc_info=True,
    )

    if user_message:
        return user_message
    return ErrorMessageSanitizer.sanitize_for_user(error, operation)
