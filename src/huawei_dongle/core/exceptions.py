"""
Huawei Dongle Client - Exception Hierarchy

This module contains the closed set of error kinds surfaced by the client and the
exception class bound to each of them. Every error carries its ``retryable`` flag,
decided once when the error is classified.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error kinds surfaced to callers."""

    TRANSPORT_ERROR = "transport_error"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    AUTHENTICATION_FAILED = "authentication_failed"
    CSRF_INVALID = "csrf_invalid"
    SESSION_INVALID = "session_invalid"
    LOGIN_REQUIRED = "login_required"
    INVALID_USERNAME = "invalid_username"
    INVALID_PASSWORD = "invalid_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOO_MANY_LOGIN_ATTEMPTS = "too_many_login_attempts"
    ALREADY_LOGGED_IN = "already_logged_in"
    ACCOUNT_LOCKED = "account_locked"
    API_ERROR = "api_error"
    SESSION_ERROR = "session_error"
    PARSE_ERROR = "parse_error"
    CONFIG_ERROR = "config_error"

    @property
    def retryable(self) -> bool:
        """Default retryable flag for this kind."""
        return self in _RETRYABLE_KINDS

    @property
    def is_token_error(self) -> bool:
        """True for the kinds recovered by refreshing the token and replaying."""
        return self in (ErrorKind.CSRF_INVALID, ErrorKind.SESSION_INVALID)


_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.TRANSPORT_ERROR,
        ErrorKind.SERVER_ERROR,
        ErrorKind.CSRF_INVALID,
        ErrorKind.SESSION_INVALID,
        ErrorKind.SESSION_ERROR,
    }
)


class DongleError(Exception):
    """Base exception for all device and client errors with enhanced context."""

    kind: ErrorKind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str,
        device_code: int | None = None,
        retryable: bool | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.device_code = device_code
        self.retryable = self.kind.retryable if retryable is None else retryable
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    @property
    def error_code(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_kind": self.kind.value,
            "device_code": self.device_code,
            "retryable": self.retryable,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


class TransportError(DongleError):
    """Network communication failed (timeout, connection refused, ...)."""

    kind = ErrorKind.TRANSPORT_ERROR


class ServerError(DongleError):
    """Device answered with an HTTP 5xx status."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class ClientError(DongleError):
    """Device answered with an HTTP 4xx status other than 401/403."""

    kind = ErrorKind.CLIENT_ERROR

    def __init__(self, message: str, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class AuthenticationFailedError(DongleError):
    """Device answered with HTTP 401 or 403."""

    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, message: str, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class CsrfInvalidError(DongleError):
    """The CSRF token sent with the request was rejected."""

    kind = ErrorKind.CSRF_INVALID


class SessionInvalidError(DongleError):
    """The session token sent with the request was rejected."""

    kind = ErrorKind.SESSION_INVALID


class LoginRequiredError(DongleError):
    """The operation needs an authenticated session."""

    kind = ErrorKind.LOGIN_REQUIRED


class InvalidUsernameError(DongleError):
    kind = ErrorKind.INVALID_USERNAME


class InvalidPasswordError(DongleError):
    kind = ErrorKind.INVALID_PASSWORD


class InvalidCredentialsError(DongleError):
    kind = ErrorKind.INVALID_CREDENTIALS


class TooManyLoginAttemptsError(DongleError):
    kind = ErrorKind.TOO_MANY_LOGIN_ATTEMPTS


class AlreadyLoggedInError(DongleError):
    kind = ErrorKind.ALREADY_LOGGED_IN


class AccountLockedError(DongleError):
    """Login refused up front because the device locked the account."""

    kind = ErrorKind.ACCOUNT_LOCKED

    def __init__(self, message: str, remaining_wait_time: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.remaining_wait_time = remaining_wait_time


class ApiError(DongleError):
    """Device error code without a dedicated kind."""

    kind = ErrorKind.API_ERROR

    def __init__(self, code: int, message: str, **kwargs):
        super().__init__(f"API error {code}: {message}", device_code=code, **kwargs)
        self.code = code
        self.device_message = message


class SessionError(DongleError):
    """A CSRF token could not be obtained from the device."""

    kind = ErrorKind.SESSION_ERROR


class ResponseParseError(DongleError):
    """A response body could not be parsed into the expected record."""

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str, response_text: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.response_text = response_text


class ConfigurationError(DongleError):
    """Invalid client configuration."""

    kind = ErrorKind.CONFIG_ERROR


ERROR_CLASSES: dict[ErrorKind, type[DongleError]] = {
    cls.kind: cls
    for cls in (
        TransportError,
        ServerError,
        ClientError,
        AuthenticationFailedError,
        CsrfInvalidError,
        SessionInvalidError,
        LoginRequiredError,
        InvalidUsernameError,
        InvalidPasswordError,
        InvalidCredentialsError,
        TooManyLoginAttemptsError,
        AlreadyLoggedInError,
        AccountLockedError,
        ApiError,
        SessionError,
        ResponseParseError,
        ConfigurationError,
    )
}
