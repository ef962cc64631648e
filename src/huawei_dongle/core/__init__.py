"""
Huawei Dongle Client - Core Infrastructure

This package contains the session, token, retry and request pipeline components
shared by every endpoint.
"""

from .auth import PasswordEncoding, encode_password
from .config_loader import ConfigLoader
from .exceptions import (
    AccountLockedError,
    AlreadyLoggedInError,
    ApiError,
    AuthenticationFailedError,
    ClientError,
    ConfigurationError,
    CsrfInvalidError,
    DongleError,
    ErrorKind,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidUsernameError,
    LoginRequiredError,
    ResponseParseError,
    ServerError,
    SessionError,
    SessionInvalidError,
    TooManyLoginAttemptsError,
    TransportError,
)
from .models import DongleConfig
from .payload import ApiOutcome, Failure, Success
from .pipeline import RequestPipeline, RequestResponseLogger
from .retry import RetryEngine, RetryPolicy, retry_with_backoff
from .session import SessionManager, SessionState
from .token import TokenFetcher

__all__ = [
    # Exceptions
    "ErrorKind",
    "DongleError",
    "TransportError",
    "ServerError",
    "ClientError",
    "AuthenticationFailedError",
    "CsrfInvalidError",
    "SessionInvalidError",
    "LoginRequiredError",
    "InvalidUsernameError",
    "InvalidPasswordError",
    "InvalidCredentialsError",
    "TooManyLoginAttemptsError",
    "AlreadyLoggedInError",
    "AccountLockedError",
    "ApiError",
    "SessionError",
    "ResponseParseError",
    "ConfigurationError",
    # Configuration
    "DongleConfig",
    "ConfigLoader",
    # Session
    "SessionManager",
    "SessionState",
    "TokenFetcher",
    # Requests
    "RequestPipeline",
    "RequestResponseLogger",
    "ApiOutcome",
    "Success",
    "Failure",
    # Retry
    "RetryPolicy",
    "RetryEngine",
    "retry_with_backoff",
    # Auth
    "PasswordEncoding",
    "encode_password",
]
