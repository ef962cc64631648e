"""
Huawei Dongle Client - Error Taxonomy

Maps HTTP status codes, device payload error codes and network failures onto
``ErrorKind`` values and builds the matching exceptions. Classification has no
side effects; session invalidation is left to the request pipeline.
"""

import httpx

from .exceptions import (
    ERROR_CLASSES,
    ApiError,
    AuthenticationFailedError,
    ClientError,
    DongleError,
    ErrorKind,
    ServerError,
    TransportError,
)

# Device error codes returned inside <error><code>...</code></error>
SYSTEM_UNKNOWN = 100001
SYSTEM_NO_SUPPORT = 100002
NO_RIGHTS = 100003
SYSTEM_BUSY = 100004
FORMAT_ERROR = 100005
USERNAME_WRONG = 108001
PASSWORD_WRONG = 108002
ALREADY_LOGIN = 108003
USERNAME_PWD_WRONG = 108006
USERNAME_PWD_OVERRUN = 108007
PASSWORD_CHANGE_REQUIRED = 115002
WRONG_TOKEN = 125001
CSRF_TOKEN_ERROR = 125002
SESSION_TOKEN_ERROR = 125003

DEVICE_CODE_KINDS: dict[int, ErrorKind] = {
    WRONG_TOKEN: ErrorKind.CSRF_INVALID,
    CSRF_TOKEN_ERROR: ErrorKind.CSRF_INVALID,
    SESSION_TOKEN_ERROR: ErrorKind.SESSION_INVALID,
    NO_RIGHTS: ErrorKind.LOGIN_REQUIRED,
    USERNAME_WRONG: ErrorKind.INVALID_USERNAME,
    PASSWORD_WRONG: ErrorKind.INVALID_PASSWORD,
    ALREADY_LOGIN: ErrorKind.ALREADY_LOGGED_IN,
    USERNAME_PWD_WRONG: ErrorKind.INVALID_CREDENTIALS,
    USERNAME_PWD_OVERRUN: ErrorKind.TOO_MANY_LOGIN_ATTEMPTS,
}

DEVICE_CODE_DESCRIPTIONS: dict[int, str] = {
    SYSTEM_UNKNOWN: "System unknown error",
    SYSTEM_NO_SUPPORT: "System does not support this operation",
    NO_RIGHTS: "No rights (login required)",
    SYSTEM_BUSY: "System busy",
    FORMAT_ERROR: "Format error",
    USERNAME_WRONG: "Username wrong",
    PASSWORD_WRONG: "Password wrong",
    ALREADY_LOGIN: "Already logged in",
    USERNAME_PWD_WRONG: "Username or password wrong",
    USERNAME_PWD_OVERRUN: "Too many login attempts",
    PASSWORD_CHANGE_REQUIRED: "Password change required",
    WRONG_TOKEN: "Wrong token",
    CSRF_TOKEN_ERROR: "CSRF token invalid",
    SESSION_TOKEN_ERROR: "Wrong session token",
}

# Device codes without a dedicated kind that are still worth retrying
TRANSIENT_DEVICE_CODES = frozenset({SYSTEM_BUSY})


def classify_status(status_code: int) -> ErrorKind | None:
    """Classify an HTTP status code; ``None`` means success."""
    if 200 <= status_code < 300:
        return None
    if status_code in (401, 403):
        return ErrorKind.AUTHENTICATION_FAILED
    if 500 <= status_code < 600:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.CLIENT_ERROR


def classify_device_code(code: int) -> ErrorKind:
    """Classify a device payload error code."""
    return DEVICE_CODE_KINDS.get(code, ErrorKind.API_ERROR)


def describe_device_code(code: int) -> str:
    return DEVICE_CODE_DESCRIPTIONS.get(code, f"Unknown error code {code}")


def status_error(status_code: int, endpoint: str) -> DongleError | None:
    """Build the exception for a non-2xx HTTP status, or ``None`` for 2xx."""
    kind = classify_status(status_code)
    if kind is None:
        return None

    context = {"status_code": status_code, "endpoint": endpoint}
    if kind is ErrorKind.AUTHENTICATION_FAILED:
        return AuthenticationFailedError(
            f"Authentication failed: HTTP {status_code}",
            status_code=status_code,
            context=context,
        )
    if kind is ErrorKind.SERVER_ERROR:
        return ServerError(
            f"Server error: HTTP {status_code}", status_code=status_code, context=context
        )
    return ClientError(f"Client error: HTTP {status_code}", status_code=status_code, context=context)


def device_error(code: int, message: str | None = None, endpoint: str | None = None) -> DongleError:
    """Build the exception for a device payload error code."""
    kind = classify_device_code(code)
    text = message or describe_device_code(code)
    context = {"endpoint": endpoint} if endpoint else {}

    if kind is ErrorKind.API_ERROR:
        return ApiError(
            code,
            text,
            retryable=code in TRANSIENT_DEVICE_CODES,
            context=context,
        )
    return ERROR_CLASSES[kind](text, device_code=code, context=context)


def transport_error(error: httpx.RequestError, endpoint: str, timeout: float | None = None) -> TransportError:
    """Build the exception for a network-layer failure."""
    if isinstance(error, httpx.TimeoutException):
        return TransportError(
            f"Request timed out after {timeout}s",
            context={"timeout": timeout, "endpoint": endpoint},
        )
    if isinstance(error, httpx.ConnectError):
        return TransportError(
            f"Cannot connect to device: {error}",
            context={"endpoint": endpoint, "error": str(error)},
        )
    return TransportError(
        f"Network error: {error}", context={"endpoint": endpoint, "error": str(error)}
    )
