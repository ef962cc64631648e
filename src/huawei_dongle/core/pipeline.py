"""
Huawei Dongle Client - Request Pipeline

This module runs single logical API calls against the device: it attaches the
CSRF token, sends the request under the retry policy, classifies HTTP and
payload outcomes and recovers from a rejected token by refreshing it and
replaying the request exactly once.
"""

import json
import logging
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, TypeVar

import httpx
from aiolimiter import AsyncLimiter

from ..shared.constants import (
    FORM_CONTENT_TYPE,
    REQUESTED_WITH_HEADER,
    REQUESTED_WITH_VALUE,
    SENSITIVE_HEADERS,
    TOKEN_HEADER,
    TOKEN_RESPONSE_HEADERS,
)
from .exceptions import ErrorKind
from .payload import ApiOutcome, Success, parse_outcome
from .retry import RetryEngine
from .session import SessionManager
from .taxonomy import device_error, status_error, transport_error

logger = logging.getLogger("huawei-dongle")

T = TypeVar("T")


class RequestResponseLogger:
    """Framework for logging API requests and responses with sensitive data protection."""

    def __init__(self, logger: logging.Logger):
        """Initialize request/response logger.

        Args:
            logger: Logger instance to use for logging
        """
        self.logger = logger

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict] = None,
        data: Optional[str] = None,
        operation: str = "unknown"
    ):
        """Log API request details with token and cookie headers redacted.

        Args:
            method: HTTP method
            url: Request URL
            headers: Request headers
            data: Request body
            operation: Operation name for context
        """
        safe_headers = {}
        if headers:
            for key, value in headers.items():
                if key.lower() in SENSITIVE_HEADERS:
                    safe_headers[key] = '[REDACTED]'
                else:
                    safe_headers[key] = value

        log_data = {
            "operation": operation,
            "request": {
                "method": method,
                "url": url,
                "headers": safe_headers,
                "has_data": bool(data)
            }
        }

        self.logger.info(f"API Request: {json.dumps(log_data)}")

    def log_response(
        self,
        status_code: int,
        response_size: Optional[int] = None,
        duration_ms: Optional[float] = None,
        operation: str = "unknown",
        error: Optional[Exception] = None
    ):
        """Log API response details with performance metrics.

        Args:
            status_code: HTTP status code (0 when no response arrived)
            response_size: Size of response in bytes
            duration_ms: Request duration in milliseconds
            operation: Operation name for context
            error: Exception if request failed
        """
        log_data = {
            "operation": operation,
            "response": {
                "status_code": status_code,
                "response_size": response_size,
                "duration_ms": duration_ms,
                "success": 200 <= status_code < 300,
                "has_error": bool(error)
            }
        }

        if error:
            log_data["error"] = str(error)

        level = logging.INFO if log_data["response"]["success"] and not error else logging.WARNING
        self.logger.log(level, f"API Response: {json.dumps(log_data)}")


# Initialize request/response logger
request_logger = RequestResponseLogger(logger)


class RequestPipeline:
    """Executes logical API calls with token handling, retries and replay."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        session: SessionManager,
        retry_engine: Optional[RetryEngine] = None,
        timeout: float = 30.0,
        limiter: Optional[AsyncLimiter] = None,
    ):
        """Initialize request pipeline.

        Args:
            http_client: HTTP client; its cookie jar carries the device session
            base_url: Device base URL
            session: Session state shared by all calls of the client
            retry_engine: Retry policy runner for transient failures
            timeout: Timeout in seconds for each HTTP attempt
            limiter: Optional request throttle
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.retry_engine = retry_engine or RetryEngine()
        self.timeout = timeout
        self.limiter = limiter

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    async def call(
        self,
        path: str,
        body: Optional[str] = None,
        authenticated: bool = True,
        operation: str = "api_request",
    ) -> str:
        """Run one logical API call and return the response body.

        A token is attached when the call is authenticated or posts a body. If the
        device rejects the token, the session is invalidated, a fresh token is
        fetched and the request is replayed once; a second rejection is raised.

        Args:
            path: API path, e.g. "/api/monitoring/status"
            body: XML request body; sent as POST when given, otherwise GET
            authenticated: Whether the call needs the CSRF token
            operation: Operation name for logging/error context

        Returns:
            Raw response body text

        Raises:
            DongleError: The classified transport, HTTP or device error
        """
        attach_token = authenticated or body is not None

        outcome = await self._exchange(path, body, attach_token, operation)
        if isinstance(outcome, Success):
            return outcome.payload

        error = device_error(outcome.code, outcome.message or None, path)
        logger.debug("Session/CSRF error, invalidating session")
        await self.session.invalidate()

        if attach_token:
            logger.debug("CSRF/Session error in response, refreshing token and retrying")
            await self.session.force_refresh()

            outcome = await self._exchange(path, body, attach_token, operation)
            if isinstance(outcome, Success):
                return outcome.payload

            error = device_error(outcome.code, outcome.message or None, path)
            await self.session.invalidate()

        raise error

    async def authenticated_call(
        self,
        path: str,
        body: Optional[str] = None,
        parse: Optional[Callable[[str], T]] = None,
        operation: str = "api_request",
    ) -> T | str:
        """Run an authenticated call and hand the body to ``parse``."""
        text = await self.call(path, body, authenticated=True, operation=operation)
        return parse(text) if parse else text

    async def _exchange(
        self, path: str, body: Optional[str], attach_token: bool, operation: str
    ) -> ApiOutcome:
        return await self.retry_engine.execute(
            lambda: self._attempt(path, body, attach_token, operation)
        )

    async def _attempt(
        self, path: str, body: Optional[str], attach_token: bool, operation: str
    ) -> ApiOutcome:
        """One attempt under the retry policy.

        Device errors are raised here, inside the retry loop, so a busy device
        is retried. Token rejections are handed back to ``call`` for the
        refresh-and-replay recovery.
        """
        outcome = parse_outcome(await self._send(path, body, attach_token, operation))
        if isinstance(outcome, Success):
            return outcome

        error = device_error(outcome.code, outcome.message or None, path)
        logger.debug(f"API error detected: {outcome.code} - {error.message}")
        if error.kind.is_token_error:
            return outcome
        raise error

    async def _send(
        self, path: str, body: Optional[str], attach_token: bool, operation: str
    ) -> str:
        """Single HTTP attempt: attach token, send, check status, keep rotated token."""
        url = self.build_url(path)
        method = "GET" if body is None else "POST"

        headers = {REQUESTED_WITH_HEADER: REQUESTED_WITH_VALUE}
        if attach_token:
            headers[TOKEN_HEADER] = await self.session.get_token()
        if body is not None:
            headers["Content-Type"] = FORM_CONTENT_TYPE

        request_logger.log_request(method, url, headers, body, operation)
        start_time = datetime.now(timezone.utc)

        try:
            async with self.limiter or nullcontext():
                if body is None:
                    response = await self.http_client.get(url, headers=headers, timeout=self.timeout)
                else:
                    response = await self.http_client.post(
                        url, headers=headers, content=body.encode(), timeout=self.timeout
                    )
        except httpx.RequestError as e:
            duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
            request_logger.log_response(0, 0, duration_ms, operation, e)
            raise transport_error(e, path, self.timeout)

        duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
        response_size = len(response.content) if response.content else 0

        error = status_error(response.status_code, path)
        if error is not None:
            request_logger.log_response(response.status_code, response_size, duration_ms, operation, error)
            if error.kind is ErrorKind.AUTHENTICATION_FAILED:
                logger.debug("Authentication error, invalidating session")
                await self.session.invalidate()
            raise error

        await self._update_token_from_headers(response.headers)
        request_logger.log_response(response.status_code, response_size, duration_ms, operation)
        return response.text

    async def _update_token_from_headers(self, headers: httpx.Headers):
        for header_name in TOKEN_RESPONSE_HEADERS:
            token = headers.get(header_name)
            if token:
                await self.session.update_token(token)
                logger.debug(f"Updated CSRF token from response header {header_name}")
                return
