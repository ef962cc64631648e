"""
Huawei Dongle Client - API Client

This module provides the main client class for interacting with the device web API.
"""

import logging
import ssl
from typing import Optional

import certifi
import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from .api import AuthApi, DeviceApi, DhcpApi, MonitoringApi, NetworkApi, SmsApi
from .core.exceptions import ConfigurationError
from .core.models import DongleConfig
from .core.pipeline import RequestPipeline
from .core.retry import RetryEngine
from .core.session import SessionManager, SessionState
from .core.token import TokenFetcher

logger = logging.getLogger("huawei-dongle")


class DongleClient:
    """Client for interacting with a Huawei dongle or router web API."""

    def _create_ssl_context(self, verify_ssl: bool) -> ssl.SSLContext:
        """
        Create SSL context with security hardening.

        Args:
            verify_ssl: Whether to verify SSL certificates

        Returns:
            Configured SSL context

        Notes:
            - When verify_ssl=False, logs a security warning
            - When verify_ssl=True, enforces TLS 1.2+ and certificate validation
            - Uses certifi for up-to-date CA bundle
        """
        if not verify_ssl:
            logger.warning(
                "SSL certificate verification is disabled. "
                "The connection to the device is open to man-in-the-middle attacks."
            )
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            return context

        context = ssl.create_default_context(cafile=certifi.where())
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED

        # Enforce TLS 1.2+
        context.minimum_version = ssl.TLSVersion.TLSv1_2

        logger.debug("SSL verification enabled with TLS 1.2+ enforcement")
        return context

    def __init__(self, config: DongleConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize device API client.

        Args:
            config: Configuration for the device connection
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        self.config = config
        self.base_url = config.url.rstrip("/")
        self.verify_ssl = config.verify_ssl

        ssl_context = self._create_ssl_context(self.verify_ssl)

        # The cookie jar of this client carries the device session cookie.
        self.client = httpx.AsyncClient(
            verify=ssl_context if self.verify_ssl else False,
            timeout=httpx.Timeout(config.timeout, pool=5.0),
            headers={"User-Agent": config.user_agent},
            limits=httpx.Limits(
                max_keepalive_connections=2,
                max_connections=4,
                keepalive_expiry=30.0
            ),
            transport=transport,
        )

        self.limiter = (
            AsyncLimiter(config.max_requests_per_second, 1)
            if config.max_requests_per_second
            else None
        )

        self.token_fetcher = TokenFetcher(self.client, self.base_url, self.limiter)
        self.session = SessionManager(self.token_fetcher.acquire)
        self.pipeline = RequestPipeline(
            self.client,
            self.base_url,
            self.session,
            retry_engine=RetryEngine(config.retry_policy()),
            timeout=config.timeout,
            limiter=self.limiter,
        )

        self.auth = AuthApi(self.pipeline)
        self.device = DeviceApi(self.pipeline)
        self.monitoring = MonitoringApi(self.pipeline)
        self.network = NetworkApi(self.pipeline)
        self.sms = SmsApi(self.pipeline)
        self.dhcp = DhcpApi(self.pipeline)

        logger.info(
            f"Initialized device client for {self.base_url} "
            f"(SSL verification: {'enabled' if self.verify_ssl else 'DISABLED'})"
        )

    @classmethod
    def for_url(cls, url: str, **kwargs) -> "DongleClient":
        """Create a client from a URL and optional configuration overrides.

        Raises:
            ConfigurationError: If the URL or an override is invalid
        """
        transport = kwargs.pop("transport", None)
        try:
            config = DongleConfig(url=url, **kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")
        return cls(config, transport=transport)

    async def call(self, path: str, body: Optional[str] = None, authenticated: bool = True) -> str:
        """Run one logical API call; see ``RequestPipeline.call``."""
        return await self.pipeline.call(path, body, authenticated=authenticated)

    async def login(self, username: Optional[str] = None, password: Optional[str] = None):
        """Log in with the given credentials or the configured ones.

        Raises:
            ConfigurationError: If no credentials are given or configured
        """
        username = username if username is not None else self.config.username
        password = password if password is not None else self.config.password
        if not username or not password:
            raise ConfigurationError("Username and password are required to log in")
        await self.auth.login(username, password)

    async def logout(self):
        await self.auth.logout()

    async def is_authenticated(self) -> bool:
        return await self.session.is_authenticated()

    async def username(self) -> Optional[str]:
        return await self.session.username()

    async def session_state(self) -> SessionState:
        """Copy of the current session state."""
        return await self.session.snapshot()

    async def close(self):
        """Close the httpx client."""
        await self.client.aclose()

    async def __aenter__(self) -> "DongleClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
