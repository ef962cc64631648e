"""
Huawei Dongle Client - Session State Management

This module owns the CSRF token and authentication state shared by every request
made through one client. State is guarded by a reader/writer lock that is never
held across network I/O: token acquisition runs unlocked and the result is
committed under a short exclusive lock.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional

from .exceptions import SessionError
from .locks import AsyncRWLock

logger = logging.getLogger("huawei-dongle")

TokenAcquirer = Callable[[], Awaitable[str]]


@dataclass
class SessionState:
    """Authentication and CSRF token state of one client."""

    csrf_token: str | None = None
    is_authenticated: bool = False
    username: str | None = None
    last_auth_time: datetime | None = None


class SessionManager:
    """Managed session state with coroutine-safe access."""

    def __init__(self, acquire_token: TokenAcquirer):
        """Initialize session manager.

        Args:
            acquire_token: Coroutine function returning a fresh token from the device
        """
        self._acquire_token = acquire_token
        self._state = SessionState()
        self._lock = AsyncRWLock()

    async def get_token(self) -> str:
        """Get the current CSRF token, fetching one if none is cached."""
        async with self._lock.read():
            token = self._state.csrf_token
        if token:
            logger.debug("Using cached CSRF token")
            return token

        return await self.force_refresh()

    async def force_refresh(self) -> str:
        """Fetch a new token from the device and cache it, replacing any old one.

        Raises:
            SessionError: If the device did not hand out a token
        """
        token = await self._acquire_token()
        if not token:
            raise SessionError("Device returned an empty CSRF token")

        async with self._lock.write():
            self._state.csrf_token = token
        logger.debug("CSRF token refreshed")
        return token

    async def update_token(self, token: Optional[str]) -> bool:
        """Cache a token the device rotated through response headers.

        Returns:
            True if the cached token was replaced
        """
        if not token:
            return False
        async with self._lock.write():
            self._state.csrf_token = token
        return True

    async def invalidate(self):
        """Forget token and authentication; the next request re-acquires a token."""
        async with self._lock.write():
            self._state = SessionState()
        logger.debug("Session state cleared")

    async def mark_authenticated(self, username: str):
        """Record a successful login."""
        async with self._lock.write():
            self._state.is_authenticated = True
            self._state.username = username
            self._state.last_auth_time = datetime.now(timezone.utc)
        logger.debug(f"User '{username}' marked as authenticated")

    async def is_expired(self, max_age: timedelta) -> bool:
        """Check if the login is older than ``max_age`` (or never happened)."""
        async with self._lock.read():
            last_auth = self._state.last_auth_time
            authenticated = self._state.is_authenticated
        if not authenticated or last_auth is None:
            return True
        return datetime.now(timezone.utc) - last_auth > max_age

    async def is_authenticated(self) -> bool:
        async with self._lock.read():
            return self._state.is_authenticated

    async def username(self) -> Optional[str]:
        async with self._lock.read():
            return self._state.username

    async def last_auth_time(self) -> Optional[datetime]:
        async with self._lock.read():
            return self._state.last_auth_time

    async def snapshot(self) -> SessionState:
        """Return a copy of the current state."""
        async with self._lock.read():
            return replace(self._state)
