"""
Tests for Huawei Dongle Client session state management.

This module tests token caching, refresh, invalidation and authentication
bookkeeping of SessionManager.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from huawei_dongle.core.exceptions import SessionError
from huawei_dongle.core.session import SessionManager, SessionState


@pytest.mark.asyncio
class TestSessionTokens:
    """Test CSRF token handling."""

    async def test_get_token_fetches_once_and_caches(self):
        acquire = AsyncMock(return_value="token-1")
        session = SessionManager(acquire)

        assert await session.get_token() == "token-1"
        assert await session.get_token() == "token-1"
        assert acquire.call_count == 1

    async def test_concurrent_get_token_returns_a_valid_token(self):
        async def acquire():
            await asyncio.sleep(0.01)
            return "token-1"

        session = SessionManager(acquire)
        tokens = await asyncio.gather(*(session.get_token() for _ in range(10)))

        assert set(tokens) == {"token-1"}
        assert (await session.snapshot()).csrf_token == "token-1"

    async def test_force_refresh_replaces_token(self):
        acquire = AsyncMock(side_effect=["token-1", "token-2"])
        session = SessionManager(acquire)

        await session.get_token()
        assert await session.force_refresh() == "token-2"
        assert await session.get_token() == "token-2"

    async def test_force_refresh_rejects_empty_token(self):
        session = SessionManager(AsyncMock(return_value=""))

        with pytest.raises(SessionError):
            await session.force_refresh()

    async def test_acquisition_failure_propagates(self):
        session = SessionManager(AsyncMock(side_effect=SessionError("no token")))

        with pytest.raises(SessionError):
            await session.get_token()
        assert (await session.snapshot()).csrf_token is None

    async def test_update_token(self):
        acquire = AsyncMock(return_value="token-1")
        session = SessionManager(acquire)

        assert await session.update_token("rotated") is True
        assert await session.get_token() == "rotated"
        acquire.assert_not_called()

    async def test_update_token_ignores_empty_value(self):
        session = SessionManager(AsyncMock(return_value="token-1"))
        await session.get_token()

        assert await session.update_token("") is False
        assert await session.update_token(None) is False
        assert await session.get_token() == "token-1"


@pytest.mark.asyncio
class TestSessionAuthentication:
    """Test authentication bookkeeping."""

    async def test_initial_state(self):
        session = SessionManager(AsyncMock())

        assert await session.is_authenticated() is False
        assert await session.username() is None
        assert await session.last_auth_time() is None
        assert await session.snapshot() == SessionState()

    async def test_mark_authenticated(self):
        session = SessionManager(AsyncMock())
        before = datetime.now(timezone.utc)

        await session.mark_authenticated("admin")

        assert await session.is_authenticated() is True
        assert await session.username() == "admin"
        assert await session.last_auth_time() >= before

    async def test_invalidate_clears_everything(self):
        acquire = AsyncMock(side_effect=["token-1", "token-2"])
        session = SessionManager(acquire)
        await session.get_token()
        await session.mark_authenticated("admin")

        await session.invalidate()

        assert await session.snapshot() == SessionState()
        assert await session.get_token() == "token-2"
        assert acquire.call_count == 2

    async def test_is_expired(self):
        session = SessionManager(AsyncMock())
        assert await session.is_expired(timedelta(minutes=5)) is True

        await session.mark_authenticated("admin")
        assert await session.is_expired(timedelta(minutes=5)) is False
        assert await session.is_expired(timedelta(seconds=-1)) is True

    async def test_snapshot_is_a_copy(self):
        session = SessionManager(AsyncMock())
        await session.mark_authenticated("admin")

        snapshot = await session.snapshot()
        snapshot.username = "someone-else"

        assert await session.username() == "admin"
