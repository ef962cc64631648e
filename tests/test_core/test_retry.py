"""
Tests for Huawei Dongle Client retry mechanism.

This module tests the retry logic with exponential backoff and jitter for
handling transient failures in API operations.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from huawei_dongle.core.exceptions import (
    ApiError,
    ClientError,
    ConfigurationError,
    InvalidPasswordError,
    ServerError,
    TransportError,
)
from huawei_dongle.core.retry import RetryEngine, RetryPolicy, retry_with_backoff


class TestRetryPolicy:
    """Test RetryPolicy class."""

    def test_default_policy(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.initial_delay == 0.5
        assert policy.max_delay == 30.0
        assert policy.backoff_multiplier == 2.0
        assert policy.jitter is True

    def test_exponential_delays(self):
        policy = RetryPolicy(initial_delay=0.1, backoff_multiplier=2.0, jitter=False)

        assert policy.compute_delay(0) == 0.1
        assert policy.compute_delay(1) == 0.2
        assert policy.compute_delay(2) == 0.4

    def test_delay_is_capped(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=5.0, jitter=False)

        assert policy.compute_delay(2) == 4.0
        assert policy.compute_delay(3) == 5.0
        assert policy.compute_delay(10) == 5.0

    def test_jitter_stays_within_bounds(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=60.0, jitter=True)

        for _ in range(200):
            delay = policy.compute_delay(1)
            assert 1.5 <= delay <= 2.5

    def test_jitter_never_exceeds_max_delay(self):
        policy = RetryPolicy(initial_delay=1.0, max_delay=1.0, jitter=True)

        with patch("huawei_dongle.core.retry.random.uniform", return_value=1.25):
            assert policy.compute_delay(0) == 1.0

    def test_jitter_can_shorten_delay(self):
        policy = RetryPolicy(initial_delay=1.0, jitter=True)

        with patch("huawei_dongle.core.retry.random.uniform", return_value=0.75):
            assert policy.compute_delay(0) == 0.75

    def test_zero_initial_delay(self):
        policy = RetryPolicy(initial_delay=0.0, jitter=False)

        assert policy.compute_delay(3) == 0.0

    def test_large_attempt_stays_at_max_delay(self):
        policy = RetryPolicy(initial_delay=0.01, max_delay=1.0, jitter=False)

        assert policy.base_delay(1099) == 1.0
        assert policy.compute_delay(10_000) == 1.0

    def test_initial_delay_above_max_delay(self):
        policy = RetryPolicy(initial_delay=5.0, max_delay=1.0, jitter=False)

        assert policy.compute_delay(0) == 1.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_attempts": 0},
            {"initial_delay": -1.0},
            {"max_delay": -1.0},
            {"backoff_multiplier": 1.0},
        ],
    )
    def test_invalid_policy(self, kwargs):
        with pytest.raises(ConfigurationError):
            RetryPolicy(**kwargs)


@pytest.mark.asyncio
class TestRetryEngine:
    """Test RetryEngine.execute."""

    async def test_successful_first_attempt(self):
        operation = AsyncMock(return_value="success")

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await RetryEngine().execute(operation)

        assert result == "success"
        assert operation.call_count == 1
        mock_sleep.assert_not_called()

    async def test_success_after_transient_failures(self):
        operation = AsyncMock(
            side_effect=[TransportError("timeout"), ServerError("HTTP 503"), "success"]
        )
        engine = RetryEngine(RetryPolicy(max_attempts=3, initial_delay=0.1, jitter=False))

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            result = await engine.execute(operation)

        assert result == "success"
        assert operation.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.1, 0.2]

    async def test_exhausts_attempts_and_raises_last_error(self):
        errors = [TransportError(f"failure {i}") for i in range(4)]
        operation = AsyncMock(side_effect=errors)
        engine = RetryEngine(RetryPolicy(max_attempts=4, initial_delay=0.1, jitter=False))

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(TransportError) as exc_info:
                await engine.execute(operation)

        assert exc_info.value is errors[-1]
        assert operation.call_count == 4
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.1, 0.2, 0.4]

    @pytest.mark.parametrize(
        "error",
        [
            ClientError("HTTP 404"),
            InvalidPasswordError("Password wrong"),
            ApiError(100002, "No support"),
        ],
    )
    async def test_non_retryable_error_fails_immediately(self, error):
        operation = AsyncMock(side_effect=error)
        engine = RetryEngine(RetryPolicy(max_attempts=5))

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(type(error)):
                await engine.execute(operation)

        assert operation.call_count == 1
        mock_sleep.assert_not_called()

    async def test_retryable_api_error_is_retried(self):
        operation = AsyncMock(side_effect=[ApiError(100004, "System busy", retryable=True), "ok"])

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock):
            result = await RetryEngine().execute(operation)

        assert result == "ok"
        assert operation.call_count == 2

    async def test_single_attempt_policy(self):
        operation = AsyncMock(side_effect=TransportError("down"))
        engine = RetryEngine(RetryPolicy(max_attempts=1))

        with pytest.raises(TransportError):
            await engine.execute(operation)

        assert operation.call_count == 1

    async def test_long_policy_runs_every_attempt(self):
        operation = AsyncMock(side_effect=TransportError("down"))
        engine = RetryEngine(
            RetryPolicy(max_attempts=1100, initial_delay=0.01, max_delay=1.0, jitter=False)
        )

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(TransportError):
                await engine.execute(operation)

        assert operation.call_count == 1100
        assert mock_sleep.call_args_list[-1].args[0] == 1.0

    async def test_unexpected_exceptions_propagate(self):
        operation = AsyncMock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError):
            await RetryEngine().execute(operation)

        assert operation.call_count == 1

    async def test_cancellation_during_backoff_propagates(self):
        operation = AsyncMock(side_effect=TransportError("down"))
        engine = RetryEngine(RetryPolicy(max_attempts=3, initial_delay=10.0, jitter=False))

        task = asyncio.ensure_future(engine.execute(operation))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert operation.call_count == 1


@pytest.mark.asyncio
class TestRetryWithBackoff:
    """Test retry_with_backoff helper."""

    async def test_passes_arguments(self):
        func = AsyncMock(return_value="result")

        result = await retry_with_backoff(func, "a", retry_policy=RetryPolicy(), key="value")

        assert result == "result"
        func.assert_called_once_with("a", key="value")

    async def test_retries_with_policy(self):
        func = AsyncMock(side_effect=[ServerError("HTTP 500"), "result"])

        with patch("huawei_dongle.core.retry.asyncio.sleep", new_callable=AsyncMock):
            result = await retry_with_backoff(func, retry_policy=RetryPolicy(max_attempts=2))

        assert result == "result"
        assert func.call_count == 2
