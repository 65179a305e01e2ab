"""
Retry Utilities Unit Tests
"""

from unittest.mock import AsyncMock, patch

import pytest

from rumbo.core.utils.retry import calculate_retry_delay, retry_with_backoff


class TestCalculateRetryDelay:
    def test_exponential(self):
        assert calculate_retry_delay(1, 1.0) == 1.0
        assert calculate_retry_delay(2, 1.0) == 2.0
        assert calculate_retry_delay(3, 1.0) == 4.0

    def test_constant(self):
        assert calculate_retry_delay(3, 0.5, exponential=False) == 0.5


class TestRetryWithBackoff:
    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self):
        func = AsyncMock(return_value="ok")

        result = await retry_with_backoff(func, max_attempts=3, base_delay=1.0, operation="ping")

        assert result == "ok"
        func.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        func = AsyncMock(side_effect=[OSError("refused"), OSError("refused"), "ok"])

        with patch("rumbo.core.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await retry_with_backoff(func, max_attempts=3, base_delay=1.0, operation="ping")

        assert result == "ok"
        assert func.await_count == 3
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausted(self):
        func = AsyncMock(side_effect=OSError("refused"))

        with patch("rumbo.core.utils.retry.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(RuntimeError) as exc_info:
                await retry_with_backoff(func, max_attempts=2, base_delay=0.1, operation="ping")

        assert isinstance(exc_info.value.__cause__, OSError)
        assert func.await_count == 2

    @pytest.mark.asyncio
    async def test_non_retryable_propagates(self):
        func = AsyncMock(side_effect=KeyError("x"))

        with pytest.raises(KeyError):
            await retry_with_backoff(
                func, max_attempts=3, base_delay=0.1, operation="ping", retry_on=(OSError,)
            )

        func.assert_awaited_once()
